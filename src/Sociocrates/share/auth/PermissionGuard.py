from typing import Optional

from Sociocrates.models.CircleMembership import CircleMembership
from Sociocrates.models.Proposal import Proposal
from Sociocrates.share.enums.UserRole import UserRole
from Sociocrates.share.exceptions import Forbidden
from Sociocrates.share.UnitOfWork import UnitOfWork


class PermissionGuard:
    """
    集中处理角色与所有权相关的权限检查。
    """

    @staticmethod
    def require_admin(role: Optional[UserRole], message: str = "只有管理员可以执行此操作。"):
        if role != UserRole.ADMIN:
            raise Forbidden(message)

    @staticmethod
    def can_manage_proposal(proposal: Proposal, user_id: Optional[int], role: Optional[UserRole]) -> bool:
        """
        检查用户是否可以管理提案。
        满足以下任一条件即可：
        1. 用户是管理员。
        2. 用户是提案的发起人。
        """
        if role == UserRole.ADMIN:
            return True
        return user_id is not None and proposal.created_by == user_id

    @staticmethod
    async def ensure_circle_access(
        uow: UnitOfWork, circle_id: int, user_id: int, role: UserRole
    ) -> Optional[CircleMembership]:
        """
        非管理员只能访问自己所在的圈子。

        Returns:
            用户在该圈子中的成员关系；管理员不在圈子中时返回 None。
        """
        membership = await uow.circle.get_membership(circle_id, user_id)
        if membership is None and role != UserRole.ADMIN:
            raise Forbidden("你不是该圈子的成员。")
        return membership

    @staticmethod
    async def ensure_can_submit(
        uow: UnitOfWork, circle_id: int, user_id: int, role: UserRole
    ) -> None:
        """
        提交步骤内容的权限：观察者不能提交；
        非管理员必须是圈子成员，且圈内角色不是观察者。
        """
        if role == UserRole.OBSERVER:
            raise Forbidden("观察者只能查看，不能提交内容。")

        membership = await PermissionGuard.ensure_circle_access(uow, circle_id, user_id, role)
        if membership is not None and membership.role == UserRole.OBSERVER.value:
            raise Forbidden("你在该圈子中是观察者，不能提交内容。")
