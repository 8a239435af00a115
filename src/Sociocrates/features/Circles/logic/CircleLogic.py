import logging
from typing import List

from sqlalchemy.exc import IntegrityError

from Sociocrates.dto import CircleDto, CircleMembershipDto, ProposalDto, StepTimingDto
from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.auth.PermissionGuard import PermissionGuard
from Sociocrates.share.enums import ProcessStep, UserRole
from Sociocrates.share.exceptions import Conflict, Forbidden, NotFound, ValidationError
from Sociocrates.share.SociocratesApp import SociocratesApp
from Sociocrates.share.UnitOfWork import UnitOfWork

from ..qo import AddMemberQo, CreateCircleQo, UpdateStepTimingQo

logger = logging.getLogger(__name__)


class CircleLogic:
    """
    处理圈子、成员关系与步骤时长配置的业务逻辑。
    """

    def __init__(self, app: SociocratesApp):
        self.app = app

    async def list_circles(self, user: AuthenticatedUser) -> List[CircleDto]:
        """管理员看到全部圈子，其他用户只看到自己所在的圈子。"""
        async with UnitOfWork(self.app.db_handler) as uow:
            if user.is_admin:
                circles = await uow.circle.get_all_circles()
            else:
                circles = await uow.circle.get_user_circles(user.user_id)
            return [CircleDto.model_validate(c) for c in circles]

    async def create_circle(self, user: AuthenticatedUser, qo: CreateCircleQo) -> CircleDto:
        PermissionGuard.require_admin(user.role, "只有管理员可以创建圈子。")
        name = (qo.name or "").strip()
        if not name:
            raise ValidationError("圈子名称不能为空。")

        async with UnitOfWork(self.app.db_handler) as uow:
            circle = await uow.circle.create_circle(name, qo.description, user.user_id)
            assert circle.id is not None
            await uow.circle.add_member(
                circle.id, user.user_id, UserRole.ADMIN.value, self.app.time_utils.now()
            )
            circle_dto = CircleDto.model_validate(circle)
            circle_dto.member_count = 1
            await uow.commit()

        logger.info(f"管理员 {user.user_id} 创建了圈子 {circle_dto.id} ({name})。")
        return circle_dto

    async def get_circle(self, user: AuthenticatedUser, circle_id: int) -> CircleDto:
        async with UnitOfWork(self.app.db_handler) as uow:
            circle = await uow.circle.get_circle_with_members(circle_id)
            if not circle:
                raise NotFound(f"未找到ID为 {circle_id} 的圈子。")
            await PermissionGuard.ensure_circle_access(uow, circle_id, user.user_id, user.role)

            circle_dto = CircleDto.model_validate(circle)
            circle_dto.member_count = len(circle.memberships)
            return circle_dto

    async def add_member(
        self, user: AuthenticatedUser, circle_id: int, qo: AddMemberQo
    ) -> CircleMembershipDto:
        """
        将用户加入圈子。全局管理员或该圈子的管理员成员可以操作。
        """
        try:
            role = UserRole(qo.role)
        except ValueError:
            raise ValidationError(f"无效的圈内角色: '{qo.role}'。")

        async with UnitOfWork(self.app.db_handler) as uow:
            await self._ensure_circle_admin(uow, circle_id, user)
            if not await uow.user.get_user_by_id(qo.user_id):
                raise NotFound(f"未找到ID为 {qo.user_id} 的用户。")
            if await uow.circle.get_membership(circle_id, qo.user_id):
                raise Conflict("该用户已经是圈子成员。")

            try:
                membership = await uow.circle.add_member(
                    circle_id, qo.user_id, role.value, self.app.time_utils.now()
                )
            except IntegrityError:
                await uow.rollback()
                raise Conflict("该用户已经是圈子成员。")

            membership_dto = CircleMembershipDto.model_validate(membership)
            await uow.commit()

        logger.info(f"用户 {qo.user_id} 已被 {user.user_id} 加入圈子 {circle_id}，角色: {role.value}")
        return membership_dto

    async def list_members(
        self, user: AuthenticatedUser, circle_id: int
    ) -> List[CircleMembershipDto]:
        async with UnitOfWork(self.app.db_handler) as uow:
            await self._get_circle(uow, circle_id)
            await PermissionGuard.ensure_circle_access(uow, circle_id, user.user_id, user.role)
            members = await uow.circle.get_members(circle_id)
            return [CircleMembershipDto.model_validate(m) for m in members]

    async def get_step_timings(self, user: AuthenticatedUser, circle_id: int) -> StepTimingDto:
        async with UnitOfWork(self.app.db_handler) as uow:
            await self._get_circle(uow, circle_id)
            await PermissionGuard.ensure_circle_access(uow, circle_id, user.user_id, user.role)
            durations = await uow.step_timing.get_durations(circle_id)
            return StepTimingDto(
                circle_id=circle_id, **{step.value: seconds for step, seconds in durations.items()}
            )

    async def update_step_timings(
        self, user: AuthenticatedUser, circle_id: int, qo: UpdateStepTimingQo
    ) -> StepTimingDto:
        """
        更新圈子的步骤时长。新时长只影响之后开启的步骤窗口。
        """
        PermissionGuard.require_admin(user.role, "只有管理员可以修改步骤时长。")

        changes = {}
        for step in ProcessStep:
            seconds = getattr(qo, step.value)
            if seconds is None:
                continue
            if seconds <= 0:
                raise ValidationError(f"步骤 '{step.value}' 的时长必须为正整数。")
            changes[step] = seconds

        async with UnitOfWork(self.app.db_handler) as uow:
            await self._get_circle(uow, circle_id)
            durations = await uow.step_timing.get_durations(circle_id)
            durations.update(changes)
            timing = await uow.step_timing.upsert_step_timing(circle_id, durations)
            timing_dto = StepTimingDto.model_validate(timing)
            await uow.commit()

        logger.info(f"管理员 {user.user_id} 更新了圈子 {circle_id} 的步骤时长: {durations}")
        return timing_dto

    async def list_circle_proposals(
        self, user: AuthenticatedUser, circle_id: int
    ) -> List[ProposalDto]:
        async with UnitOfWork(self.app.db_handler) as uow:
            await self._get_circle(uow, circle_id)
            await PermissionGuard.ensure_circle_access(uow, circle_id, user.user_id, user.role)
            proposals = await uow.proposal.get_proposals_by_circle(circle_id)
            return [ProposalDto.model_validate(p) for p in proposals]

    # --- 内部实现 ---

    @staticmethod
    async def _get_circle(uow: UnitOfWork, circle_id: int):
        circle = await uow.circle.get_circle_by_id(circle_id)
        if not circle:
            raise NotFound(f"未找到ID为 {circle_id} 的圈子。")
        return circle

    async def _ensure_circle_admin(self, uow: UnitOfWork, circle_id: int, user: AuthenticatedUser):
        await self._get_circle(uow, circle_id)
        if user.is_admin:
            return
        membership = await uow.circle.get_membership(circle_id, user.user_id)
        if membership is None or membership.role != UserRole.ADMIN.value:
            raise Forbidden("只有管理员可以管理圈子成员。")
