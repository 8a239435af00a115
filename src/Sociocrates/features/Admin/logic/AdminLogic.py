import logging
from typing import List

from Sociocrates.dto.UserDto import UserDto
from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.auth.PermissionGuard import PermissionGuard
from Sociocrates.share.enums.UserRole import UserRole
from Sociocrates.share.exceptions import InvalidState, NotFound, ValidationError
from Sociocrates.share.SociocratesApp import SociocratesApp
from Sociocrates.share.UnitOfWork import UnitOfWork

from ..qo import UpdateUserQo

logger = logging.getLogger(__name__)


class AdminLogic:
    """
    管理员的用户管理操作。
    """

    def __init__(self, app: SociocratesApp):
        self.app = app

    async def list_users(self, actor: AuthenticatedUser) -> List[UserDto]:
        PermissionGuard.require_admin(actor.role)
        async with UnitOfWork(self.app.db_handler) as uow:
            users = await uow.user.get_all_users()
            return [UserDto.model_validate(u) for u in users]

    async def update_user(
        self, actor: AuthenticatedUser, user_id: int, qo: UpdateUserQo
    ) -> UserDto:
        """
        修改用户的名称、全局角色或启用状态。
        角色变更在该用户下一次请求时立即生效。
        """
        PermissionGuard.require_admin(actor.role)

        role = None
        if qo.role is not None:
            try:
                role = UserRole(qo.role)
            except ValueError:
                raise ValidationError(f"无效的角色: '{qo.role}'。")

        name = None
        if qo.name is not None:
            name = qo.name.strip()
            if not name:
                raise ValidationError("名称不能为空。")

        if user_id == actor.user_id and (
            qo.is_active is False or (role is not None and role != UserRole.ADMIN)
        ):
            raise InvalidState("管理员不能停用自己或撤销自己的管理员角色。")

        async with UnitOfWork(self.app.db_handler) as uow:
            user = await uow.user.get_user_by_id(user_id)
            if not user:
                raise NotFound(f"未找到ID为 {user_id} 的用户。")

            user = await uow.user.update_user(
                user,
                name=name,
                role=role.value if role else None,
                is_active=qo.is_active,
                updated_at=self.app.time_utils.now(),
            )
            user_dto = UserDto.model_validate(user)
            await uow.commit()

        logger.info(
            f"管理员 {actor.user_id} 更新了用户 {user_id}: "
            f"name={name}, role={role.value if role else None}, is_active={qo.is_active}"
        )
        return user_dto
