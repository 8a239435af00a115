import logging

from sqlalchemy.exc import IntegrityError

from Sociocrates.dto.UserDto import UserDto
from Sociocrates.share.auth.PasswordHasher import PasswordHasher
from Sociocrates.share.enums.UserRole import UserRole
from Sociocrates.share.exceptions import NotFound, Unauthenticated, ValidationError
from Sociocrates.share.SociocratesApp import SociocratesApp
from Sociocrates.share.UnitOfWork import UnitOfWork

from ..dto.AuthResultDto import AuthResultDto
from ..qo.LoginQo import LoginQo
from ..qo.RegisterQo import RegisterQo

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class AuthLogic:
    """
    处理注册、登录与当前用户查询的业务逻辑。
    """

    def __init__(self, app: SociocratesApp):
        self.app = app

    @staticmethod
    def _normalize_email(email: str) -> str:
        return (email or "").strip().lower()

    async def register(self, qo: RegisterQo) -> AuthResultDto:
        """
        注册新用户。
        注册时不接受客户端指定角色：系统中的第一个用户成为管理员，其余用户为普通参与者。
        """
        email = self._normalize_email(qo.email)
        name = (qo.name or "").strip()
        if "@" not in email:
            raise ValidationError("请输入有效的邮箱地址。")
        if not name:
            raise ValidationError("名称不能为空。")
        if len(qo.password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"密码长度至少为 {MIN_PASSWORD_LENGTH} 个字符。")

        async with UnitOfWork(self.app.db_handler) as uow:
            if await uow.user.get_user_by_email(email):
                raise ValidationError("该邮箱已被注册。")

            role = UserRole.PARTICIPANT
            if await uow.user.count_users() == 0:
                role = UserRole.ADMIN

            try:
                user = await uow.user.create_user(
                    email=email,
                    name=name,
                    password_hash=PasswordHasher.hash(qo.password),
                    role=role.value,
                )
            except IntegrityError:
                await uow.rollback()
                raise ValidationError("该邮箱已被注册。")

            user_dto = UserDto.model_validate(user)
            await uow.commit()

        logger.info(f"新用户 {user_dto.id} ({email}) 注册成功，角色: {role.value}")
        return AuthResultDto(user=user_dto, token=self.app.identity.issue_token(user_dto.id))

    async def login(self, qo: LoginQo) -> AuthResultDto:
        email = self._normalize_email(qo.email)
        async with UnitOfWork(self.app.db_handler) as uow:
            user = await uow.user.get_user_by_email(email)
            if not user or not PasswordHasher.verify(qo.password or "", user.password_hash):
                logger.debug(f"邮箱 {email} 登录失败：凭据无效。")
                raise Unauthenticated("邮箱或密码错误。")
            if not user.is_active:
                raise Unauthenticated("账户已被停用。")
            user_dto = UserDto.model_validate(user)

        return AuthResultDto(user=user_dto, token=self.app.identity.issue_token(user_dto.id))

    async def me(self, user_id: int) -> UserDto:
        async with UnitOfWork(self.app.db_handler) as uow:
            user = await uow.user.get_user_by_id(user_id)
            if not user:
                raise NotFound("用户不存在。")
            return UserDto.model_validate(user)
