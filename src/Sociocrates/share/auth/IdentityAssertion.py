import logging
from datetime import datetime, timedelta, timezone

import jwt

from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.DatabaseHandler import DatabaseHandler
from Sociocrates.share.enums.UserRole import UserRole
from Sociocrates.share.exceptions import Unauthenticated
from Sociocrates.share.UnitOfWork import UnitOfWork

logger = logging.getLogger(__name__)


class IdentityAssertion:
    """
    签发并验证访问令牌 (HS256 JWT)。

    令牌只携带 userId；角色在每次验证时从用户表读取，
    因此管理员修改角色或停用账户会立即生效。
    """

    ALGORITHM = "HS256"
    TOKEN_TTL = timedelta(days=7)

    def __init__(self, secret: str, db_handler: DatabaseHandler):
        if not secret:
            raise ValueError("JWT 密钥不能为空。")
        self._secret = secret
        self._db_handler = db_handler

    def issue_token(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {"userId": user_id, "iat": now, "exp": now + self.TOKEN_TTL}
        return jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)

    def decode(self, token: str) -> int:
        """
        校验令牌签名与有效期，返回其中的用户ID。

        Raises:
            Unauthenticated: 令牌无效、过期或缺少 userId。
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self.ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise Unauthenticated("访问令牌已过期。")
        except jwt.InvalidTokenError:
            raise Unauthenticated("访问令牌无效。")

        user_id = claims.get("userId")
        if not isinstance(user_id, int):
            raise Unauthenticated("访问令牌无效。")
        return user_id

    async def verify(self, token: str) -> AuthenticatedUser:
        """
        验证令牌并返回调用者的身份与角色。
        """
        user_id = self.decode(token)
        async with UnitOfWork(self._db_handler) as uow:
            user = await uow.user.get_user_by_id(user_id)
            if not user:
                raise Unauthenticated("用户不存在。")
            if not user.is_active:
                logger.info(f"已停用的用户 {user_id} 尝试访问。")
                raise Unauthenticated("账户已被停用。")
            return AuthenticatedUser(user_id=user_id, role=UserRole(user.role))
