from dataclasses import dataclass

from Sociocrates.share.enums.UserRole import UserRole


@dataclass(frozen=True)
class AuthenticatedUser:
    """
    通过身份验证的调用者。

    Attributes:
        user_id: 用户ID。
        role: 验证时从用户表读取的全局角色。
    """

    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
