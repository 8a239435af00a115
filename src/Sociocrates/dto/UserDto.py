from datetime import datetime

from Sociocrates.share.BaseDto import BaseDto
from Sociocrates.share.enums.UserRole import UserRole


class UserDto(BaseDto):
    """
    用户的数据传输对象，不包含密码散列
    """

    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool
    created_at: datetime
