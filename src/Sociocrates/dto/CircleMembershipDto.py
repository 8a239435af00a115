from datetime import datetime

from Sociocrates.share.BaseDto import BaseDto
from Sociocrates.share.enums.UserRole import UserRole


class CircleMembershipDto(BaseDto):
    """
    圈子成员关系的数据传输对象
    """

    id: int
    circle_id: int
    user_id: int
    role: UserRole
    joined_at: datetime
