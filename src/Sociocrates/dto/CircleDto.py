from datetime import datetime
from typing import Optional

from Sociocrates.share.BaseDto import BaseDto


class CircleDto(BaseDto):
    """
    圈子的数据传输对象
    """

    id: int
    name: str
    description: Optional[str]
    created_by: int
    is_active: bool
    created_at: datetime
    member_count: Optional[int] = None
