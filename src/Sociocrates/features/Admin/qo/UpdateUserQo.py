from typing import Optional

from Sociocrates.share.BaseDto import BaseDto


class UpdateUserQo(BaseDto):
    """
    管理员修改用户的查询对象，未提供的字段保持不变。
    """

    name: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None
