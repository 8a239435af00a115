from pydantic import Field

from Sociocrates.share.BaseDto import BaseDto


class AddMemberQo(BaseDto):
    """
    添加圈子成员的查询对象
    """

    user_id: int = Field(..., description="要加入的用户ID")
    role: str = Field(default="participant", description="成员在圈子内的角色")
