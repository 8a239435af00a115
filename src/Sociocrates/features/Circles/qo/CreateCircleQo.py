from typing import Optional

from pydantic import Field

from Sociocrates.share.BaseDto import BaseDto


class CreateCircleQo(BaseDto):
    """
    创建圈子的查询对象
    """

    name: str = Field(..., description="圈子名称")
    description: Optional[str] = Field(default=None, description="圈子简介")
