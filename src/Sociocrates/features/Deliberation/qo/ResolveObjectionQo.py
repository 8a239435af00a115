from pydantic import Field

from Sociocrates.share.BaseDto import BaseDto


class ResolveObjectionQo(BaseDto):
    """
    化解异议的查询对象
    """

    solution: str = Field(..., description="化解方案说明")
