from pydantic import Field

from Sociocrates.share.BaseDto import BaseDto


class CreateProposalQo(BaseDto):
    """
    创建提案的查询对象
    """

    title: str = Field(..., description="提案标题")
    description: str = Field(..., description="提案内容")
    circle_id: int = Field(..., description="所属圈子ID")
