from typing import Optional

from pydantic import Field

from Sociocrates.share.BaseDto import BaseDto


class SetStepQo(BaseDto):
    """
    管理员直接跳转步骤的查询对象
    """

    target_step: str = Field(..., description="目标步骤名称")
    expected_version: Optional[int] = Field(default=None, description="调用方看到的提案版本号")
