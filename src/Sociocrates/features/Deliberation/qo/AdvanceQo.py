from typing import Optional

from pydantic import Field

from Sociocrates.share.BaseDto import BaseDto


class AdvanceQo(BaseDto):
    """
    推进提案步骤的查询对象
    """

    expected_version: Optional[int] = Field(
        default=None, description="调用方看到的提案版本号，版本不一致时返回冲突"
    )
