from typing import Optional

from Sociocrates.share.BaseDto import BaseDto


class UpdateDraftQo(BaseDto):
    """编辑草稿提案，未提供的字段保持不变。"""

    title: Optional[str] = None
    description: Optional[str] = None
