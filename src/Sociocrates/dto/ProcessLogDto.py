from datetime import datetime
from typing import Any, Dict, Optional

from Sociocrates.share.BaseDto import BaseDto
from Sociocrates.share.enums.ProcessStep import ProcessStep


class ProcessLogDto(BaseDto):
    """
    审计日志条目的数据传输对象
    """

    id: int
    proposal_id: int
    step: Optional[ProcessStep]
    action: str
    user_id: Optional[int]
    details: Dict[str, Any]
    created_at: datetime
