from datetime import datetime

from Sociocrates.share.BaseDto import BaseDto
from Sociocrates.share.enums.ObjectionSeverity import ObjectionSeverity


class ObjectionDto(BaseDto):
    """
    异议的数据传输对象
    """

    id: int
    proposal_id: int
    user_id: int
    objection: str
    severity: ObjectionSeverity
    is_resolved: bool
    created_at: datetime
