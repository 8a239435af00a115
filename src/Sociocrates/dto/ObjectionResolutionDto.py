from datetime import datetime

from Sociocrates.share.BaseDto import BaseDto


class ObjectionResolutionDto(BaseDto):
    id: int
    objection_id: int
    user_id: int
    solution: str
    created_at: datetime
