from datetime import datetime

from Sociocrates.share.BaseDto import BaseDto


class ClarifyingQuestionDto(BaseDto):
    id: int
    proposal_id: int
    user_id: int
    question: str
    position: int
    created_at: datetime
