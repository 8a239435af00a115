from datetime import datetime

from Sociocrates.share.BaseDto import BaseDto


class QuickReactionDto(BaseDto):
    id: int
    proposal_id: int
    user_id: int
    reaction: str
    created_at: datetime
