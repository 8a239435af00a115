from datetime import datetime
from typing import Optional

from Sociocrates.share.BaseDto import BaseDto
from Sociocrates.share.enums.ConsentChoice import ConsentChoice


class ConsentResponseDto(BaseDto):
    id: int
    proposal_id: int
    user_id: int
    choice: ConsentChoice
    reason: Optional[str]
    created_at: datetime
