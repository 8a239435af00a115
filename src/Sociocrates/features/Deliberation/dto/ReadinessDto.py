from typing import Optional

from Sociocrates.share.BaseDto import BaseDto
from Sociocrates.share.enums.ProcessStep import ProcessStep


class ReadinessDto(BaseDto):
    """
    提案是否满足推进条件的评估结果。
    `reason` 说明满足条件的依据，未满足时为 None。
    """

    proposal_id: int
    current_step: Optional[ProcessStep]
    ready: bool
    reason: Optional[str] = None
    timer_expired: bool = False
    eligible_count: int = 0
    submitted_count: int = 0
