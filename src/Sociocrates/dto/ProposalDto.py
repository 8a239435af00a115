from datetime import datetime
from typing import Optional

from Sociocrates.share.BaseDto import BaseDto
from Sociocrates.share.enums.ConsentOutcome import ConsentOutcome
from Sociocrates.share.enums.ProcessStep import ProcessStep
from Sociocrates.share.enums.ProposalStatus import ProposalStatus


class ProposalDto(BaseDto):
    """
    提案的数据传输对象
    """

    id: int
    title: str
    description: str
    circle_id: int
    created_by: int
    status: ProposalStatus
    current_step: Optional[ProcessStep]
    step_start_time: Optional[datetime]
    step_end_time: Optional[datetime]
    is_active: bool
    outcome: Optional[ConsentOutcome]
    version: int
    created_at: datetime
    updated_at: datetime
