from enum import IntEnum
from typing import Dict

from .ProcessStep import ProcessStep


class StepDuration(IntEnum):
    """
    定义每个议事步骤的默认持续时间（以秒为单位）。
    圈子可以通过 StepTiming 覆盖这些值。
    """

    PROPOSAL_PRESENTATION = 300
    CLARIFYING_QUESTIONS = 600
    QUICK_REACTIONS = 300
    OBJECTIONS_ROUND = 600
    RESOLVE_OBJECTIONS = 900
    CONSENT_ROUND = 300
    RECORD_OUTCOME = 180

    @classmethod
    def defaults(cls) -> Dict[ProcessStep, int]:
        return {step: int(cls[step.name]) for step in ProcessStep}
