from typing import Union

from .CircleDto import CircleDto
from .CircleMembershipDto import CircleMembershipDto
from .ClarifyingQuestionDto import ClarifyingQuestionDto
from .ConsentResponseDto import ConsentResponseDto
from .ObjectionDto import ObjectionDto
from .ObjectionResolutionDto import ObjectionResolutionDto
from .ProcessLogDto import ProcessLogDto
from .ProposalDto import ProposalDto
from .QuickReactionDto import QuickReactionDto
from .StepTimingDto import StepTimingDto
from .UserDto import UserDto

# 四种步骤提交记录的统称
StepArtifactDto = Union[
    ClarifyingQuestionDto, QuickReactionDto, ObjectionDto, ConsentResponseDto
]

__all__ = [
    "CircleDto",
    "CircleMembershipDto",
    "ClarifyingQuestionDto",
    "ConsentResponseDto",
    "ObjectionDto",
    "ObjectionResolutionDto",
    "ProcessLogDto",
    "ProposalDto",
    "QuickReactionDto",
    "StepArtifactDto",
    "StepTimingDto",
    "UserDto",
]
