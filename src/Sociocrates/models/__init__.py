from .BaseModel import BaseModel
from .Circle import Circle
from .CircleMembership import CircleMembership
from .ClarifyingQuestion import ClarifyingQuestion
from .ConsentResponse import ConsentResponse
from .Objection import Objection
from .ObjectionResolution import ObjectionResolution
from .ProcessLog import ProcessLog
from .Proposal import Proposal
from .QuickReaction import QuickReaction
from .StepTiming import StepTiming
from .User import User

__all__ = [
    "BaseModel",
    "Circle",
    "CircleMembership",
    "ClarifyingQuestion",
    "ConsentResponse",
    "Objection",
    "ObjectionResolution",
    "ProcessLog",
    "Proposal",
    "QuickReaction",
    "StepTiming",
    "User",
]
