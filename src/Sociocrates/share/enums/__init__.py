from .ConsentChoice import ConsentChoice
from .ConsentOutcome import ConsentOutcome
from .ObjectionSeverity import ObjectionSeverity
from .ProcessStep import SUBMISSION_STEPS, ProcessStep
from .ProposalStatus import ProposalStatus
from .StepDuration import StepDuration
from .UserRole import UserRole

__all__ = [
    "ConsentChoice",
    "ConsentOutcome",
    "ObjectionSeverity",
    "ProcessStep",
    "ProposalStatus",
    "StepDuration",
    "SUBMISSION_STEPS",
    "UserRole",
]
