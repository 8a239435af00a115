from .ConsentAggregator import ConsentAggregator
from .ProposalLifecycle import ProposalLifecycle
from .StepLedger import StepLedger

__all__ = ["ConsentAggregator", "ProposalLifecycle", "StepLedger"]
