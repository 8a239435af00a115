from .ProposalLogic import ProposalLogic

__all__ = ["ProposalLogic"]
