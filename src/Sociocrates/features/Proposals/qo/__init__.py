from .CreateProposalQo import CreateProposalQo
from .UpdateDraftQo import UpdateDraftQo

__all__ = ["CreateProposalQo", "UpdateDraftQo"]
