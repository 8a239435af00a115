from .AdvanceQo import AdvanceQo
from .ResolveObjectionQo import ResolveObjectionQo
from .SetStepQo import SetStepQo
from .SubmitArtifactQo import SubmitArtifactQo

__all__ = ["AdvanceQo", "ResolveObjectionQo", "SetStepQo", "SubmitArtifactQo"]
