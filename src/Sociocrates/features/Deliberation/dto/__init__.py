from .OutcomeDto import OutcomeDto
from .ReadinessDto import ReadinessDto
from .ResolveObjectionResultDto import ResolveObjectionResultDto

__all__ = ["OutcomeDto", "ReadinessDto", "ResolveObjectionResultDto"]
