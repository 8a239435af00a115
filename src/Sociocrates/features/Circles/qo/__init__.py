from .AddMemberQo import AddMemberQo
from .CreateCircleQo import CreateCircleQo
from .UpdateStepTimingQo import UpdateStepTimingQo

__all__ = ["AddMemberQo", "CreateCircleQo", "UpdateStepTimingQo"]
