from .SociocratesError import (
    CapacityExceeded,
    Conflict,
    DuplicateSubmission,
    Forbidden,
    IncompleteData,
    InvalidState,
    InvalidStep,
    NotFound,
    SociocratesError,
    Unauthenticated,
    ValidationError,
)

__all__ = [
    "CapacityExceeded",
    "Conflict",
    "DuplicateSubmission",
    "Forbidden",
    "IncompleteData",
    "InvalidState",
    "InvalidStep",
    "NotFound",
    "SociocratesError",
    "Unauthenticated",
    "ValidationError",
]
