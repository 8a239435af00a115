from .LoginQo import LoginQo
from .RegisterQo import RegisterQo

__all__ = ["LoginQo", "RegisterQo"]
