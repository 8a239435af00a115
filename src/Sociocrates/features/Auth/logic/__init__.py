from .AuthLogic import AuthLogic

__all__ = ["AuthLogic"]
