from .AdminLogic import AdminLogic

__all__ = ["AdminLogic"]
