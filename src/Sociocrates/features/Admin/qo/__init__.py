from .UpdateUserQo import UpdateUserQo

__all__ = ["UpdateUserQo"]
