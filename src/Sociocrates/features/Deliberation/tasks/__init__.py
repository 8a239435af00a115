from .AutoAdvancer import AutoAdvancer

__all__ = ["AutoAdvancer"]
