from .CircleLogic import CircleLogic

__all__ = ["CircleLogic"]
