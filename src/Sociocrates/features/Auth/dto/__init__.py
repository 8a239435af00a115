from .AuthResultDto import AuthResultDto

__all__ = ["AuthResultDto"]
