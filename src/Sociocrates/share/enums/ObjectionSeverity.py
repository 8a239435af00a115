from enum import Enum


class ObjectionSeverity(str, Enum):
    """异议的严重程度"""

    MINOR_CONCERN = "minor_concern"
    MAJOR_CONCERN = "major_concern"
    DEAL_BREAKER = "deal_breaker"
