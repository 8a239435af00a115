from enum import Enum


class ConsentOutcome(str, Enum):
    """同意轮结束后的结果分类"""

    CONSENTED = "consented"
    CONSENTED_WITH_RESERVATIONS = "consented_with_reservations"
    BLOCKED = "blocked"
