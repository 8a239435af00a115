from enum import Enum


class ConsentChoice(str, Enum):
    """同意轮中成员的选择"""

    CONSENT = "consent"
    CONSENT_WITH_RESERVATIONS = "consent_with_reservations"
    WITHHOLD_CONSENT = "withhold_consent"
