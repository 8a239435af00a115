from Sociocrates.share.BaseDto import BaseDto
from Sociocrates.share.enums.ConsentOutcome import ConsentOutcome


class OutcomeDto(BaseDto):
    """
    同意轮结果的统计与分类
    """

    proposal_id: int
    outcome: ConsentOutcome
    consent: int
    consent_with_reservations: int
    withhold_consent: int
    unresolved_objections: int
