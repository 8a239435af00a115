from Sociocrates.share.BaseDto import BaseDto


class StepTimingDto(BaseDto):
    """
    圈子的步骤时长配置（秒）
    """

    circle_id: int
    proposal_presentation: int
    clarifying_questions: int
    quick_reactions: int
    objections_round: int
    resolve_objections: int
    consent_round: int
    record_outcome: int
