from typing import Optional

from Sociocrates.share.BaseDto import BaseDto


class UpdateStepTimingQo(BaseDto):
    """
    更新圈子步骤时长（秒）的查询对象，未提供的步骤保持不变。
    """

    proposal_presentation: Optional[int] = None
    clarifying_questions: Optional[int] = None
    quick_reactions: Optional[int] = None
    objections_round: Optional[int] = None
    resolve_objections: Optional[int] = None
    consent_round: Optional[int] = None
    record_outcome: Optional[int] = None
