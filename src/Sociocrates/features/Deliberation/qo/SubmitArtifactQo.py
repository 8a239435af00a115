from typing import Optional

from pydantic import Field

from Sociocrates.share.BaseDto import BaseDto


class SubmitArtifactQo(BaseDto):
    """
    提交步骤内容的查询对象。
    不同步骤使用不同字段，字段内容由 StepLedger 按步骤校验：
    - clarifying_questions: question
    - quick_reactions: reaction
    - objections_round: objection, severity
    - consent_round: choice, reason
    """

    question: Optional[str] = Field(default=None, description="澄清提问内容")
    reaction: Optional[str] = Field(default=None, description="快速反应内容")
    objection: Optional[str] = Field(default=None, description="异议内容")
    severity: Optional[str] = Field(default=None, description="异议严重程度")
    choice: Optional[str] = Field(default=None, description="同意轮的选择")
    reason: Optional[str] = Field(default=None, description="选择的理由")
