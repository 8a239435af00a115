from datetime import datetime

from sqlmodel import Field, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.enums.StepDuration import StepDuration
from Sociocrates.share.TimeUtils import TimeUtils


class StepTiming(BaseModel, table=True):
    """
    圈子级别的步骤时长配置表（单位：秒）
    每个圈子至多一行；不存在时使用 StepDuration 中的默认值。
    """

    __tablename__ = "step_timing"  # type: ignore

    circle_id: int = Field(foreign_key="circle.id", unique=True, description="关联的圈子ID")
    proposal_presentation: int = Field(default=int(StepDuration.PROPOSAL_PRESENTATION))
    clarifying_questions: int = Field(default=int(StepDuration.CLARIFYING_QUESTIONS))
    quick_reactions: int = Field(default=int(StepDuration.QUICK_REACTIONS))
    objections_round: int = Field(default=int(StepDuration.OBJECTIONS_ROUND))
    resolve_objections: int = Field(default=int(StepDuration.RESOLVE_OBJECTIONS))
    consent_round: int = Field(default=int(StepDuration.CONSENT_ROUND))
    record_outcome: int = Field(default=int(StepDuration.RECORD_OUTCOME))
    updated_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="最后更新时间",
    )
