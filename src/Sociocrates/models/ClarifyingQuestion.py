from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.TimeUtils import TimeUtils


class ClarifyingQuestion(BaseModel, table=True):
    """
    澄清提问表模型
    `position` 是提问在提案中的序号（从1开始），
    (proposal_id, position) 的唯一约束保证并发提交时不会超出上限。
    """

    __tablename__ = "clarifying_question"  # type: ignore

    proposal_id: int = Field(foreign_key="proposal.id", index=True, description="关联的提案ID")
    user_id: int = Field(foreign_key="users.id", index=True, description="提问者的用户ID")
    question: str = Field(description="提问内容")
    position: int = Field(description="提问在提案中的序号")
    created_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="提交时间",
    )

    __table_args__ = (
        UniqueConstraint(
            "proposal_id",
            "user_id",
            name="uk_question_per_author",
        ),
        UniqueConstraint(
            "proposal_id",
            "position",
            name="uk_question_position",
        ),
    )
