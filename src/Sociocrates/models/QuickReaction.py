from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.TimeUtils import TimeUtils


class QuickReaction(BaseModel, table=True):
    """
    快速反应表模型
    """

    __tablename__ = "quick_reaction"  # type: ignore

    proposal_id: int = Field(foreign_key="proposal.id", index=True, description="关联的提案ID")
    user_id: int = Field(foreign_key="users.id", index=True, description="反应者的用户ID")
    reaction: str = Field(max_length=300, description="反应内容，不超过300字符")
    created_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="提交时间",
    )

    __table_args__ = (
        UniqueConstraint(
            "proposal_id",
            "user_id",
            name="uk_reaction_per_author",
        ),
    )
