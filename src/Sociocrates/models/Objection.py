from datetime import datetime

from sqlalchemy import Index
from sqlmodel import Field, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.TimeUtils import TimeUtils


class Objection(BaseModel, table=True):
    """
    异议表模型
    """

    __tablename__ = "objection"  # type: ignore

    proposal_id: int = Field(foreign_key="proposal.id", index=True, description="关联的提案ID")
    user_id: int = Field(foreign_key="users.id", index=True, description="异议发起人的用户ID")
    objection: str = Field(description="异议内容")
    severity: str = Field(description="严重程度: minor_concern / major_concern / deal_breaker")
    is_resolved: bool = Field(default=False, index=True, description="异议是否已化解")
    created_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="提交时间",
    )

    # 每位成员在同一提案上最多只能有一条未化解的异议
    __table_args__ = (
        Index(
            "idx_open_objection_per_author",
            "proposal_id",
            "user_id",
            unique=True,
            sqlite_where=text("is_resolved = 0"),
            postgresql_where=text("NOT is_resolved"),
        ),
    )
