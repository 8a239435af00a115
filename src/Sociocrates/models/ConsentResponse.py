from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.TimeUtils import TimeUtils


class ConsentResponse(BaseModel, table=True):
    """
    同意轮回应表模型
    """

    __tablename__ = "consent_response"  # type: ignore

    proposal_id: int = Field(foreign_key="proposal.id", index=True, description="关联的提案ID")
    user_id: int = Field(foreign_key="users.id", index=True, description="回应者的用户ID")
    choice: str = Field(
        description="选择: consent / consent_with_reservations / withhold_consent"
    )
    reason: Optional[str] = Field(default=None, description="理由，非直接同意时必填")
    created_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="提交时间",
    )

    __table_args__ = (
        UniqueConstraint(
            "proposal_id",
            "user_id",
            name="uk_consent_per_author",
        ),
    )
