from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.TimeUtils import TimeUtils


class ProcessLog(BaseModel, table=True):
    """
    议事流程审计日志表
    """

    __tablename__ = "process_log"  # type: ignore

    proposal_id: int = Field(foreign_key="proposal.id", index=True, description="关联的提案ID")
    step: Optional[str] = Field(default=None, description="动作发生时提案所处的步骤")
    action: str = Field(max_length=255, description="动作名称，如 'advance'")
    user_id: Optional[int] = Field(
        default=None, foreign_key="users.id", description="操作人ID，自动推进时为空"
    )
    details: Dict[str, Any] = Field(
        default={}, sa_column=Column(JSON), description="动作的附加信息"
    )
    created_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="记录时间",
    )
