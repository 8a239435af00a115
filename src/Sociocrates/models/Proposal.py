from datetime import datetime
from typing import Optional

from sqlmodel import Field, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.enums.ProposalStatus import ProposalStatus
from Sociocrates.share.TimeUtils import TimeUtils


class Proposal(BaseModel, table=True):
    """
    提案表模型
    """

    __tablename__ = "proposal"  # type: ignore

    title: str = Field(max_length=255, description="提案标题")
    description: str = Field(description="提案内容")
    circle_id: int = Field(foreign_key="circle.id", index=True, description="所属圈子ID")
    created_by: int = Field(foreign_key="users.id", index=True, description="提案发起人的用户ID")
    status: str = Field(
        default=ProposalStatus.DRAFT.value,
        index=True,
        description="提案状态: draft / active / pending_consent / resolved / archived",
    )
    current_step: Optional[str] = Field(
        default=None, description="当前议事步骤，激活之前为空"
    )
    step_start_time: Optional[datetime] = Field(default=None, description="当前步骤开始时间")
    step_end_time: Optional[datetime] = Field(
        default=None, description="当前步骤截止时间，为空表示不计时"
    )
    is_active: bool = Field(default=True, description="提案是否仍在使用中")
    outcome: Optional[str] = Field(default=None, description="议事结束后记录的结果分类")
    version: int = Field(default=0, description="乐观并发控制版本号，每次状态变化时递增")
    created_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="创建时间",
    )
    updated_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="最后更新时间",
    )
