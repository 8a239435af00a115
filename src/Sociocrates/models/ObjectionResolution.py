from datetime import datetime

from sqlmodel import Field, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.TimeUtils import TimeUtils


class ObjectionResolution(BaseModel, table=True):
    """
    异议化解记录表模型
    """

    __tablename__ = "objection_resolution"  # type: ignore

    objection_id: int = Field(foreign_key="objection.id", index=True, description="关联的异议ID")
    user_id: int = Field(foreign_key="users.id", description="化解操作人的用户ID")
    solution: str = Field(description="化解方案说明")
    created_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="化解时间",
    )
