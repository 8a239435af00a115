from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.TimeUtils import TimeUtils

if TYPE_CHECKING:
    from Sociocrates.models.CircleMembership import CircleMembership


class Circle(BaseModel, table=True):
    """
    圈子（委员会/子委员会）表模型
    """

    __tablename__ = "circle"  # type: ignore

    name: str = Field(max_length=255, description="圈子名称")
    description: Optional[str] = Field(default=None, description="圈子简介")
    created_by: int = Field(foreign_key="users.id", index=True, description="创建者的用户ID")
    is_active: bool = Field(default=True, description="圈子是否启用")
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

    # --- 关系定义 ---
    memberships: List["CircleMembership"] = Relationship(back_populates="circle")
