from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.enums.UserRole import UserRole
from Sociocrates.share.TimeUtils import TimeUtils

if TYPE_CHECKING:
    from Sociocrates.models.Circle import Circle


class CircleMembership(BaseModel, table=True):
    """
    圈子成员关系表模型
    成员在圈子内的角色可以覆盖其全局角色（例如限制为观察者）。
    """

    __tablename__ = "circle_membership"  # type: ignore

    circle_id: int = Field(foreign_key="circle.id", index=True, description="关联的圈子ID")
    user_id: int = Field(foreign_key="users.id", index=True, description="成员的用户ID")
    role: str = Field(default=UserRole.PARTICIPANT.value, description="成员在圈子内的角色")
    joined_at: datetime = Field(
        default_factory=TimeUtils.utcnow,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="加入时间，用于确定步骤开始时的投票资格",
    )

    # --- 关系定义 ---
    circle: Optional["Circle"] = Relationship(back_populates="memberships")

    __table_args__ = (
        UniqueConstraint(
            "circle_id",
            "user_id",
            name="uk_circle_membership",
        ),
    )
