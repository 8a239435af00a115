from datetime import datetime

from sqlmodel import Field, text

from Sociocrates.models.BaseModel import BaseModel
from Sociocrates.share.enums.UserRole import UserRole
from Sociocrates.share.TimeUtils import TimeUtils


class User(BaseModel, table=True):
    """
    用户表模型
    """

    __tablename__ = "users"  # type: ignore

    email: str = Field(unique=True, index=True, max_length=255, description="登录邮箱")
    name: str = Field(max_length=255, description="显示名称")
    password_hash: str = Field(description="PBKDF2 密码散列")
    role: str = Field(
        default=UserRole.PARTICIPANT.value,
        index=True,
        description="全局角色: admin / participant / observer",
    )
    is_active: bool = Field(default=True, description="账户是否启用")
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
