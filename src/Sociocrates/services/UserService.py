import logging
from typing import Optional, Sequence

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from Sociocrates.models.User import User

logger = logging.getLogger(__name__)


class UserService:
    """
    提供处理用户相关数据库操作的服务。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, email: str, name: str, password_hash: str, role: str) -> User:
        new_user = User(email=email, name=name, password_hash=password_hash, role=role)
        self.session.add(new_user)
        await self.session.flush()
        logger.debug(f"已创建用户 {new_user.id} ({email})，角色: {role}")
        return new_user

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        result = await self.session.exec(statement)
        return result.one_or_none()

    async def get_all_users(self) -> Sequence[User]:
        statement = select(User).order_by(User.id.asc())  # type: ignore
        result = await self.session.exec(statement)
        return result.all()

    async def count_users(self) -> int:
        result = await self.session.exec(select(func.count(User.id)))  # type: ignore
        count = result.one_or_none()
        return count if count is not None else 0

    async def update_user(self, user: User, **values) -> User:
        """
        更新用户的可编辑字段（名称、角色、启用状态）。
        值为 None 的字段保持不变。
        """
        for key, value in values.items():
            if value is not None:
                setattr(user, key, value)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
