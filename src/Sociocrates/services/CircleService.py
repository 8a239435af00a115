import logging
from datetime import datetime
from typing import Dict, Optional, Sequence, Set

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from Sociocrates.models.Circle import Circle
from Sociocrates.models.CircleMembership import CircleMembership
from Sociocrates.models.User import User
from Sociocrates.share.enums.UserRole import UserRole

logger = logging.getLogger(__name__)


class CircleService:
    """
    提供处理圈子及成员关系相关数据库操作的服务。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_circle(
        self, name: str, description: Optional[str], created_by: int
    ) -> Circle:
        new_circle = Circle(name=name, description=description, created_by=created_by)
        self.session.add(new_circle)
        await self.session.flush()
        return new_circle

    async def get_circle_by_id(self, circle_id: int) -> Optional[Circle]:
        return await self.session.get(Circle, circle_id)

    async def get_circle_with_members(self, circle_id: int) -> Optional[Circle]:
        """获取圈子及其成员关系（预加载，避免异步环境下的惰性加载）。"""
        statement = (
            select(Circle)
            .where(Circle.id == circle_id)
            .options(selectinload(Circle.memberships))  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.one_or_none()

    async def get_all_circles(self) -> Sequence[Circle]:
        statement = select(Circle).order_by(Circle.id.asc())  # type: ignore
        result = await self.session.exec(statement)
        return result.all()

    async def get_user_circles(self, user_id: int) -> Sequence[Circle]:
        statement = (
            select(Circle)
            .join(CircleMembership, CircleMembership.circle_id == Circle.id)  # type: ignore
            .where(CircleMembership.user_id == user_id)
            .order_by(Circle.id.asc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()

    async def add_member(
        self, circle_id: int, user_id: int, role: str, joined_at: datetime
    ) -> CircleMembership:
        """
        添加圈子成员。重复添加会因唯一约束抛出 IntegrityError，由调用方处理。
        """
        membership = CircleMembership(
            circle_id=circle_id, user_id=user_id, role=role, joined_at=joined_at
        )
        self.session.add(membership)
        await self.session.flush()
        logger.debug(f"用户 {user_id} 已加入圈子 {circle_id}，圈内角色: {role}")
        return membership

    async def get_membership(self, circle_id: int, user_id: int) -> Optional[CircleMembership]:
        statement = select(CircleMembership).where(
            CircleMembership.circle_id == circle_id, CircleMembership.user_id == user_id
        )
        result = await self.session.exec(statement)
        return result.one_or_none()

    async def get_members(self, circle_id: int) -> Sequence[CircleMembership]:
        statement = (
            select(CircleMembership)
            .where(CircleMembership.circle_id == circle_id)
            .order_by(CircleMembership.joined_at.asc(), CircleMembership.id.asc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()

    async def get_participant_join_times(self, circle_id: int) -> Dict[int, datetime]:
        """获取圈内非观察者成员的加入时间，键为用户ID。"""
        statement = select(CircleMembership.user_id, CircleMembership.joined_at).where(
            CircleMembership.circle_id == circle_id,
            CircleMembership.role != UserRole.OBSERVER.value,
        )
        result = await self.session.exec(statement)
        return {user_id: joined_at for user_id, joined_at in result.all()}

    async def get_eligible_member_ids(self, circle_id: int, as_of: datetime) -> Set[int]:
        """
        获取在指定时间点之前加入、且有权提交内容的圈子成员ID集合。
        观察者（无论是全局角色还是圈内角色）和已停用的用户不计入。
        """
        statement = (
            select(CircleMembership.user_id)
            .join(User, User.id == CircleMembership.user_id)  # type: ignore
            .where(
                CircleMembership.circle_id == circle_id,
                CircleMembership.joined_at <= as_of,
                CircleMembership.role != UserRole.OBSERVER.value,
                User.role != UserRole.OBSERVER.value,
                User.is_active == True,  # noqa: E712
            )
        )
        result = await self.session.exec(statement)
        return set(result.all())
