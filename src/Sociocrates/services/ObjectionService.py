import logging
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from Sociocrates.models.Objection import Objection
from Sociocrates.models.ObjectionResolution import ObjectionResolution

logger = logging.getLogger(__name__)


class ObjectionService:
    """
    提供异议及其化解记录的数据库操作。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_objection(
        self,
        proposal_id: int,
        user_id: int,
        objection: str,
        severity: str,
        created_at: datetime,
    ) -> Objection:
        new_objection = Objection(
            proposal_id=proposal_id,
            user_id=user_id,
            objection=objection,
            severity=severity,
            created_at=created_at,
        )
        self.session.add(new_objection)
        await self.session.flush()
        return new_objection

    async def get_objection_by_id(self, objection_id: int) -> Optional[Objection]:
        """
        根据ID获取异议。
        """
        return await self.session.get(Objection, objection_id)

    async def get_objections_by_proposal_id(self, proposal_id: int) -> Sequence[Objection]:
        """
        根据提案ID获取所有相关的异议
        """
        statement = (
            select(Objection)
            .where(Objection.proposal_id == proposal_id)
            .order_by(Objection.created_at.asc(), Objection.id.asc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()

    async def get_open_objection_by_author(
        self, proposal_id: int, user_id: int
    ) -> Optional[Objection]:
        statement = select(Objection).where(
            Objection.proposal_id == proposal_id,
            Objection.user_id == user_id,
            Objection.is_resolved == False,  # noqa: E712
        )
        result = await self.session.exec(statement)
        return result.first()

    async def count_unresolved(self, proposal_id: int) -> int:
        result = await self.session.exec(
            select(func.count(Objection.id)).where(  # type: ignore
                Objection.proposal_id == proposal_id,
                Objection.is_resolved == False,  # noqa: E712
            )
        )
        count = result.one_or_none()
        return count if count is not None else 0

    async def get_author_ids(self, proposal_id: int) -> set[int]:
        result = await self.session.exec(
            select(Objection.user_id).where(Objection.proposal_id == proposal_id)
        )
        return set(result.all())

    async def resolve_objection(
        self, objection: Objection, resolver_id: int, solution: str, resolved_at: datetime
    ) -> ObjectionResolution:
        """
        将异议标记为已化解，并写入化解记录。
        """
        assert objection.id is not None
        objection.is_resolved = True
        self.session.add(objection)

        resolution = ObjectionResolution(
            objection_id=objection.id,
            user_id=resolver_id,
            solution=solution,
            created_at=resolved_at,
        )
        self.session.add(resolution)
        await self.session.flush()
        logger.debug(f"异议 {objection.id} 已由用户 {resolver_id} 化解。")
        return resolution

    async def get_resolutions(self, objection_id: int) -> Sequence[ObjectionResolution]:
        statement = (
            select(ObjectionResolution)
            .where(ObjectionResolution.objection_id == objection_id)
            .order_by(ObjectionResolution.created_at.asc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()
