from datetime import datetime
from typing import Optional, Sequence

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from Sociocrates.models.QuickReaction import QuickReaction


class QuickReactionService:
    """
    提供快速反应记录的数据库操作。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_reaction(
        self, proposal_id: int, user_id: int, reaction: str, created_at: datetime
    ) -> QuickReaction:
        new_reaction = QuickReaction(
            proposal_id=proposal_id, user_id=user_id, reaction=reaction, created_at=created_at
        )
        self.session.add(new_reaction)
        await self.session.flush()
        return new_reaction

    async def get_reactions(self, proposal_id: int) -> Sequence[QuickReaction]:
        statement = (
            select(QuickReaction)
            .where(QuickReaction.proposal_id == proposal_id)
            .order_by(QuickReaction.created_at.asc(), QuickReaction.id.asc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()

    async def get_reaction_by_author(
        self, proposal_id: int, user_id: int
    ) -> Optional[QuickReaction]:
        statement = select(QuickReaction).where(
            QuickReaction.proposal_id == proposal_id, QuickReaction.user_id == user_id
        )
        result = await self.session.exec(statement)
        return result.one_or_none()

    async def get_author_ids(self, proposal_id: int) -> set[int]:
        result = await self.session.exec(
            select(QuickReaction.user_id).where(QuickReaction.proposal_id == proposal_id)
        )
        return set(result.all())
