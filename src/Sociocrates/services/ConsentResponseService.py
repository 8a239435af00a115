from datetime import datetime
from typing import Optional, Sequence

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from Sociocrates.models.ConsentResponse import ConsentResponse


class ConsentResponseService:
    """
    提供同意轮回应记录的数据库操作。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_response(
        self,
        proposal_id: int,
        user_id: int,
        choice: str,
        reason: Optional[str],
        created_at: datetime,
    ) -> ConsentResponse:
        new_response = ConsentResponse(
            proposal_id=proposal_id,
            user_id=user_id,
            choice=choice,
            reason=reason,
            created_at=created_at,
        )
        self.session.add(new_response)
        await self.session.flush()
        return new_response

    async def get_responses(self, proposal_id: int) -> Sequence[ConsentResponse]:
        statement = (
            select(ConsentResponse)
            .where(ConsentResponse.proposal_id == proposal_id)
            .order_by(ConsentResponse.created_at.asc(), ConsentResponse.id.asc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()

    async def get_response_by_author(
        self, proposal_id: int, user_id: int
    ) -> Optional[ConsentResponse]:
        statement = select(ConsentResponse).where(
            ConsentResponse.proposal_id == proposal_id, ConsentResponse.user_id == user_id
        )
        result = await self.session.exec(statement)
        return result.one_or_none()

    async def get_author_ids(self, proposal_id: int) -> set[int]:
        result = await self.session.exec(
            select(ConsentResponse.user_id).where(ConsentResponse.proposal_id == proposal_id)
        )
        return set(result.all())
