from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from Sociocrates.models.ClarifyingQuestion import ClarifyingQuestion


class ClarifyingQuestionService:
    """
    提供澄清提问记录的数据库操作。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_question(
        self, proposal_id: int, user_id: int, question: str, position: int, created_at: datetime
    ) -> ClarifyingQuestion:
        new_question = ClarifyingQuestion(
            proposal_id=proposal_id,
            user_id=user_id,
            question=question,
            position=position,
            created_at=created_at,
        )
        self.session.add(new_question)
        await self.session.flush()
        return new_question

    async def get_questions(self, proposal_id: int) -> Sequence[ClarifyingQuestion]:
        statement = (
            select(ClarifyingQuestion)
            .where(ClarifyingQuestion.proposal_id == proposal_id)
            .order_by(ClarifyingQuestion.created_at.asc(), ClarifyingQuestion.id.asc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()

    async def get_question_by_author(
        self, proposal_id: int, user_id: int
    ) -> Optional[ClarifyingQuestion]:
        statement = select(ClarifyingQuestion).where(
            ClarifyingQuestion.proposal_id == proposal_id,
            ClarifyingQuestion.user_id == user_id,
        )
        result = await self.session.exec(statement)
        return result.one_or_none()

    async def count_questions(self, proposal_id: int) -> int:
        result = await self.session.exec(
            select(func.count(ClarifyingQuestion.id)).where(  # type: ignore
                ClarifyingQuestion.proposal_id == proposal_id
            )
        )
        count = result.one_or_none()
        return count if count is not None else 0

    async def get_author_ids(self, proposal_id: int) -> set[int]:
        result = await self.session.exec(
            select(ClarifyingQuestion.user_id).where(
                ClarifyingQuestion.proposal_id == proposal_id
            )
        )
        return set(result.all())
