from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from Sociocrates.models.ProcessLog import ProcessLog


class ProcessLogService:
    """
    提供议事流程审计日志的写入与查询。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_entry(
        self,
        proposal_id: int,
        step: Optional[str],
        action: str,
        user_id: Optional[int],
        created_at: datetime,
        details: Optional[Dict[str, Any]] = None,
    ) -> ProcessLog:
        entry = ProcessLog(
            proposal_id=proposal_id,
            step=step,
            action=action,
            user_id=user_id,
            details=details or {},
            created_at=created_at,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_entries(self, proposal_id: int) -> Sequence[ProcessLog]:
        statement = (
            select(ProcessLog)
            .where(ProcessLog.proposal_id == proposal_id)
            .order_by(ProcessLog.created_at.asc(), ProcessLog.id.asc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()
