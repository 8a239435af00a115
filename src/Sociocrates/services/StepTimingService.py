from typing import Dict, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from Sociocrates.models.StepTiming import StepTiming
from Sociocrates.share.enums.ProcessStep import ProcessStep
from Sociocrates.share.enums.StepDuration import StepDuration
from Sociocrates.share.TimeUtils import TimeUtils


class StepTimingService:
    """
    提供圈子步骤时长配置的读取与更新。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_step_timing(self, circle_id: int) -> Optional[StepTiming]:
        statement = select(StepTiming).where(StepTiming.circle_id == circle_id)
        result = await self.session.exec(statement)
        return result.one_or_none()

    async def get_durations(self, circle_id: int) -> Dict[ProcessStep, int]:
        """
        返回圈子每个步骤的持续秒数；未配置时使用默认值。
        """
        timing = await self.get_step_timing(circle_id)
        if timing is None:
            return StepDuration.defaults()
        return {step: getattr(timing, step.value) for step in ProcessStep}

    async def upsert_step_timing(self, circle_id: int, durations: Dict[ProcessStep, int]) -> StepTiming:
        timing = await self.get_step_timing(circle_id)
        if timing is None:
            timing = StepTiming(circle_id=circle_id)
        for step, seconds in durations.items():
            setattr(timing, step.value, seconds)
        timing.updated_at = TimeUtils.utcnow()
        self.session.add(timing)
        await self.session.flush()
        return timing
