import asyncio
import logging
from typing import List, Optional

from Sociocrates.share.SociocratesApp import SociocratesApp
from Sociocrates.share.UnitOfWork import UnitOfWork

from ..logic.ProposalLifecycle import ProposalLifecycle

logger = logging.getLogger(__name__)


class AutoAdvancer:
    """
    定期检查所有议事中的提案，并推进已满足条件的提案。
    """

    def __init__(self, app: SociocratesApp, interval_seconds: float = 60):
        self.app = app
        self.interval_seconds = interval_seconds
        self.lifecycle = ProposalLifecycle(app)
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.is_running:
            return
        logger.info(f"自动推进任务已启动，检查间隔 {self.interval_seconds} 秒。")
        self._task = asyncio.create_task(self._loop(), name="sociocrates-auto-advance")

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("自动推进任务已停止。")

    async def _loop(self):
        while True:
            await self.sweep()
            await asyncio.sleep(self.interval_seconds)

    async def sweep(self) -> List[int]:
        """
        执行一次检查。每个提案在独立的事务中推进，单个提案失败不影响其他提案。

        Returns:
            本次被推进的提案ID列表。
        """
        logger.debug("开始检查可自动推进的提案...")
        advanced: List[int] = []
        try:
            async with UnitOfWork(self.app.db_handler) as uow:
                proposal_ids = await uow.proposal.get_active_proposal_ids()
        except Exception as e:
            logger.error(f"获取议事中提案列表时发生严重错误: {e}", exc_info=True)
            return advanced

        for proposal_id in proposal_ids:
            try:
                if await self.lifecycle.auto_advance(proposal_id):
                    advanced.append(proposal_id)
            except Exception as e:
                logger.error(f"自动推进提案 {proposal_id} 时出错: {e}", exc_info=True)

        if advanced:
            logger.info(f"本次自动推进了 {len(advanced)} 个提案: {advanced}")
        return advanced
