from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

if TYPE_CHECKING:
    from Sociocrates.services.CircleService import CircleService
    from Sociocrates.services.ClarifyingQuestionService import ClarifyingQuestionService
    from Sociocrates.services.ConsentResponseService import ConsentResponseService
    from Sociocrates.services.ObjectionService import ObjectionService
    from Sociocrates.services.ProcessLogService import ProcessLogService
    from Sociocrates.services.ProposalService import ProposalService
    from Sociocrates.services.QuickReactionService import QuickReactionService
    from Sociocrates.services.StepTimingService import StepTimingService
    from Sociocrates.services.UserService import UserService
    from Sociocrates.share.DatabaseHandler import DatabaseHandler


logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    一个实现了工作单元模式的异步上下文管理器。

    它封装了数据库会话和事务管理，并提供了对各个服务（仓库）的访问<br>
    这确保了在单个业务操作中的所有数据库更改要么一起提交，要么一起回滚。

    用法:<br>
    async with UnitOfWork(db_handler) as uow:<br>
        await uow.proposal.create_proposal(...)<br>
        await uow.commit()<br>
    """

    def __init__(self, db_handler: Optional["DatabaseHandler"]):
        self._db_handler = db_handler
        self._session: Optional[AsyncSession] = None
        self._committed = False

    async def __aenter__(self) -> "UnitOfWork":
        """在进入上下文时，获取一个新的数据库会话。"""
        if self._db_handler is None:
            raise RuntimeError(
                "UnitOfWork 在没有有效 DatabaseHandler 的情况下被使用。"
                "请确保 app.db_handler 已在启动时正确初始化。"
            )
        self._session = self._db_handler.get_session()
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, traceback):
        """
        在退出上下文时，根据是否发生异常来提交或回滚事务，并最终关闭会话。
        """
        if not self._session:
            return

        try:
            if exc_type:
                if not self._committed:
                    logger.debug(
                        f"UnitOfWork 检测到异常，正在回滚事务: {exc_type.__name__}: {exc_val}"
                    )
                    await self.rollback()
            else:
                if not self._committed:
                    await self.commit()
        finally:
            # 确保会话总是被关闭
            await self._session.close()
            self._session = None

    @property
    def session(self) -> AsyncSession:
        """获取当前的数据库会话。"""
        if self._session is None:
            raise RuntimeError("会话尚未初始化。请在 'async with' 块中使用 UnitOfWork。")
        return self._session

    async def commit(self):
        """提交当前事务。"""
        await self.session.commit()
        self._committed = True

    async def rollback(self):
        """回滚当前事务。"""
        await self.session.rollback()
        self._committed = True

    async def flush(self, objects=None):
        """
        将当前会话中的挂起更改刷新到数据库。
        这对于在提交前获取数据库生成的默认值（如自增ID）非常有用。
        """
        await self.session.flush(objects)

    # --- 服务/仓库访问属性 ---

    @property
    def user(self) -> "UserService":
        """获取用户服务实例。"""
        if not hasattr(self, "_user_service"):
            from Sociocrates.services.UserService import UserService

            self._user_service = UserService(self.session)
        return self._user_service

    @property
    def circle(self) -> "CircleService":
        """获取圈子服务实例。"""
        if not hasattr(self, "_circle_service"):
            from Sociocrates.services.CircleService import CircleService

            self._circle_service = CircleService(self.session)
        return self._circle_service

    @property
    def step_timing(self) -> "StepTimingService":
        """获取步骤时长配置服务实例。"""
        if not hasattr(self, "_step_timing_service"):
            from Sociocrates.services.StepTimingService import StepTimingService

            self._step_timing_service = StepTimingService(self.session)
        return self._step_timing_service

    @property
    def proposal(self) -> "ProposalService":
        """获取提案服务实例。"""
        if not hasattr(self, "_proposal_service"):
            from Sociocrates.services.ProposalService import ProposalService

            self._proposal_service = ProposalService(self.session)
        return self._proposal_service

    @property
    def question(self) -> "ClarifyingQuestionService":
        """获取澄清提问服务实例。"""
        if not hasattr(self, "_question_service"):
            from Sociocrates.services.ClarifyingQuestionService import (
                ClarifyingQuestionService,
            )

            self._question_service = ClarifyingQuestionService(self.session)
        return self._question_service

    @property
    def reaction(self) -> "QuickReactionService":
        """获取快速反应服务实例。"""
        if not hasattr(self, "_reaction_service"):
            from Sociocrates.services.QuickReactionService import QuickReactionService

            self._reaction_service = QuickReactionService(self.session)
        return self._reaction_service

    @property
    def objection(self) -> "ObjectionService":
        """获取异议服务实例。"""
        if not hasattr(self, "_objection_service"):
            from Sociocrates.services.ObjectionService import ObjectionService

            self._objection_service = ObjectionService(self.session)
        return self._objection_service

    @property
    def consent(self) -> "ConsentResponseService":
        """获取同意轮回应服务实例。"""
        if not hasattr(self, "_consent_service"):
            from Sociocrates.services.ConsentResponseService import ConsentResponseService

            self._consent_service = ConsentResponseService(self.session)
        return self._consent_service

    @property
    def process_log(self) -> "ProcessLogService":
        """获取审计日志服务实例。"""
        if not hasattr(self, "_process_log_service"):
            from Sociocrates.services.ProcessLogService import ProcessLogService

            self._process_log_service = ProcessLogService(self.session)
        return self._process_log_service
