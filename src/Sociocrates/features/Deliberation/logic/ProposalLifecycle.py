import logging
from datetime import datetime
from typing import Any, Dict, Optional

from Sociocrates.dto import ProposalDto
from Sociocrates.models.Proposal import Proposal
from Sociocrates.share.auth.PermissionGuard import PermissionGuard
from Sociocrates.share.enums import ProcessStep, ProposalStatus, UserRole
from Sociocrates.share.exceptions import Conflict, Forbidden, InvalidState, InvalidStep, NotFound
from Sociocrates.share.SociocratesApp import SociocratesApp
from Sociocrates.share.TimeUtils import TimeUtils
from Sociocrates.share.UnitOfWork import UnitOfWork

from ..dto.ReadinessDto import ReadinessDto
from .ConsentAggregator import ConsentAggregator
from .StepLedger import DEFAULT_QUESTION_CAP

logger = logging.getLogger(__name__)


class ProposalLifecycle:
    """
    提案状态机：激活、按顺序推进步骤、管理员跳转、归档，以及推进条件评估。

    所有状态变化都以提案版本号做比较并交换，
    并发修改中落败的一方会得到 Conflict，而不是覆盖对方的结果。
    """

    def __init__(self, app: SociocratesApp):
        self.app = app
        self.aggregator = ConsentAggregator(app)
        self.question_cap = int(app.config.get("question_cap", DEFAULT_QUESTION_CAP))

    async def activate(
        self,
        proposal_id: int,
        actor_id: Optional[int] = None,
        actor_role: Optional[UserRole] = None,
    ) -> ProposalDto:
        """
        将草稿提案激活，进入提案陈述步骤并开始计时。
        传入 actor_id 时，只有发起人或管理员可以激活。
        """
        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await self._get_proposal(uow, proposal_id)
            if actor_id is not None and not PermissionGuard.can_manage_proposal(
                proposal, actor_id, actor_role
            ):
                raise Forbidden("只有提案发起人或管理员可以激活提案。")
            if proposal.status != ProposalStatus.DRAFT.value:
                raise InvalidState("只有草稿状态的提案可以被激活。")

            first_step = ProcessStep.ordered()[0]
            now = self.app.time_utils.now()
            values = await self._open_window(uow, proposal, first_step, now)
            values["status"] = ProposalStatus.ACTIVE.value

            result = await self._apply(
                uow, proposal, proposal.version, values, actor_id, "activate", now
            )

        logger.info(f"提案 {proposal_id} 已被激活，进入 '{first_step.value}' 步骤。")
        return result

    async def advance(
        self,
        proposal_id: int,
        actor_id: int,
        actor_role: UserRole,
        expected_version: Optional[int] = None,
    ) -> ProposalDto:
        """
        管理员将提案推进到下一步骤。
        在最后一步推进时，提案状态变为 resolved 并记录结果分类，当前步骤保持不变。

        Args:
            expected_version: 调用方看到的版本号；为空时使用本次读取到的版本号。
        """
        PermissionGuard.require_admin(actor_role, "只有管理员可以推进提案步骤。")

        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await self._get_proposal(uow, proposal_id)
            self._ensure_active(proposal)
            version = proposal.version if expected_version is None else expected_version
            result = await self._advance_from(uow, proposal, version, actor_id, "advance")

        logger.info(
            f"管理员 {actor_id} 推进了提案 {proposal_id}，当前步骤: "
            f"'{result.current_step.value if result.current_step else None}'，状态: '{result.status.value}'。"
        )
        return result

    async def set_step(
        self,
        proposal_id: int,
        actor_id: int,
        actor_role: UserRole,
        target_step: ProcessStep | str,
        expected_version: Optional[int] = None,
    ) -> ProposalDto:
        """
        管理员直接跳转到指定步骤，并为该步骤重新开始计时。
        """
        PermissionGuard.require_admin(actor_role, "只有管理员可以设置提案步骤。")

        step = target_step if isinstance(target_step, ProcessStep) else ProcessStep.parse(target_step)
        if step is None:
            raise InvalidStep(f"未知的步骤: '{target_step}'。")

        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await self._get_proposal(uow, proposal_id)
            self._ensure_active(proposal)

            now = self.app.time_utils.now()
            values = await self._open_window(uow, proposal, step, now)
            version = proposal.version if expected_version is None else expected_version
            result = await self._apply(uow, proposal, version, values, actor_id, "set_step", now)

        logger.info(f"管理员 {actor_id} 将提案 {proposal_id} 跳转到 '{step.value}' 步骤。")
        return result

    async def archive(
        self, proposal_id: int, actor_id: int, actor_role: UserRole
    ) -> ProposalDto:
        """
        归档草稿或已结束的提案。
        """
        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await self._get_proposal(uow, proposal_id)
            if not PermissionGuard.can_manage_proposal(proposal, actor_id, actor_role):
                raise Forbidden("只有提案发起人或管理员可以归档提案。")
            if proposal.status not in (
                ProposalStatus.DRAFT.value,
                ProposalStatus.RESOLVED.value,
            ):
                raise InvalidState("只有草稿或已结束的提案可以归档。")

            now = self.app.time_utils.now()
            values: Dict[str, Any] = {
                "status": ProposalStatus.ARCHIVED.value,
                "is_active": False,
            }
            result = await self._apply(
                uow, proposal, proposal.version, values, actor_id, "archive", now
            )

        logger.info(f"提案 {proposal_id} 已被用户 {actor_id} 归档。")
        return result

    async def ready_to_advance(self, proposal_id: int) -> bool:
        return (await self.evaluate_readiness(proposal_id)).ready

    async def evaluate_readiness(self, proposal_id: int) -> ReadinessDto:
        """
        评估提案当前步骤是否已满足推进条件。此操作不修改任何数据。
        """
        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await self._get_proposal(uow, proposal_id)
            return await self._evaluate(uow, proposal, self.app.time_utils.now())

    async def auto_advance(self, proposal_id: int) -> Optional[ProposalDto]:
        """
        供自动推进任务调用：重新读取提案，满足推进条件时执行与 advance 相同的推进。

        Returns:
            推进后的提案；未满足条件或已被其他操作抢先修改时返回 None。
        """
        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await uow.proposal.get_proposal_by_id(proposal_id)
            if not proposal or proposal.status != ProposalStatus.ACTIVE.value:
                return None

            readiness = await self._evaluate(uow, proposal, self.app.time_utils.now())
            if not readiness.ready:
                return None

            try:
                result = await self._advance_from(
                    uow, proposal, proposal.version, None, "auto_advance", readiness.reason
                )
            except Conflict:
                logger.debug(f"提案 {proposal_id} 在自动推进时已被其他操作修改，跳过。")
                return None

        logger.info(
            f"提案 {proposal_id} 已自动推进 (原因: {readiness.reason})，状态: '{result.status.value}'。"
        )
        return result

    # --- 内部实现 ---

    @staticmethod
    async def _get_proposal(uow: UnitOfWork, proposal_id: int) -> Proposal:
        proposal = await uow.proposal.get_proposal_by_id(proposal_id)
        if not proposal:
            raise NotFound(f"未找到ID为 {proposal_id} 的提案。")
        return proposal

    @staticmethod
    def _ensure_active(proposal: Proposal):
        if proposal.status != ProposalStatus.ACTIVE.value or proposal.current_step is None:
            raise InvalidState("只有议事中的提案可以变更步骤。")

    @staticmethod
    async def _open_window(
        uow: UnitOfWork, proposal: Proposal, step: ProcessStep, now: datetime
    ) -> Dict[str, Any]:
        """为步骤开启新的计时窗口，时长取自圈子的步骤时长配置。"""
        durations = await uow.step_timing.get_durations(proposal.circle_id)
        return {
            "current_step": step.value,
            "step_start_time": now,
            "step_end_time": TimeUtils.get_utc_end_time(durations[step], now),
        }

    async def _advance_from(
        self,
        uow: UnitOfWork,
        proposal: Proposal,
        expected_version: int,
        actor_id: Optional[int],
        action: str,
        reason: Optional[str] = None,
    ) -> ProposalDto:
        assert proposal.current_step is not None
        current = ProcessStep(proposal.current_step)
        now = self.app.time_utils.now()

        next_step = current.successor()
        if next_step is None:
            tally = await self.aggregator.tally_in(uow, proposal)
            values: Dict[str, Any] = {
                "status": ProposalStatus.RESOLVED.value,
                "outcome": tally.outcome.value,
            }
        else:
            values = await self._open_window(uow, proposal, next_step, now)

        return await self._apply(
            uow, proposal, expected_version, values, actor_id, action, now, reason
        )

    async def _apply(
        self,
        uow: UnitOfWork,
        proposal: Proposal,
        expected_version: int,
        values: Dict[str, Any],
        actor_id: Optional[int],
        action: str,
        now: datetime,
        reason: Optional[str] = None,
    ) -> ProposalDto:
        """以比较并交换写入状态变化，记录审计日志并提交。"""
        assert proposal.id is not None
        proposal_id = proposal.id
        previous_status = proposal.status
        previous_step = proposal.current_step

        if not await uow.proposal.compare_and_set(proposal, expected_version, **values):
            raise Conflict()

        details: Dict[str, Any] = {
            "fromStatus": previous_status,
            "toStatus": proposal.status,
            "fromStep": previous_step,
            "toStep": proposal.current_step,
        }
        if proposal.outcome:
            details["outcome"] = proposal.outcome
        if reason:
            details["reason"] = reason

        await uow.process_log.add_entry(
            proposal_id=proposal_id,
            step=proposal.current_step,
            action=action,
            user_id=actor_id,
            created_at=now,
            details=details,
        )
        result = ProposalDto.model_validate(proposal)
        await uow.commit()
        return result

    async def _evaluate(
        self, uow: UnitOfWork, proposal: Proposal, now: datetime
    ) -> ReadinessDto:
        assert proposal.id is not None
        step = ProcessStep(proposal.current_step) if proposal.current_step else None
        readiness = ReadinessDto(
            proposal_id=proposal.id,
            current_step=step,
            ready=False,
            timer_expired=TimeUtils.is_expired(proposal.step_end_time, now),
        )

        if proposal.status != ProposalStatus.ACTIVE.value or step is None:
            readiness.timer_expired = False
            return readiness

        if step in (ProcessStep.PROPOSAL_PRESENTATION, ProcessStep.RECORD_OUTCOME):
            readiness.ready = True
            readiness.reason = "no_requirements"
            return readiness

        if step == ProcessStep.RESOLVE_OBJECTIONS:
            unresolved = await uow.objection.count_unresolved(proposal.id)
            if unresolved == 0:
                readiness.ready = True
                readiness.reason = "all_resolved"
            elif readiness.timer_expired:
                readiness.ready = True
                readiness.reason = "timer_expired"
            return readiness

        eligible = await uow.circle.get_eligible_member_ids(
            proposal.circle_id, proposal.step_start_time or now
        )
        if step == ProcessStep.CLARIFYING_QUESTIONS:
            authors = await uow.question.get_author_ids(proposal.id)
        elif step == ProcessStep.QUICK_REACTIONS:
            authors = await uow.reaction.get_author_ids(proposal.id)
        elif step == ProcessStep.OBJECTIONS_ROUND:
            authors = await uow.objection.get_author_ids(proposal.id)
        else:
            authors = await uow.consent.get_author_ids(proposal.id)

        readiness.eligible_count = len(eligible)
        readiness.submitted_count = len(eligible & authors)

        if step == ProcessStep.CLARIFYING_QUESTIONS and (
            await uow.question.count_questions(proposal.id) >= self.question_cap
        ):
            readiness.ready = True
            readiness.reason = "question_cap_reached"
        elif eligible <= authors:
            readiness.ready = True
            readiness.reason = "all_submitted"
        elif readiness.timer_expired:
            readiness.ready = True
            readiness.reason = "timer_expired"
        return readiness
