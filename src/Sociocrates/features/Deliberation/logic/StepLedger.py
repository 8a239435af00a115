import logging
from datetime import datetime
from typing import Awaitable, Callable, List

from sqlalchemy.exc import IntegrityError

from Sociocrates.dto import (
    ClarifyingQuestionDto,
    ConsentResponseDto,
    ObjectionDto,
    ObjectionResolutionDto,
    QuickReactionDto,
    StepArtifactDto,
)
from Sociocrates.models.Proposal import Proposal
from Sociocrates.share.auth.PermissionGuard import PermissionGuard
from Sociocrates.share.enums import (
    SUBMISSION_STEPS,
    ConsentChoice,
    ObjectionSeverity,
    ProcessStep,
    ProposalStatus,
    UserRole,
)
from Sociocrates.share.exceptions import (
    CapacityExceeded,
    Conflict,
    DuplicateSubmission,
    Forbidden,
    InvalidState,
    InvalidStep,
    NotFound,
    ValidationError,
)
from Sociocrates.share.SociocratesApp import SociocratesApp
from Sociocrates.share.UnitOfWork import UnitOfWork

from ..dto.ResolveObjectionResultDto import ResolveObjectionResultDto
from ..qo.SubmitArtifactQo import SubmitArtifactQo

logger = logging.getLogger(__name__)

DEFAULT_QUESTION_CAP = 3
DEFAULT_REACTION_MAX_LENGTH = 300


class StepLedger:
    """
    每个提案、每个步骤的只追加提交记录。

    负责提交权限、步骤窗口、内容校验、每人一次以及提问上限的检查。
    唯一性最终由数据库约束保证：并发提交中落败的一方会得到
    DuplicateSubmission 或 CapacityExceeded，而不是重复写入。
    """

    def __init__(self, app: SociocratesApp):
        self.app = app
        self.question_cap = int(app.config.get("question_cap", DEFAULT_QUESTION_CAP))
        self.reaction_max_length = int(
            app.config.get("reaction_max_length", DEFAULT_REACTION_MAX_LENGTH)
        )

    @staticmethod
    def parse_step_kind(step_kind: ProcessStep | str) -> ProcessStep:
        """将步骤名称解析为接受提交的步骤，否则抛出 InvalidStep。"""
        step = step_kind if isinstance(step_kind, ProcessStep) else ProcessStep.parse(step_kind)
        if step is None:
            raise InvalidStep(f"未知的步骤: '{step_kind}'。")
        if step not in SUBMISSION_STEPS:
            raise InvalidStep(f"步骤 '{step.value}' 不接受成员提交。")
        return step

    async def submit(
        self,
        proposal_id: int,
        step_kind: ProcessStep | str,
        author_id: int,
        author_role: UserRole,
        payload: SubmitArtifactQo,
    ) -> StepArtifactDto:
        """
        校验并追加一条步骤提交记录，返回带有服务器分配ID与时间戳的记录。
        """
        if author_role == UserRole.OBSERVER:
            raise Forbidden("观察者只能查看，不能提交内容。")

        step = self.parse_step_kind(step_kind)
        handlers: dict[ProcessStep, Callable[..., Awaitable[StepArtifactDto]]] = {
            ProcessStep.CLARIFYING_QUESTIONS: self._append_question,
            ProcessStep.QUICK_REACTIONS: self._append_reaction,
            ProcessStep.OBJECTIONS_ROUND: self._append_objection,
            ProcessStep.CONSENT_ROUND: self._append_consent,
        }

        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await uow.proposal.get_proposal_by_id(proposal_id)
            if not proposal:
                raise NotFound(f"未找到ID为 {proposal_id} 的提案。")

            await PermissionGuard.ensure_can_submit(
                uow, proposal.circle_id, author_id, author_role
            )

            if proposal.status != ProposalStatus.ACTIVE.value:
                raise InvalidState("只能对议事中的提案提交内容。")
            if proposal.current_step != step.value:
                raise InvalidStep(
                    f"提案当前处于 '{proposal.current_step}' 步骤，不接受 '{step.value}' 的提交。"
                )

            now = self.app.time_utils.now()
            artifact = await handlers[step](uow, proposal, author_id, payload, now)

            await uow.process_log.add_entry(
                proposal_id=proposal_id,
                step=step.value,
                action="submit",
                user_id=author_id,
                created_at=now,
                details={"artifactId": artifact.id},
            )
            await uow.commit()

        logger.info(f"用户 {author_id} 在提案 {proposal_id} 的 '{step.value}' 步骤提交了内容。")
        return artifact

    async def list(self, proposal_id: int, step_kind: ProcessStep | str) -> List[StepArtifactDto]:
        """
        按提交顺序返回提案在某个步骤的全部记录。
        """
        step = self.parse_step_kind(step_kind)
        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await uow.proposal.get_proposal_by_id(proposal_id)
            if not proposal:
                raise NotFound(f"未找到ID为 {proposal_id} 的提案。")

            if step == ProcessStep.CLARIFYING_QUESTIONS:
                questions = await uow.question.get_questions(proposal_id)
                return [ClarifyingQuestionDto.model_validate(q) for q in questions]
            if step == ProcessStep.QUICK_REACTIONS:
                reactions = await uow.reaction.get_reactions(proposal_id)
                return [QuickReactionDto.model_validate(r) for r in reactions]
            if step == ProcessStep.OBJECTIONS_ROUND:
                objections = await uow.objection.get_objections_by_proposal_id(proposal_id)
                return [ObjectionDto.model_validate(o) for o in objections]

            responses = await uow.consent.get_responses(proposal_id)
            return [ConsentResponseDto.model_validate(r) for r in responses]

    async def resolve_objection(
        self,
        objection_id: int,
        resolver_id: int,
        resolver_role: UserRole,
        solution_text: str,
    ) -> ResolveObjectionResultDto:
        """
        由提案发起人或管理员将异议标记为已化解，并记录化解方案。
        """
        async with UnitOfWork(self.app.db_handler) as uow:
            objection = await uow.objection.get_objection_by_id(objection_id)
            if not objection:
                raise NotFound(f"未找到ID为 {objection_id} 的异议。")

            proposal = await uow.proposal.get_proposal_by_id(objection.proposal_id)
            assert proposal is not None, "Objection must belong to a proposal"

            if not PermissionGuard.can_manage_proposal(proposal, resolver_id, resolver_role):
                raise Forbidden("只有提案发起人或管理员可以化解异议。")
            # 结果一旦记录，异议状态即冻结
            if proposal.status != ProposalStatus.ACTIVE.value:
                raise InvalidState("只能化解议事中提案的异议。")
            if objection.is_resolved:
                raise InvalidState("该异议已经被化解。")

            solution = (solution_text or "").strip()
            if not solution:
                raise ValidationError("化解方案不能为空。")

            now = self.app.time_utils.now()
            resolution = await uow.objection.resolve_objection(objection, resolver_id, solution, now)
            result = ResolveObjectionResultDto(
                objection=ObjectionDto.model_validate(objection),
                resolution=ObjectionResolutionDto.model_validate(resolution),
            )
            await uow.process_log.add_entry(
                proposal_id=objection.proposal_id,
                step=proposal.current_step,
                action="resolve_objection",
                user_id=resolver_id,
                created_at=now,
                details={"objectionId": objection_id},
            )
            await uow.commit()

        logger.info(f"异议 {objection_id} 已由用户 {resolver_id} 化解。")
        return result

    # --- 各步骤的校验与写入 ---

    @staticmethod
    def _require_text(value: str | None, label: str) -> str:
        text = (value or "").strip()
        if not text:
            raise ValidationError(f"{label}不能为空。")
        return text

    async def _append_question(
        self,
        uow: UnitOfWork,
        proposal: Proposal,
        author_id: int,
        payload: SubmitArtifactQo,
        now: datetime,
    ) -> ClarifyingQuestionDto:
        assert proposal.id is not None
        proposal_id = proposal.id
        text = self._require_text(payload.question, "提问内容")

        if await uow.question.get_question_by_author(proposal_id, author_id):
            raise DuplicateSubmission("你已经提出过澄清问题。")

        count = await uow.question.count_questions(proposal_id)
        if count >= self.question_cap:
            raise CapacityExceeded(f"每个提案最多只能有 {self.question_cap} 个澄清问题。")

        try:
            question = await uow.question.add_question(
                proposal_id, author_id, text, position=count + 1, created_at=now
            )
        except IntegrityError:
            await uow.rollback()
            if await uow.question.get_question_by_author(proposal_id, author_id):
                raise DuplicateSubmission("你已经提出过澄清问题。")
            if await uow.question.count_questions(proposal_id) >= self.question_cap:
                raise CapacityExceeded(f"每个提案最多只能有 {self.question_cap} 个澄清问题。")
            raise Conflict("提问序号被并发提交占用，请重试。")

        return ClarifyingQuestionDto.model_validate(question)

    async def _append_reaction(
        self,
        uow: UnitOfWork,
        proposal: Proposal,
        author_id: int,
        payload: SubmitArtifactQo,
        now: datetime,
    ) -> QuickReactionDto:
        assert proposal.id is not None
        text = self._require_text(payload.reaction, "反应内容")
        if len(text) > self.reaction_max_length:
            raise ValidationError(f"反应内容不能超过 {self.reaction_max_length} 个字符。")

        if await uow.reaction.get_reaction_by_author(proposal.id, author_id):
            raise DuplicateSubmission("你已经提交过快速反应。")

        try:
            reaction = await uow.reaction.add_reaction(proposal.id, author_id, text, now)
        except IntegrityError:
            await uow.rollback()
            raise DuplicateSubmission("你已经提交过快速反应。")

        return QuickReactionDto.model_validate(reaction)

    async def _append_objection(
        self,
        uow: UnitOfWork,
        proposal: Proposal,
        author_id: int,
        payload: SubmitArtifactQo,
        now: datetime,
    ) -> ObjectionDto:
        assert proposal.id is not None
        text = self._require_text(payload.objection, "异议内容")
        try:
            severity = ObjectionSeverity((payload.severity or "").strip())
        except ValueError:
            allowed = ", ".join(s.value for s in ObjectionSeverity)
            raise ValidationError(f"异议严重程度必须是以下之一: {allowed}。")

        if await uow.objection.get_open_objection_by_author(proposal.id, author_id):
            raise DuplicateSubmission("你在该提案上已有一条未化解的异议。")

        try:
            objection = await uow.objection.add_objection(
                proposal.id, author_id, text, severity.value, now
            )
        except IntegrityError:
            await uow.rollback()
            raise DuplicateSubmission("你在该提案上已有一条未化解的异议。")

        return ObjectionDto.model_validate(objection)

    async def _append_consent(
        self,
        uow: UnitOfWork,
        proposal: Proposal,
        author_id: int,
        payload: SubmitArtifactQo,
        now: datetime,
    ) -> ConsentResponseDto:
        assert proposal.id is not None
        try:
            choice = ConsentChoice((payload.choice or "").strip())
        except ValueError:
            allowed = ", ".join(c.value for c in ConsentChoice)
            raise ValidationError(f"同意轮的选择必须是以下之一: {allowed}。")

        reason = (payload.reason or "").strip() or None
        if choice != ConsentChoice.CONSENT and reason is None:
            raise ValidationError("保留意见或不同意时必须填写理由。")

        if await uow.consent.get_response_by_author(proposal.id, author_id):
            raise DuplicateSubmission("你已经在同意轮中做出过选择。")

        try:
            response = await uow.consent.add_response(
                proposal.id, author_id, choice.value, reason, now
            )
        except IntegrityError:
            await uow.rollback()
            raise DuplicateSubmission("你已经在同意轮中做出过选择。")

        return ConsentResponseDto.model_validate(response)
