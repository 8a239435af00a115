import logging
from typing import List

from Sociocrates.dto import ProcessLogDto, ProposalDto
from Sociocrates.models.Proposal import Proposal
from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.auth.PermissionGuard import PermissionGuard
from Sociocrates.share.enums import ProposalStatus
from Sociocrates.share.exceptions import Forbidden, InvalidState, NotFound, ValidationError
from Sociocrates.share.SociocratesApp import SociocratesApp
from Sociocrates.share.UnitOfWork import UnitOfWork

from ..qo import CreateProposalQo, UpdateDraftQo

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255


class ProposalLogic:
    """
    处理提案的创建、查询与草稿编辑。
    提案进入议事流程之后的状态变化由 ProposalLifecycle 负责。
    """

    def __init__(self, app: SociocratesApp):
        self.app = app

    @staticmethod
    def _validate_title(title: str) -> str:
        title = (title or "").strip()
        if not title:
            raise ValidationError("提案标题不能为空。")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationError(f"提案标题不能超过 {MAX_TITLE_LENGTH} 个字符。")
        return title

    @staticmethod
    def _validate_description(description: str) -> str:
        description = (description or "").strip()
        if not description:
            raise ValidationError("提案内容不能为空。")
        return description

    async def create_proposal(self, user: AuthenticatedUser, qo: CreateProposalQo) -> ProposalDto:
        """
        在圈子中创建一个草稿提案。发起人必须是该圈子中可以提交内容的成员。
        """
        title = self._validate_title(qo.title)
        description = self._validate_description(qo.description)

        async with UnitOfWork(self.app.db_handler) as uow:
            if not await uow.circle.get_circle_by_id(qo.circle_id):
                raise NotFound(f"未找到ID为 {qo.circle_id} 的圈子。")
            await PermissionGuard.ensure_can_submit(uow, qo.circle_id, user.user_id, user.role)

            proposal = await uow.proposal.create_proposal(
                title=title,
                description=description,
                circle_id=qo.circle_id,
                created_by=user.user_id,
            )
            assert proposal.id is not None
            await uow.process_log.add_entry(
                proposal_id=proposal.id,
                step=None,
                action="create",
                user_id=user.user_id,
                created_at=self.app.time_utils.now(),
            )
            proposal_dto = ProposalDto.model_validate(proposal)
            await uow.commit()

        logger.info(f"用户 {user.user_id} 在圈子 {qo.circle_id} 中创建了提案 {proposal_dto.id}。")
        return proposal_dto

    async def get_proposal(self, user: AuthenticatedUser, proposal_id: int) -> ProposalDto:
        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await self._get_visible(uow, user, proposal_id)
            return ProposalDto.model_validate(proposal)

    async def list_proposals(self, user: AuthenticatedUser) -> List[ProposalDto]:
        async with UnitOfWork(self.app.db_handler) as uow:
            if user.is_admin:
                proposals = await uow.proposal.get_all_proposals()
            else:
                proposals = await uow.proposal.get_proposals_visible_to(user.user_id)
            return [ProposalDto.model_validate(p) for p in proposals]

    async def update_draft(
        self, user: AuthenticatedUser, proposal_id: int, qo: UpdateDraftQo
    ) -> ProposalDto:
        """
        编辑草稿提案的标题或内容。只有发起人或管理员可以编辑，且只能编辑草稿。
        """
        title = self._validate_title(qo.title) if qo.title is not None else None
        description = (
            self._validate_description(qo.description) if qo.description is not None else None
        )

        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await self._get_visible(uow, user, proposal_id)
            if not PermissionGuard.can_manage_proposal(proposal, user.user_id, user.role):
                raise Forbidden("只有提案发起人或管理员可以编辑提案。")
            if proposal.status != ProposalStatus.DRAFT.value:
                raise InvalidState("只有草稿状态的提案可以编辑。")

            proposal = await uow.proposal.update_draft(proposal, title, description)
            await uow.process_log.add_entry(
                proposal_id=proposal_id,
                step=None,
                action="edit",
                user_id=user.user_id,
                created_at=self.app.time_utils.now(),
            )
            proposal_dto = ProposalDto.model_validate(proposal)
            await uow.commit()

        return proposal_dto

    async def get_process_log(
        self, user: AuthenticatedUser, proposal_id: int
    ) -> List[ProcessLogDto]:
        async with UnitOfWork(self.app.db_handler) as uow:
            await self._get_visible(uow, user, proposal_id)
            entries = await uow.process_log.get_entries(proposal_id)
            return [ProcessLogDto.model_validate(e) for e in entries]

    @staticmethod
    async def _get_visible(uow: UnitOfWork, user: AuthenticatedUser, proposal_id: int) -> Proposal:
        proposal = await uow.proposal.get_proposal_by_id(proposal_id)
        if not proposal:
            raise NotFound(f"未找到ID为 {proposal_id} 的提案。")
        await PermissionGuard.ensure_circle_access(uow, proposal.circle_id, user.user_id, user.role)
        return proposal
