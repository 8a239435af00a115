import logging
from typing import Any, Optional, Sequence

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from Sociocrates.models.CircleMembership import CircleMembership
from Sociocrates.models.Proposal import Proposal
from Sociocrates.share.enums.ProposalStatus import ProposalStatus
from Sociocrates.share.TimeUtils import TimeUtils

logger = logging.getLogger(__name__)


class ProposalService:
    """
    提供处理提案相关数据库操作的服务。
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_proposal(
        self, title: str, description: str, circle_id: int, created_by: int
    ) -> Proposal:
        """
        创建一个处于草稿状态的新提案。草稿没有当前步骤。
        """
        new_proposal = Proposal(
            title=title,
            description=description,
            circle_id=circle_id,
            created_by=created_by,
            status=ProposalStatus.DRAFT.value,
        )
        self.session.add(new_proposal)
        await self.session.flush()
        logger.debug(f"已在圈子 {circle_id} 中创建提案 {new_proposal.id}，发起人: {created_by}")
        return new_proposal

    async def get_proposal_by_id(self, proposal_id: int) -> Optional[Proposal]:
        """
        根据提案ID获取提案 ORM 对象。
        """
        return await self.session.get(Proposal, proposal_id)

    async def get_proposals_by_circle(self, circle_id: int) -> Sequence[Proposal]:
        statement = (
            select(Proposal)
            .where(Proposal.circle_id == circle_id)
            .order_by(Proposal.created_at.desc(), Proposal.id.desc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()

    async def get_proposals_visible_to(self, user_id: int) -> Sequence[Proposal]:
        """获取用户所在圈子中的全部提案。"""
        statement = (
            select(Proposal)
            .join(CircleMembership, CircleMembership.circle_id == Proposal.circle_id)  # type: ignore
            .where(CircleMembership.user_id == user_id)
            .order_by(Proposal.created_at.desc(), Proposal.id.desc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()

    async def get_all_proposals(self) -> Sequence[Proposal]:
        statement = select(Proposal).order_by(
            Proposal.created_at.desc(), Proposal.id.desc()  # type: ignore
        )
        result = await self.session.exec(statement)
        return result.all()

    async def get_active_proposal_ids(self) -> Sequence[int]:
        """获取所有正在议事中的提案ID，供自动推进任务使用。"""
        statement = (
            select(Proposal.id)
            .where(Proposal.status == ProposalStatus.ACTIVE.value)
            .order_by(Proposal.id.asc())  # type: ignore
        )
        result = await self.session.exec(statement)
        return [proposal_id for proposal_id in result.all() if proposal_id is not None]

    async def compare_and_set(
        self, proposal: Proposal, expected_version: int, **values: Any
    ) -> bool:
        """
        以比较并交换的方式更新提案。
        仅当数据库中的版本号仍等于 expected_version 时才会写入，并将版本号加一。

        Returns:
            写入成功返回 True；版本已被其他操作修改则返回 False。
        """
        assert proposal.id is not None
        statement = (
            update(Proposal)
            .where(Proposal.id == proposal.id)  # type: ignore
            .where(Proposal.version == expected_version)  # type: ignore
            .values(version=expected_version + 1, updated_at=TimeUtils.utcnow(), **values)
            .returning(Proposal.id)  # type: ignore
            .execution_options(synchronize_session=False)
        )
        result = await self.session.exec(statement)  # type: ignore
        updated_id = result.scalar_one_or_none()

        if updated_id is None:
            logger.debug(
                f"提案 {proposal.id} 的比较并交换失败，期望版本 {expected_version} 已过期。"
            )
            return False

        await self.session.refresh(proposal)
        return True

    async def update_draft(
        self, proposal: Proposal, title: Optional[str], description: Optional[str]
    ) -> Proposal:
        if title is not None:
            proposal.title = title
        if description is not None:
            proposal.description = description
        proposal.updated_at = TimeUtils.utcnow()
        self.session.add(proposal)
        await self.session.flush()
        await self.session.refresh(proposal)
        return proposal
