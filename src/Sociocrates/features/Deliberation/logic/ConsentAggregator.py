import logging
from collections import Counter
from typing import Iterable

from Sociocrates.models.Proposal import Proposal
from Sociocrates.share.enums import ConsentChoice, ConsentOutcome, ProcessStep
from Sociocrates.share.exceptions import IncompleteData, NotFound
from Sociocrates.share.SociocratesApp import SociocratesApp
from Sociocrates.share.UnitOfWork import UnitOfWork

from ..dto.OutcomeDto import OutcomeDto

logger = logging.getLogger(__name__)


class ConsentAggregator:
    """
    根据同意轮回应与异议状态得出提案结果。
    """

    def __init__(self, app: SociocratesApp):
        self.app = app

    @staticmethod
    def classify(choices: Iterable[ConsentChoice | str], unresolved_objections: int) -> ConsentOutcome:
        """
        结果分类规则：
        1. 存在不同意或未化解的异议 -> blocked
        2. 存在保留意见 -> consented_with_reservations
        3. 其他情况 -> consented
        """
        normalized = {ConsentChoice(choice) for choice in choices}
        if unresolved_objections > 0 or ConsentChoice.WITHHOLD_CONSENT in normalized:
            return ConsentOutcome.BLOCKED
        if ConsentChoice.CONSENT_WITH_RESERVATIONS in normalized:
            return ConsentOutcome.CONSENTED_WITH_RESERVATIONS
        return ConsentOutcome.CONSENTED

    async def compute_outcome(self, proposal_id: int) -> ConsentOutcome:
        return (await self.tally(proposal_id)).outcome

    async def tally(self, proposal_id: int) -> OutcomeDto:
        """
        统计同意轮各选项的数量并给出结果分类。

        Raises:
            NotFound: 提案不存在。
            IncompleteData: 提案尚未进入记录结果步骤。
        """
        async with UnitOfWork(self.app.db_handler) as uow:
            proposal = await uow.proposal.get_proposal_by_id(proposal_id)
            if not proposal:
                raise NotFound(f"未找到ID为 {proposal_id} 的提案。")
            return await self.tally_in(uow, proposal)

    async def tally_in(self, uow: UnitOfWork, proposal: Proposal) -> OutcomeDto:
        """在调用方的事务中统计结果，供生命周期在最后一步推进时使用。"""
        assert proposal.id is not None
        if proposal.current_step != ProcessStep.RECORD_OUTCOME.value:
            raise IncompleteData()

        responses = await uow.consent.get_responses(proposal.id)
        unresolved = await uow.objection.count_unresolved(proposal.id)

        # 只统计回应时已是圈内非观察者成员的回应
        join_times = await uow.circle.get_participant_join_times(proposal.circle_id)
        counts = Counter(
            ConsentChoice(r.choice)
            for r in responses
            if r.user_id in join_times and join_times[r.user_id] <= r.created_at
        )

        outcome = self.classify(counts.keys(), unresolved)
        logger.debug(
            f"提案 {proposal.id} 的同意轮统计: {dict(counts)}, 未化解异议 {unresolved}, 结果 {outcome.value}"
        )
        return OutcomeDto(
            proposal_id=proposal.id,
            outcome=outcome,
            consent=counts[ConsentChoice.CONSENT],
            consent_with_reservations=counts[ConsentChoice.CONSENT_WITH_RESERVATIONS],
            withhold_consent=counts[ConsentChoice.WITHHOLD_CONSENT],
            unresolved_objections=unresolved,
        )
