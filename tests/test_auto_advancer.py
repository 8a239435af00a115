"""Tests for the periodic AutoAdvancer sweep."""

import asyncio

from conftest import Community, create_proposal, proposal_at_step

from Sociocrates.features.Deliberation.tasks import AutoAdvancer
from Sociocrates.features.Proposals.logic import ProposalLogic
from Sociocrates.share.enums import ProcessStep, ProposalStatus


class TestSweep:
    async def test_advances_only_ready_proposals(self, app, community: Community):
        ready = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        waiting = await proposal_at_step(app, community, ProcessStep.QUICK_REACTIONS)
        draft = await create_proposal(app, community)

        advanced = await AutoAdvancer(app).sweep()

        assert advanced == [ready.id]
        proposals = ProposalLogic(app)
        assert (await proposals.get_proposal(community.admin, ready.id)).current_step == (
            ProcessStep.CLARIFYING_QUESTIONS
        )
        assert (await proposals.get_proposal(community.admin, waiting.id)).version == waiting.version
        assert (await proposals.get_proposal(community.admin, draft.id)).status == (
            ProposalStatus.DRAFT
        )

    async def test_failure_on_one_proposal_does_not_stop_sweep(
        self, app, community: Community, monkeypatch
    ):
        first = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        second = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)

        advancer = AutoAdvancer(app)
        original = advancer.lifecycle.auto_advance

        async def flaky_auto_advance(proposal_id: int):
            if proposal_id == first.id:
                raise RuntimeError("storage hiccup")
            return await original(proposal_id)

        monkeypatch.setattr(advancer.lifecycle, "auto_advance", flaky_auto_advance)

        assert await advancer.sweep() == [second.id]

    async def test_start_and_stop(self, app, community: Community):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        advancer = AutoAdvancer(app, interval_seconds=3600)

        advancer.start()
        assert advancer.is_running
        for _ in range(50):
            current = await ProposalLogic(app).get_proposal(community.admin, proposal.id)
            if current.current_step != ProcessStep.PROPOSAL_PRESENTATION:
                break
            await asyncio.sleep(0.05)
        await advancer.stop()

        assert not advancer.is_running
        assert current.current_step == ProcessStep.CLARIFYING_QUESTIONS
