"""Tests for ConsentAggregator classification and tallies."""

import pytest
from conftest import Community, create_user, proposal_at_step

from Sociocrates.features.Deliberation.logic import ConsentAggregator, ProposalLifecycle, StepLedger
from Sociocrates.features.Deliberation.qo import SubmitArtifactQo
from Sociocrates.share.enums import ConsentChoice, ConsentOutcome, ProcessStep, UserRole
from Sociocrates.share.exceptions import IncompleteData, NotFound


class TestClassify:
    @pytest.mark.parametrize(
        "choices, unresolved, expected",
        [
            ([], 0, ConsentOutcome.CONSENTED),
            ([ConsentChoice.CONSENT, ConsentChoice.CONSENT], 0, ConsentOutcome.CONSENTED),
            (
                [ConsentChoice.CONSENT, ConsentChoice.CONSENT_WITH_RESERVATIONS],
                0,
                ConsentOutcome.CONSENTED_WITH_RESERVATIONS,
            ),
            (
                [ConsentChoice.CONSENT_WITH_RESERVATIONS, ConsentChoice.WITHHOLD_CONSENT],
                0,
                ConsentOutcome.BLOCKED,
            ),
            ([ConsentChoice.CONSENT], 1, ConsentOutcome.BLOCKED),
            (["consent", "consent_with_reservations"], 0, ConsentOutcome.CONSENTED_WITH_RESERVATIONS),
        ],
    )
    def test_classification_rules(self, choices, unresolved, expected):
        assert ConsentAggregator.classify(choices, unresolved) == expected

    def test_classification_ignores_order(self):
        forward = [ConsentChoice.CONSENT, ConsentChoice.WITHHOLD_CONSENT]
        assert ConsentAggregator.classify(forward, 0) == ConsentAggregator.classify(
            list(reversed(forward)), 0
        )


class TestComputeOutcome:
    async def _submit_consent(self, app, proposal_id, member, choice, reason=None):
        await StepLedger(app).submit(
            proposal_id,
            "consent_round",
            member.user_id,
            member.role,
            SubmitArtifactQo(choice=choice, reason=reason),
        )

    async def test_incomplete_before_record_outcome(self, app, community: Community):
        proposal = await proposal_at_step(app, community, ProcessStep.CONSENT_ROUND)
        with pytest.raises(IncompleteData):
            await ConsentAggregator(app).compute_outcome(proposal.id)

    async def test_unknown_proposal(self, app):
        with pytest.raises(NotFound):
            await ConsentAggregator(app).tally(777)

    async def test_tally_counts_and_reservations(self, app, community: Community):
        proposal = await proposal_at_step(app, community, ProcessStep.CONSENT_ROUND)
        await self._submit_consent(app, proposal.id, community.alice, "consent")
        await self._submit_consent(app, proposal.id, community.bob, "consent")
        await self._submit_consent(
            app, proposal.id, community.carol, "consent_with_reservations", "Review in 3 months"
        )
        await ProposalLifecycle(app).advance(
            proposal.id, community.admin.user_id, community.admin.role
        )

        aggregator = ConsentAggregator(app)
        tally = await aggregator.tally(proposal.id)

        assert tally.outcome == ConsentOutcome.CONSENTED_WITH_RESERVATIONS
        assert tally.consent == 2
        assert tally.consent_with_reservations == 1
        assert tally.withhold_consent == 0
        assert tally.unresolved_objections == 0
        assert await aggregator.tally(proposal.id) == tally

    async def test_responses_from_outside_the_circle_are_not_counted(
        self, app, community: Community
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.CONSENT_ROUND)
        visiting_admin = await create_user(app, "visitor@example.org", "Visitor", UserRole.ADMIN)
        await self._submit_consent(app, proposal.id, community.alice, "consent")
        await self._submit_consent(
            app, proposal.id, visiting_admin, "withhold_consent", "Not my circle, but no"
        )
        await ProposalLifecycle(app).advance(
            proposal.id, community.admin.user_id, community.admin.role
        )

        tally = await ConsentAggregator(app).tally(proposal.id)

        assert tally.outcome == ConsentOutcome.CONSENTED
        assert tally.consent == 1
        assert tally.withhold_consent == 0

    async def test_withhold_blocks(self, app, community: Community):
        proposal = await proposal_at_step(app, community, ProcessStep.CONSENT_ROUND)
        await self._submit_consent(app, proposal.id, community.alice, "consent")
        await self._submit_consent(
            app, proposal.id, community.bob, "withhold_consent", "Breaks our budget"
        )
        await ProposalLifecycle(app).advance(
            proposal.id, community.admin.user_id, community.admin.role
        )

        assert await ConsentAggregator(app).compute_outcome(proposal.id) == ConsentOutcome.BLOCKED
