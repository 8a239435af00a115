"""Tests for ProposalLifecycle transitions, readiness evaluation and auto-advance."""

from datetime import timedelta

import pytest
from conftest import Community, FrozenTimeUtils, create_proposal, create_user, proposal_at_step

from Sociocrates.features.Circles.logic import CircleLogic
from Sociocrates.features.Circles.qo import AddMemberQo, UpdateStepTimingQo
from Sociocrates.features.Deliberation.logic import ConsentAggregator, ProposalLifecycle, StepLedger
from Sociocrates.features.Deliberation.qo import SubmitArtifactQo
from Sociocrates.features.Proposals.logic import ProposalLogic
from Sociocrates.share.enums import ConsentOutcome, ProcessStep, ProposalStatus, StepDuration
from Sociocrates.share.exceptions import Conflict, Forbidden, InvalidState, InvalidStep, NotFound
from Sociocrates.share.SociocratesApp import SociocratesApp


@pytest.fixture
def lifecycle(app: SociocratesApp) -> ProposalLifecycle:
    return ProposalLifecycle(app)


class TestActivate:
    async def test_draft_becomes_active_at_first_step(
        self, app, community: Community, lifecycle: ProposalLifecycle, time_utils: FrozenTimeUtils
    ):
        draft = await create_proposal(app, community)
        assert draft.status == ProposalStatus.DRAFT
        assert draft.current_step is None

        proposal = await lifecycle.activate(draft.id)

        assert proposal.status == ProposalStatus.ACTIVE
        assert proposal.current_step == ProcessStep.PROPOSAL_PRESENTATION
        assert proposal.step_start_time == time_utils.now()
        assert proposal.step_end_time == time_utils.now() + timedelta(
            seconds=int(StepDuration.PROPOSAL_PRESENTATION)
        )
        assert proposal.version == draft.version + 1

    async def test_activate_twice_is_invalid(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        draft = await create_proposal(app, community)
        await lifecycle.activate(draft.id)
        with pytest.raises(InvalidState):
            await lifecycle.activate(draft.id)

    async def test_only_creator_or_admin_may_activate(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        draft = await create_proposal(app, community)
        with pytest.raises(Forbidden):
            await lifecycle.activate(draft.id, community.bob.user_id, community.bob.role)

        proposal = await lifecycle.activate(draft.id, community.alice.user_id, community.alice.role)
        assert proposal.status == ProposalStatus.ACTIVE

    async def test_unknown_proposal(self, lifecycle: ProposalLifecycle):
        with pytest.raises(NotFound):
            await lifecycle.activate(12345)


class TestAdvance:
    async def test_steps_follow_total_order(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        admin = community.admin

        visited = [proposal.current_step]
        for _ in range(len(ProcessStep.ordered()) - 1):
            proposal = await lifecycle.advance(proposal.id, admin.user_id, admin.role)
            visited.append(proposal.current_step)

        assert visited == ProcessStep.ordered()
        assert proposal.status == ProposalStatus.ACTIVE

        resolved = await lifecycle.advance(proposal.id, admin.user_id, admin.role)
        assert resolved.status == ProposalStatus.RESOLVED
        assert resolved.current_step == ProcessStep.RECORD_OUTCOME
        assert resolved.outcome == ConsentOutcome.CONSENTED

    async def test_advance_opens_fresh_window(
        self,
        app,
        community: Community,
        lifecycle: ProposalLifecycle,
        time_utils: FrozenTimeUtils,
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        time_utils.advance(45)

        proposal = await lifecycle.advance(
            proposal.id, community.admin.user_id, community.admin.role
        )

        assert proposal.step_start_time == time_utils.now()
        assert proposal.step_end_time == time_utils.now() + timedelta(
            seconds=int(StepDuration.CLARIFYING_QUESTIONS)
        )

    async def test_circle_step_timing_overrides_defaults(
        self,
        app,
        community: Community,
        lifecycle: ProposalLifecycle,
        time_utils: FrozenTimeUtils,
    ):
        await CircleLogic(app).update_step_timings(
            community.admin, community.circle_id, UpdateStepTimingQo(clarifying_questions=120)
        )
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)

        proposal = await lifecycle.advance(
            proposal.id, community.admin.user_id, community.admin.role
        )

        assert proposal.step_end_time == time_utils.now() + timedelta(seconds=120)

    async def test_non_admin_advance_is_forbidden_and_state_unchanged(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)

        with pytest.raises(Forbidden):
            await lifecycle.advance(proposal.id, community.alice.user_id, community.alice.role)

        current = await ProposalLogic(app).get_proposal(community.alice, proposal.id)
        assert current.current_step == ProcessStep.PROPOSAL_PRESENTATION
        assert current.version == proposal.version

    async def test_stale_version_conflicts(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        admin = community.admin
        stale_version = proposal.version

        await lifecycle.advance(proposal.id, admin.user_id, admin.role, stale_version)
        with pytest.raises(Conflict):
            await lifecycle.advance(proposal.id, admin.user_id, admin.role, stale_version)

        current = await ProposalLogic(app).get_proposal(admin, proposal.id)
        assert current.current_step == ProcessStep.CLARIFYING_QUESTIONS

    async def test_draft_cannot_advance(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        draft = await create_proposal(app, community)
        with pytest.raises(InvalidState):
            await lifecycle.advance(draft.id, community.admin.user_id, community.admin.role)


class TestSetStep:
    async def test_admin_jumps_to_any_step(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        proposal = await lifecycle.set_step(
            proposal.id, community.admin.user_id, community.admin.role, "consent_round"
        )
        assert proposal.current_step == ProcessStep.CONSENT_ROUND

        proposal = await lifecycle.set_step(
            proposal.id, community.admin.user_id, community.admin.role, "questions"
        )
        assert proposal.current_step == ProcessStep.CLARIFYING_QUESTIONS

    async def test_unknown_step(self, app, community: Community, lifecycle: ProposalLifecycle):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        with pytest.raises(InvalidStep):
            await lifecycle.set_step(
                proposal.id, community.admin.user_id, community.admin.role, "voting"
            )

    async def test_non_admin_forbidden(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        with pytest.raises(Forbidden):
            await lifecycle.set_step(
                proposal.id, community.alice.user_id, community.alice.role, "consent_round"
            )

    async def test_inactive_proposal(self, app, community: Community, lifecycle: ProposalLifecycle):
        draft = await create_proposal(app, community)
        with pytest.raises(InvalidState):
            await lifecycle.set_step(
                draft.id, community.admin.user_id, community.admin.role, "consent_round"
            )


class TestScenario:
    async def test_unresolved_objection_blocks_outcome(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        admin = community.admin
        ledger = StepLedger(app)
        aggregator = ConsentAggregator(app)

        draft = await create_proposal(app, community)
        proposal = await lifecycle.activate(draft.id)
        for _ in range(3):
            proposal = await lifecycle.advance(proposal.id, admin.user_id, admin.role)
        assert proposal.current_step == ProcessStep.OBJECTIONS_ROUND

        await ledger.submit(
            proposal.id,
            "objections_round",
            community.bob.user_id,
            community.bob.role,
            SubmitArtifactQo(objection="Locks us into one vendor", severity="major_concern"),
        )

        proposal = await lifecycle.advance(proposal.id, admin.user_id, admin.role)
        assert proposal.current_step == ProcessStep.RESOLVE_OBJECTIONS

        proposal = await lifecycle.advance(proposal.id, admin.user_id, admin.role)
        assert proposal.current_step == ProcessStep.CONSENT_ROUND

        for member in (community.alice, community.carol):
            await ledger.submit(
                proposal.id,
                "consent_round",
                member.user_id,
                member.role,
                SubmitArtifactQo(choice="consent"),
            )

        proposal = await lifecycle.advance(proposal.id, admin.user_id, admin.role)
        assert proposal.current_step == ProcessStep.RECORD_OUTCOME
        assert await aggregator.compute_outcome(proposal.id) == ConsentOutcome.BLOCKED

        resolved = await lifecycle.advance(proposal.id, admin.user_id, admin.role)
        assert resolved.status == ProposalStatus.RESOLVED
        assert resolved.outcome == ConsentOutcome.BLOCKED

        log = await ProposalLogic(app).get_process_log(admin, proposal.id)
        actions = [entry.action for entry in log]
        assert actions[:2] == ["create", "activate"]
        assert actions.count("advance") == 7
        assert actions.count("submit") == 3
        assert log[-1].details["outcome"] == ConsentOutcome.BLOCKED.value


class TestArchive:
    async def test_resolved_proposal_can_be_archived(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.RECORD_OUTCOME)
        await lifecycle.advance(proposal.id, community.admin.user_id, community.admin.role)

        archived = await lifecycle.archive(
            proposal.id, community.alice.user_id, community.alice.role
        )
        assert archived.status == ProposalStatus.ARCHIVED
        assert archived.is_active is False

    async def test_active_proposal_cannot_be_archived(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.CONSENT_ROUND)
        with pytest.raises(InvalidState):
            await lifecycle.archive(proposal.id, community.admin.user_id, community.admin.role)

    async def test_other_participant_cannot_archive(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        draft = await create_proposal(app, community)
        with pytest.raises(Forbidden):
            await lifecycle.archive(draft.id, community.bob.user_id, community.bob.role)


class TestReadiness:
    async def test_presentation_is_ready_immediately(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)
        readiness = await lifecycle.evaluate_readiness(proposal.id)
        assert readiness.ready is True
        assert readiness.reason == "no_requirements"

    async def test_draft_is_never_ready(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        draft = await create_proposal(app, community)
        assert await lifecycle.ready_to_advance(draft.id) is False

    async def test_question_cap_makes_step_ready(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.CLARIFYING_QUESTIONS)
        ledger = StepLedger(app)
        assert await lifecycle.ready_to_advance(proposal.id) is False

        for author in (community.alice, community.bob, community.carol):
            await ledger.submit(
                proposal.id,
                "questions",
                author.user_id,
                author.role,
                SubmitArtifactQo(question="Why now?"),
            )

        readiness = await lifecycle.evaluate_readiness(proposal.id)
        assert readiness.ready is True
        assert readiness.reason == "question_cap_reached"

    async def test_all_eligible_members_submitted(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.QUICK_REACTIONS)
        ledger = StepLedger(app)
        submitters = (community.admin, community.alice, community.bob, community.carol)

        for index, member in enumerate(submitters):
            readiness = await lifecycle.evaluate_readiness(proposal.id)
            assert readiness.ready is False
            assert readiness.eligible_count == 4
            assert readiness.submitted_count == index
            await ledger.submit(
                proposal.id,
                "reactions",
                member.user_id,
                member.role,
                SubmitArtifactQo(reaction="Fine by me"),
            )

        readiness = await lifecycle.evaluate_readiness(proposal.id)
        assert readiness.ready is True
        assert readiness.reason == "all_submitted"

    async def test_timer_expiry_makes_step_ready(
        self,
        app,
        community: Community,
        lifecycle: ProposalLifecycle,
        time_utils: FrozenTimeUtils,
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.CONSENT_ROUND)
        assert await lifecycle.ready_to_advance(proposal.id) is False

        time_utils.advance(int(StepDuration.CONSENT_ROUND))

        readiness = await lifecycle.evaluate_readiness(proposal.id)
        assert readiness.ready is True
        assert readiness.timer_expired is True
        assert readiness.reason == "timer_expired"

    async def test_resolve_step_waits_for_open_objections(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.OBJECTIONS_ROUND)
        ledger = StepLedger(app)
        objection = await ledger.submit(
            proposal.id,
            "objections",
            community.bob.user_id,
            community.bob.role,
            SubmitArtifactQo(objection="Not accessible", severity="minor_concern"),
        )
        await lifecycle.advance(proposal.id, community.admin.user_id, community.admin.role)
        assert await lifecycle.ready_to_advance(proposal.id) is False

        await ledger.resolve_objection(
            objection.id, community.alice.user_id, community.alice.role, "Add screen reader support"
        )
        readiness = await lifecycle.evaluate_readiness(proposal.id)
        assert readiness.ready is True
        assert readiness.reason == "all_resolved"

    async def test_members_joining_after_step_opened_are_not_eligible(
        self,
        app,
        community: Community,
        lifecycle: ProposalLifecycle,
        time_utils: FrozenTimeUtils,
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.QUICK_REACTIONS)
        time_utils.advance(30)
        latecomer = await create_user(app, "late@example.org", "Late")
        await CircleLogic(app).add_member(
            community.admin, community.circle_id, AddMemberQo(user_id=latecomer.user_id)
        )

        readiness = await lifecycle.evaluate_readiness(proposal.id)
        assert readiness.eligible_count == 4


class TestAutoAdvance:
    async def test_ready_proposal_is_advanced(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.PROPOSAL_PRESENTATION)

        advanced = await lifecycle.auto_advance(proposal.id)

        assert advanced is not None
        assert advanced.current_step == ProcessStep.CLARIFYING_QUESTIONS
        log = await ProposalLogic(app).get_process_log(community.admin, proposal.id)
        assert log[-1].action == "auto_advance"
        assert log[-1].user_id is None
        assert log[-1].details["reason"] == "no_requirements"

    async def test_waiting_proposal_is_left_alone(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.CLARIFYING_QUESTIONS)
        assert await lifecycle.auto_advance(proposal.id) is None

        current = await ProposalLogic(app).get_proposal(community.admin, proposal.id)
        assert current.version == proposal.version

    async def test_record_outcome_resolves(
        self, app, community: Community, lifecycle: ProposalLifecycle
    ):
        proposal = await proposal_at_step(app, community, ProcessStep.RECORD_OUTCOME)
        resolved = await lifecycle.auto_advance(proposal.id)
        assert resolved is not None
        assert resolved.status == ProposalStatus.RESOLVED
        assert await lifecycle.auto_advance(proposal.id) is None
