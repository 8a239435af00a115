import logging
from typing import Optional

from fastapi import APIRouter, Depends

from Sociocrates.dto import ProposalDto
from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.auth.PermissionGuard import PermissionGuard
from Sociocrates.share.Dependencies import get_app, get_current_user
from Sociocrates.share.exceptions import NotFound
from Sociocrates.share.SociocratesApp import SociocratesApp
from Sociocrates.share.UnitOfWork import UnitOfWork

from .dto import OutcomeDto, ReadinessDto, ResolveObjectionResultDto
from .logic import ConsentAggregator, ProposalLifecycle, StepLedger
from .qo import AdvanceQo, ResolveObjectionQo, SetStepQo, SubmitArtifactQo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["deliberation"])


async def _ensure_proposal_visible(app: SociocratesApp, proposal_id: int, user: AuthenticatedUser):
    async with UnitOfWork(app.db_handler) as uow:
        proposal = await uow.proposal.get_proposal_by_id(proposal_id)
        if not proposal:
            raise NotFound(f"未找到ID为 {proposal_id} 的提案。")
        await PermissionGuard.ensure_circle_access(uow, proposal.circle_id, user.user_id, user.role)


@router.post("/proposals/{proposal_id}/advance", response_model=ProposalDto)
async def advance_proposal(
    proposal_id: int,
    qo: Optional[AdvanceQo] = None,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    expected_version = qo.expected_version if qo else None
    return await ProposalLifecycle(app).advance(
        proposal_id, user.user_id, user.role, expected_version
    )


@router.put("/proposals/{proposal_id}/step", response_model=ProposalDto)
async def set_proposal_step(
    proposal_id: int,
    qo: SetStepQo,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await ProposalLifecycle(app).set_step(
        proposal_id, user.user_id, user.role, qo.target_step, qo.expected_version
    )


@router.get("/proposals/{proposal_id}/readiness", response_model=ReadinessDto)
async def get_readiness(
    proposal_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    await _ensure_proposal_visible(app, proposal_id, user)
    return await ProposalLifecycle(app).evaluate_readiness(proposal_id)


@router.get("/proposals/{proposal_id}/outcome", response_model=OutcomeDto)
async def get_outcome(
    proposal_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    await _ensure_proposal_visible(app, proposal_id, user)
    return await ConsentAggregator(app).tally(proposal_id)


@router.post("/objections/{objection_id}/resolve", response_model=ResolveObjectionResultDto)
async def resolve_objection(
    objection_id: int,
    qo: ResolveObjectionQo,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await StepLedger(app).resolve_objection(
        objection_id, user.user_id, user.role, qo.solution
    )


# 通用的步骤提交路由必须最后注册，避免覆盖上面的固定路径
@router.get("/proposals/{proposal_id}/{step_kind}")
async def list_artifacts(
    proposal_id: int,
    step_kind: str,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    await _ensure_proposal_visible(app, proposal_id, user)
    return await StepLedger(app).list(proposal_id, step_kind)


@router.post("/proposals/{proposal_id}/{step_kind}")
async def submit_artifact(
    proposal_id: int,
    step_kind: str,
    qo: SubmitArtifactQo,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await StepLedger(app).submit(proposal_id, step_kind, user.user_id, user.role, qo)
