from typing import List

from fastapi import APIRouter, Depends

from Sociocrates.dto import ProcessLogDto, ProposalDto
from Sociocrates.features.Deliberation.logic import ProposalLifecycle
from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.Dependencies import get_app, get_current_user
from Sociocrates.share.SociocratesApp import SociocratesApp

from .logic import ProposalLogic
from .qo import CreateProposalQo, UpdateDraftQo

router = APIRouter(prefix="/api/proposals", tags=["proposals"])


@router.get("", response_model=List[ProposalDto])
async def list_proposals(
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await ProposalLogic(app).list_proposals(user)


@router.post("", response_model=ProposalDto)
async def create_proposal(
    qo: CreateProposalQo,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await ProposalLogic(app).create_proposal(user, qo)


@router.get("/{proposal_id}", response_model=ProposalDto)
async def get_proposal(
    proposal_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await ProposalLogic(app).get_proposal(user, proposal_id)


@router.put("/{proposal_id}", response_model=ProposalDto)
async def update_draft(
    proposal_id: int,
    qo: UpdateDraftQo,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await ProposalLogic(app).update_draft(user, proposal_id, qo)


@router.get("/{proposal_id}/log", response_model=List[ProcessLogDto])
async def get_process_log(
    proposal_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await ProposalLogic(app).get_process_log(user, proposal_id)


@router.post("/{proposal_id}/activate", response_model=ProposalDto)
async def activate_proposal(
    proposal_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await ProposalLifecycle(app).activate(proposal_id, user.user_id, user.role)


@router.post("/{proposal_id}/archive", response_model=ProposalDto)
async def archive_proposal(
    proposal_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await ProposalLifecycle(app).archive(proposal_id, user.user_id, user.role)
