from typing import List

from fastapi import APIRouter, Depends

from Sociocrates.dto import CircleDto, CircleMembershipDto, ProposalDto, StepTimingDto
from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.Dependencies import get_app, get_current_user
from Sociocrates.share.SociocratesApp import SociocratesApp

from .logic import CircleLogic
from .qo import AddMemberQo, CreateCircleQo, UpdateStepTimingQo

router = APIRouter(prefix="/api/circles", tags=["circles"])


@router.get("", response_model=List[CircleDto])
async def list_circles(
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await CircleLogic(app).list_circles(user)


@router.post("", response_model=CircleDto)
async def create_circle(
    qo: CreateCircleQo,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await CircleLogic(app).create_circle(user, qo)


@router.get("/{circle_id}", response_model=CircleDto)
async def get_circle(
    circle_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await CircleLogic(app).get_circle(user, circle_id)


@router.get("/{circle_id}/members", response_model=List[CircleMembershipDto])
async def list_members(
    circle_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await CircleLogic(app).list_members(user, circle_id)


@router.post("/{circle_id}/members", response_model=CircleMembershipDto)
async def add_member(
    circle_id: int,
    qo: AddMemberQo,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await CircleLogic(app).add_member(user, circle_id, qo)


@router.get("/{circle_id}/step-timings", response_model=StepTimingDto)
async def get_step_timings(
    circle_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await CircleLogic(app).get_step_timings(user, circle_id)


@router.put("/{circle_id}/step-timings", response_model=StepTimingDto)
async def update_step_timings(
    circle_id: int,
    qo: UpdateStepTimingQo,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await CircleLogic(app).update_step_timings(user, circle_id, qo)


@router.get("/{circle_id}/proposals", response_model=List[ProposalDto])
async def list_circle_proposals(
    circle_id: int,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await CircleLogic(app).list_circle_proposals(user, circle_id)
