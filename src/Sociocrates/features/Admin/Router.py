from typing import List

from fastapi import APIRouter, Depends

from Sociocrates.dto.UserDto import UserDto
from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.Dependencies import get_app, get_current_user
from Sociocrates.share.SociocratesApp import SociocratesApp

from .logic import AdminLogic
from .qo import UpdateUserQo

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=List[UserDto])
async def list_users(
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await AdminLogic(app).list_users(user)


@router.put("/users/{user_id}", response_model=UserDto)
async def update_user(
    user_id: int,
    qo: UpdateUserQo,
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await AdminLogic(app).update_user(user, user_id, qo)
