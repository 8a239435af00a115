from fastapi import APIRouter, Depends

from Sociocrates.dto.UserDto import UserDto
from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.Dependencies import get_app, get_current_user
from Sociocrates.share.SociocratesApp import SociocratesApp

from .dto import AuthResultDto
from .logic import AuthLogic
from .qo import LoginQo, RegisterQo

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResultDto)
async def register(qo: RegisterQo, app: SociocratesApp = Depends(get_app)):
    return await AuthLogic(app).register(qo)


@router.post("/login", response_model=AuthResultDto)
async def login(qo: LoginQo, app: SociocratesApp = Depends(get_app)):
    return await AuthLogic(app).login(qo)


@router.get("/me", response_model=UserDto)
async def me(
    app: SociocratesApp = Depends(get_app),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return await AuthLogic(app).me(user.user_id)
