from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from Sociocrates.share.auth.AuthenticatedUser import AuthenticatedUser
from Sociocrates.share.exceptions import Unauthenticated
from Sociocrates.share.SociocratesApp import SociocratesApp

_bearer = HTTPBearer(auto_error=False)


def get_app(request: Request) -> SociocratesApp:
    return request.app


async def get_current_user(
    app: SociocratesApp = Depends(get_app),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> AuthenticatedUser:
    """从 Authorization: Bearer 头中解析并验证调用者身份。"""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return await app.identity.verify(credentials.credentials)
