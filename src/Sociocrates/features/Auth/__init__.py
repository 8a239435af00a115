from Sociocrates.share.SociocratesApp import SociocratesApp

from .logic import AuthLogic
from .Router import router

__all__ = ["AuthLogic", "router"]


def setup(app: SociocratesApp):
    app.include_router(router)
