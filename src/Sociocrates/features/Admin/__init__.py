from Sociocrates.share.SociocratesApp import SociocratesApp

from .logic import AdminLogic
from .Router import router

__all__ = ["AdminLogic", "router"]


def setup(app: SociocratesApp):
    app.include_router(router)
