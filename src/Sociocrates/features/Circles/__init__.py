from Sociocrates.share.SociocratesApp import SociocratesApp

from .logic import CircleLogic
from .Router import router

__all__ = ["CircleLogic", "router"]


def setup(app: SociocratesApp):
    app.include_router(router)
