from Sociocrates.share.SociocratesApp import SociocratesApp

from .logic import ProposalLogic
from .Router import router

__all__ = ["ProposalLogic", "router"]


def setup(app: SociocratesApp):
    app.include_router(router)
