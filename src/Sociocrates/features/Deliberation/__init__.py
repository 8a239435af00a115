import logging

from Sociocrates.share.SociocratesApp import SociocratesApp

from .logic import ConsentAggregator, ProposalLifecycle, StepLedger
from .Router import router
from .tasks import AutoAdvancer

__all__ = ["AutoAdvancer", "ConsentAggregator", "ProposalLifecycle", "StepLedger", "router"]

logger = logging.getLogger(__name__)


def setup(app: SociocratesApp):
    """
    挂载议事流程相关的路由。
    """
    app.include_router(router)
    logger.info("Deliberation 模块路由已加载。")
