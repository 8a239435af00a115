import logging

from Sociocrates.share.SociocratesApp import SociocratesApp

logger = logging.getLogger(__name__)


def register_routers(app: SociocratesApp):
    """
    依次挂载所有功能模块的路由。
    Proposals 必须先于 Deliberation 注册，其固定路径优先于通用的步骤提交路径。
    """
    from Sociocrates.features import Admin, Auth, Circles, Deliberation, Proposals

    modules = [Auth, Circles, Proposals, Deliberation, Admin]
    for module in modules:
        module.setup(app)
    logger.info(f"已加载 {len(modules)} 个功能模块的路由。")
