import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from Sociocrates.share.auth.IdentityAssertion import IdentityAssertion
from Sociocrates.share.DatabaseHandler import DatabaseHandler
from Sociocrates.share.TimeUtils import TimeUtils

if TYPE_CHECKING:
    from Sociocrates.features.Deliberation.tasks.AutoAdvancer import AutoAdvancer

logger = logging.getLogger(__name__)


class SociocratesApp(FastAPI):
    """
    自定义 FastAPI 应用类。
    为项目中共享的运行时对象（数据库、配置、时间工具、身份验证、后台任务）
    提供集中的定义，以便在整个项目中获得准确的类型提示。
    """

    db_handler: DatabaseHandler
    config: Dict[str, Any]
    time_utils: TimeUtils
    identity: IdentityAssertion
    auto_advancer: Optional["AutoAdvancer"]


@asynccontextmanager
async def _lifespan(app: SociocratesApp):
    await app.db_handler.init_db()
    logger.info("数据库表结构已就绪。")

    if app.auto_advancer is not None:
        app.auto_advancer.start()
    try:
        yield
    finally:
        if app.auto_advancer is not None:
            await app.auto_advancer.stop()
        await app.db_handler.close()


def create_app(
    config: Dict[str, Any],
    db_handler: DatabaseHandler,
    jwt_secret: str,
    time_utils: Optional[TimeUtils] = None,
) -> SociocratesApp:
    """
    组装应用：挂载中间件、异常处理器和全部路由。

    db_handler 必须已经调用过 initialize()；应用关闭时会释放其连接池。
    """
    from Sociocrates.features import register_routers
    from Sociocrates.features.Deliberation.tasks.AutoAdvancer import AutoAdvancer
    from Sociocrates.share.ErrorHandlers import register_exception_handlers

    app = SociocratesApp(title="Sociocrates", lifespan=_lifespan)
    app.config = config
    app.db_handler = db_handler
    app.time_utils = time_utils or TimeUtils()
    app.identity = IdentityAssertion(jwt_secret, db_handler)

    auto_advance = config.get("auto_advance", {})
    if auto_advance.get("enabled", False):
        app.auto_advancer = AutoAdvancer(app, float(auto_advance.get("interval_seconds", 60)))
    else:
        app.auto_advancer = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get("cors_origins", ["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/api/ping")
    async def ping():
        return {"status": "ok"}

    register_routers(app)
    return app
