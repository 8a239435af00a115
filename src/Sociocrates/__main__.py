import json
import logging
import os
import sys

import aiorun
import uvicorn
from dotenv import load_dotenv

from Sociocrates.share.DatabaseHandler import get_db_handler, initialize_db_handler
from Sociocrates.share.LoggingConfigurator import LoggingConfigurator
from Sociocrates.share.SociocratesApp import SociocratesApp, create_app

# --- .env 和 日志配置 ---
load_dotenv()
log_level = os.getenv("LOG_LEVEL", "INFO")
configurator = LoggingConfigurator(rootLogLevel=log_level)
configurator.configure()

logger = logging.getLogger("Sociocrates")
# --- 日志配置结束 ---


if sys.platform != "win32":
    try:
        import uvloop

        uvloop.install()
        logger.info("已成功启用 uvloop 作为 asyncio 事件循环")
    except ImportError:
        logger.warning("尝试启用 uvloop 失败，将使用默认事件循环")


CONFIG_PATH = os.getenv("SOCIOCRATES_CONFIG", "config.json")

app: SociocratesApp | None = None
server: uvicorn.Server | None = None


def load_config(path: str = CONFIG_PATH) -> dict:
    """读取 config.json；文件不存在时使用默认配置。"""
    if not os.path.exists(path):
        logger.warning(f"未找到配置文件 '{path}'，将使用默认配置。")
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


async def shutdown(loop):
    """专门用于清理资源的关闭回调函数"""
    logger.info("收到关闭信号，正在关闭服务资源...")
    if server:
        server.should_exit = True

    if app and app.auto_advancer:
        await app.auto_advancer.stop()

    try:
        await get_db_handler().close()
    except RuntimeError:
        pass

    logger.info("所有资源已清理，程序退出。")


async def main_async():
    """主函数，设置并运行 HTTP 服务"""
    global app, server

    jwt_secret = os.getenv("JWT_SECRET")
    if not jwt_secret or jwt_secret == "YOUR_JWT_SECRET_HERE":
        logger.error("错误: 未找到或未配置 JWT_SECRET。")
        return

    config = load_config()

    db_handler = initialize_db_handler()
    logger.info("DatabaseHandler 初始化完成。")

    app = create_app(config, db_handler, jwt_secret)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.get("host", "127.0.0.1"),
        port=int(config.get("port", 8000)),
        log_config=None,
    )
    server = uvicorn.Server(uvicorn_config)
    logger.info(f"------ 服务即将在 {uvicorn_config.host}:{uvicorn_config.port} 启动 ------")
    await server.serve()


def main():
    """主入口函数"""
    aiorun.run(main_async(), shutdown_callback=shutdown, stop_on_unhandled_errors=True)


if __name__ == "__main__":
    main()
