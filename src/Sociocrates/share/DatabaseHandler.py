import logging
import os
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# --- 初始化 ---
load_dotenv()
logger = logging.getLogger(__name__)


class DatabaseHandler:
    """
    数据库处理程序
    负责数据库的初始化、连接和会话管理。
    程序运行时的实例通过 initialize_db_handler 和 get_db_handler 作为单例管理；
    测试可以直接传入数据库 URL 创建独立实例。
    """

    def __init__(self, database_url: Optional[str] = None):
        self._database_url = database_url
        self._async_engine: Optional[AsyncEngine] = None
        self._initialized = False

    @staticmethod
    def _resolve_url() -> str:
        """从环境变量中解析数据库连接地址，默认使用本地 SQLite 文件。"""
        database_url = os.getenv("DATABASE_URL")
        if database_url:
            return database_url

        db_name = os.getenv("DATABASE_NAME", "data/database.db")
        db_dir = os.path.dirname(db_name)
        if db_dir and not os.path.exists(db_dir):
            logger.info(f"数据库目录 '{db_dir}' 不存在，正在创建...")
            os.makedirs(db_dir)
        return f"sqlite+aiosqlite:///{db_name}"

    @property
    def is_sqlite(self) -> bool:
        return bool(self._database_url) and self._database_url.startswith("sqlite")

    def initialize(self):
        """
        执行实际的初始化，设置数据库引擎。
        这个方法应该只被调用一次。
        """
        if self._initialized:
            logger.warning("DatabaseHandler 已经初始化，跳过重复初始化。")
            return

        logger.info("正在初始化 DatabaseHandler...")

        if not self._database_url:
            self._database_url = self._resolve_url()

        sql_echo_str = os.getenv("SQL_ECHO", "False")
        sql_echo = sql_echo_str.lower() in ("true", "1", "t")

        connect_args = {"timeout": 15} if self.is_sqlite else {}
        self._async_engine = create_async_engine(
            self._database_url, echo=sql_echo, connect_args=connect_args
        )

        if self.is_sqlite:

            @event.listens_for(self._async_engine.sync_engine, "connect")
            def _configure_sqlite(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                try:
                    cursor.execute("PRAGMA journal_mode=WAL;")
                    cursor.execute("PRAGMA foreign_keys=ON;")
                finally:
                    cursor.close()

        self._initialized = True
        logger.info("DatabaseHandler 初始化完成。")

    async def init_db(self):
        """
        初始化数据库，创建所有定义的表 (包含索引)。
        """
        if not self._initialized or not self._async_engine:
            raise RuntimeError("DatabaseHandler 尚未初始化。请先调用 initialize()。")

        import Sociocrates.models  # noqa: F401

        async with self._async_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    def get_session(self) -> AsyncSession:
        """
        创建一个新的异步数据库会话实例。
        """
        if not self._initialized or not self._async_engine:
            raise RuntimeError("DatabaseHandler 尚未初始化。请先调用 initialize()。")
        return AsyncSession(self._async_engine)

    async def close(self):
        """释放连接池中的所有连接。"""
        if self._async_engine is not None:
            await self._async_engine.dispose()
            logger.info("数据库连接池已释放。")


# --- 单例管理 ---

_db_handler_instance: Optional[DatabaseHandler] = None


def initialize_db_handler() -> DatabaseHandler:
    """
    创建并初始化 DatabaseHandler 的单例实例。
    """
    global _db_handler_instance
    if _db_handler_instance is None:
        _db_handler_instance = DatabaseHandler()
        _db_handler_instance.initialize()
    return _db_handler_instance


def get_db_handler() -> DatabaseHandler:
    """
    获取 DatabaseHandler 的单例实例。
    如果实例尚未初始化，将引发 RuntimeError。
    """
    if _db_handler_instance is None:
        raise RuntimeError(
            "DatabaseHandler 实例尚未创建。请确保在程序启动时调用了 initialize_db_handler。"
        )
    return _db_handler_instance
