import logging
import os


class LoggingConfigurator:
    """
    一个用于集中配置项目日志记录器的类。
    """

    def __init__(self, rootLogLevel: str = "INFO"):
        """
        初始化配置器。
        :param rootLogLevel: 从 .env 文件读取的根日志级别字符串。
        """
        self.logLevel = getattr(logging, rootLogLevel.upper(), logging.INFO)
        self.formatter = logging.Formatter("%(asctime)s:%(levelname)s:%(name)s: %(message)s")
        self.streamHandler = logging.StreamHandler()
        self.streamHandler.setFormatter(self.formatter)

    def configure(self):
        """
        应用所有日志配置。
        """
        self._configurePackageLogger()
        self._configureSqlAlchemyLogger()
        self._configureUvicornLogger()
        logging.getLogger("Sociocrates").info("日志记录器配置完成。")

    def _configurePackageLogger(self):
        """配置包级别的日志记录器，模块通过 __name__ 继承它。"""
        logger = logging.getLogger("Sociocrates")
        logger.setLevel(self.logLevel)
        if not logger.handlers:
            logger.addHandler(self.streamHandler)
        logger.propagate = False

    def _configureSqlAlchemyLogger(self):
        """配置 SQLAlchemy 的日志记录器。"""
        # 从环境变量获取 SQLAlchemy 的日志级别，默认为 WARNING
        log_level_str = os.getenv("SQLALCHEMY_LOG_LEVEL", "WARNING").upper()
        log_level = getattr(logging, log_level_str, logging.WARNING)

        sql_logger = logging.getLogger("sqlalchemy.engine")
        sql_logger.setLevel(log_level)
        if not sql_logger.handlers:
            sql_logger.addHandler(self.streamHandler)
        sql_logger.propagate = False

    def _configureUvicornLogger(self):
        """让 uvicorn 的服务与访问日志使用统一的格式。"""
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            uvicorn_logger = logging.getLogger(name)
            uvicorn_logger.setLevel(self.logLevel)
            uvicorn_logger.handlers = [self.streamHandler]
            uvicorn_logger.propagate = False
