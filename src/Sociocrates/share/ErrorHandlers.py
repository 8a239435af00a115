import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError

from Sociocrates.share.exceptions import SociocratesError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "message": message})


def register_exception_handlers(app: FastAPI):
    """
    将业务异常与存储异常统一映射为 {"error": kind, "message": text} 响应。
    """

    @app.exception_handler(SociocratesError)
    async def handle_sociocrates_error(request: Request, exc: SociocratesError):
        logger.debug(f"{request.method} {request.url.path} 被拒绝: {exc.kind}: {exc.message}")
        return _error_response(exc.status_code, exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return _error_response(400, "validation_error", f"请求格式不正确: {details}")

    @app.exception_handler(DBAPIError)
    async def handle_storage_error(request: Request, exc: DBAPIError):
        if isinstance(exc, IntegrityError):
            logger.warning(f"{request.method} {request.url.path} 违反数据约束: {exc.orig}")
            return _error_response(409, "conflict", "数据已被其他操作修改，请刷新后重试。")
        logger.error(f"{request.method} {request.url.path} 访问数据库失败: {exc}", exc_info=True)
        return _error_response(503, "service_unavailable", "数据库暂时不可用，请稍后重试。")
