"""Maps domain exceptions to JSON error responses.

Every error body has the shape ``{"message": <localized text>, "kind": <code>}``.
Internal details are logged, never returned.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.domain.exceptions import (
    DomainError,
    EntityNotFoundError,
    ForbiddenError,
    RenderError,
    StorageError,
    UnauthenticatedError,
    ValidationError,
)
from app.presentation.middleware.cors import allow_origin_headers

logger = logging.getLogger(__name__)

_NOT_FOUND_MESSAGES: dict[str, str] = {
    "Contract": "合同不存在",
    "Document": "文件不存在",
}


def error_response(
    status_code: int, message: str, kind: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "kind": kind},
        headers=headers,
    )


async def _unauthenticated(request: Request, exc: UnauthenticatedError) -> JSONResponse:
    return error_response(
        status.HTTP_401_UNAUTHORIZED, "缺少 openId，无法识别用户身份", exc.kind
    )


async def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    logger.info("Forbidden %s %s: %s", request.method, request.url.path, exc)
    return error_response(status.HTTP_403_FORBIDDEN, "无权限执行该操作", exc.kind)


async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    message = _NOT_FOUND_MESSAGES.get(exc.entity_type, "资源不存在")
    return error_response(status.HTTP_404_NOT_FOUND, message, exc.kind)


async def _validation(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, f"{exc.field} 为必填项", exc.kind)


async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "请求参数不合法", ValidationError.kind)


async def _render_failed(request: Request, exc: RenderError) -> JSONResponse:
    logger.error("Render failed on %s %s: %s", request.method, request.url.path, exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "合同文件生成失败，请稍后重试", exc.kind
    )


async def _storage_failed(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failed on %s %s: %s", request.method, request.url.path, exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "合同文件存储失败，请稍后重试", exc.kind
    )


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), "http_error")


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    # runs outside CORSMiddleware
    headers = allow_origin_headers(request.headers.get("origin"), get_settings().cors_origins)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "服务器内部错误", DomainError.kind, headers
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UnauthenticatedError, _unauthenticated)
    app.add_exception_handler(ForbiddenError, _forbidden)
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(ValidationError, _validation)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(RenderError, _render_failed)
    app.add_exception_handler(StorageError, _storage_failed)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected)
