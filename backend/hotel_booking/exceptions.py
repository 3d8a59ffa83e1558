"""
错误码与统一响应信封

所有错误响应形如 {"success": false, "data": null, "error": "<CODE>"}
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from hotel_booking.domain.reservation_rules import Rejection

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

# 错误码 -> HTTP 状态码
ERROR_STATUS = {
    "INVALID_REQUEST": status.HTTP_400_BAD_REQUEST,
    "INVALID_DATES": status.HTTP_400_BAD_REQUEST,
    "INVALID_CAPACITY": status.HTTP_400_BAD_REQUEST,
    "ROOM_NOT_AVAILABLE": status.HTTP_400_BAD_REQUEST,
    "ALREADY_CANCELLED": status.HTTP_400_BAD_REQUEST,
    "CANCELLATION_DEADLINE_PASSED": status.HTTP_400_BAD_REQUEST,
    "ALREADY_REVIEWED": status.HTTP_400_BAD_REQUEST,
    "BOOKING_NOT_ELIGIBLE": status.HTTP_400_BAD_REQUEST,
    "EMAIL_ALREADY_EXISTS": status.HTTP_400_BAD_REQUEST,
    "ROOM_ALREADY_EXISTS": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_AUTH_HEADER": status.HTTP_401_UNAUTHORIZED,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "HOTEL_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ROOM_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "BOOKING_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiError(Exception):
    """业务错误，code 决定 HTTP 状态码"""

    def __init__(self, code: str, message: str = ""):
        self.code = code
        self.message = message or code
        self.status_code = ERROR_STATUS.get(code, status.HTTP_400_BAD_REQUEST)
        super().__init__(self.message)

    @classmethod
    def from_rejection(cls, rejection: Rejection) -> "ApiError":
        return cls(rejection.reason.value, rejection.detail)


def error_response(status_code: int, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": None, "error": code},
    )


async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    logger.info(f"API error {exc.code} ({exc.status_code}): {exc.message}")
    return error_response(exc.status_code, exc.code)


async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Request validation failed: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST")


async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 框架层错误（405 等）同样只返回闭集内的错误码
    fallback = INTERNAL_SERVER_ERROR if exc.status_code >= 500 else "INVALID_REQUEST"
    code = {
        status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
        status.HTTP_403_FORBIDDEN: "FORBIDDEN",
        status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    }.get(exc.status_code, fallback)
    return error_response(exc.status_code, code)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
