from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException, DatabaseError, is_unique_violation
import logging

logger = logging.getLogger(__name__)


def error_body(message, details=None) -> dict:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return body


# -------------------------
# APP EXCEPTIONS
# -------------------------
async def app_exception_handler(request: Request, exc: AppException):
    logger.info(
        "%s %s -> %s %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.error_code.value,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.details),
    )


# -------------------------
# FASTAPI VALIDATION
# -------------------------
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    return JSONResponse(
        status_code=422,
        content=error_body("Invalid request data", jsonable_encoder(exc.errors())),
    )


# -------------------------
# HTTP EXCEPTIONS (404 routes, 405, ...)
# -------------------------
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


# -------------------------
# DB ERRORS not translated by a service
# -------------------------
async def database_error_handler(request: Request, exc: DatabaseError):
    logger.error(
        "Unhandled database error | code=%s | %s %s",
        exc.code,
        request.method,
        request.url.path,
    )

    if is_unique_violation(exc):
        return JSONResponse(
            status_code=400,
            content=error_body("Database constraint violation"),
        )

    return JSONResponse(
        status_code=500,
        content=error_body("Internal server error"),
    )


# -------------------------
# LAST RESORT
# -------------------------
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content=error_body("Something went wrong. Please try again."),
    )
