# apps/api_server/core/errors.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.api_server.core.utils import elapsed_ms
from packages.quant_lib.logging import get_logger
from packages.screener.errors import ValidationError

logger = get_logger("errors")


def error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    """Every error body has the same shape: {"error", "execution_time_ms"}."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "execution_time_ms": elapsed_ms(request)},
    )


async def screener_validation_handler(request: Request, exc: ValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return error_response(request, 400, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # FastAPI's own body/query validation; report as 400 like ours
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return error_response(request, 400, f"{loc}: {message}" if loc else message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(request, exc.status_code, str(exc.detail))


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit hit on {request.url.path}: {exc.detail}")
    return error_response(request, 429, f"Rate limit exceeded: {exc.detail}")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(
        f"Unhandled error on {request.method} {request.url.path}"
    )
    return error_response(request, 500, "Internal server error")


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, screener_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
