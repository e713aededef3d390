"""Error Handlers — global exception handlers for the portfolio API.

Invariants:
    - PortfolioError → its own status + {success: false, message, code}
    - RequestValidationError → 400 with every violated field listed
    - Unmatched routes → 404 "Route <METHOD> <path> not found"
      (unknown path or known path with an unsupported method)
    - Exception (catch-all) → error.log entry + 500 envelope
    - Errors with status >= 500 are appended to the error log file
    - Stack traces reach the caller only in the development environment

Design Decisions:
    - Four-layer handler: domain, validation, framework HTTP, catch-all
    - Error-log writes never raise, so a handler cannot re-enter itself
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio.api.dependencies import client_address
from portfolio.api.middleware import rate_limited_response
from portfolio.core.errors import PortfolioError, RateLimitExceededError
from portfolio.infrastructure.error_log import format_stack

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
ROUTE_NOT_FOUND_STATUSES = (
    status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_portfolio_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_portfolio_error_handler(app: FastAPI) -> None:

    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        """Handle all domain/infrastructure errors."""
        if isinstance(exc, RateLimitExceededError):
            return rate_limited_response(exc)

        content = exc.to_response()
        if exc.http_status >= 500:
            logger.error(
                f"PortfolioError: {exc.message}",
                extra={"error_code": exc.code, "path": request.url.path},
                exc_info=exc,
            )
            _write_error_log(request, exc)
            if _is_development(request):
                content["stack"] = format_stack(exc)
        else:
            logger.info(
                f"PortfolioError: {exc.message}",
                extra={"error_code": exc.code, "path": request.url.path},
            )
        return JSONResponse(status_code=exc.http_status, content=content)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors with a field-level list."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Unmatched routes and other framework-raised HTTP errors.

        A known path hit with the wrong method is still an unmatched route.
        """
        if exc.status_code in ROUTE_NOT_FOUND_STATUSES:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "success": False,
                    "message": f"Route {request.method} {_request_url(request)} not found",
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: log to error.log, expose details only in development."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"path": request.url.path, "method": request.method},
            exc_info=exc,
        )
        _write_error_log(request, exc)

        status_code = _status_of(exc)
        development = _is_development(request)
        if development or status_code < 500:
            message = str(exc) or INTERNAL_ERROR_MESSAGE
        else:
            message = INTERNAL_ERROR_MESSAGE
        content = {"success": False, "message": message}
        if development:
            content["stack"] = format_stack(exc)
        return JSONResponse(status_code=status_code, content=content)


def build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build the 400 envelope; `body` is dropped from field paths."""
    return {
        "success": False,
        "message": "Validation failed",
        "errors": [
            {
                "field": _field_path(e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }


def _field_path(loc: tuple) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] == "body":
        parts = parts[1:]
    return ".".join(parts) or "body"


def _status_of(exc: Exception) -> int:
    code = getattr(exc, "status_code", None)
    if isinstance(code, int) and 400 <= code <= 599:
        return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _request_url(request: Request) -> str:
    """Path plus query string, as the client sent it."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def _is_development(request: Request) -> bool:
    return request.app.state.settings.is_development


def _write_error_log(request: Request, exc: BaseException) -> None:
    request.app.state.error_log.write(
        exc,
        method=request.method,
        url=_request_url(request),
        ip=client_address(request),
        user_agent=request.headers.get("user-agent"),
    )
