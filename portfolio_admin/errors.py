"""
Error taxonomy and the FastAPI handlers that turn it into JSON responses.

Every failure body carries a human readable ``message`` and ``error``; there
are no machine-readable error codes.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .logging import get_logger

logger = get_logger("portfolio_admin.errors")


class PortfolioError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthorizedError(PortfolioError):
    """No caller identity on a write path."""
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidInputError(PortfolioError):
    """Missing required field or malformed payload."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(PortfolioError):
    status_code = status.HTTP_404_NOT_FOUND


def _payload(message: str, error: str | None = None) -> dict:
    return {"message": message, "error": error if error is not None else message}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        logger.warning(
            "request_rejected",
            path=request.url.path,
            status_code=exc.status_code,
            error_type=type(exc).__name__,
            detail=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=_payload(exc.message))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning("http_exception", path=request.url.path, status_code=exc.status_code, detail=exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_payload(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("validation_error", path=request.url.path, errors=exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_payload("Invalid request", "; ".join(_describe(e) for e in exc.errors())),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        # The underlying message is surfaced for diagnostics only.
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_payload("Server error", str(exc)),
        )


def _describe(err: dict) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    return f"{loc}: {err.get('msg', 'invalid')}" if loc else err.get("msg", "invalid")
