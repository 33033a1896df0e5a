"""
Map domain errors to JSON responses.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from rezervasyon.core.exceptions import DomainError
from rezervasyon.core.logging import get_logger

logger = get_logger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.exception("domain_error", code=exc.code, error=exc.message)
    else:
        logger.warning("domain_error", code=exc.code, error=exc.message, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "InternalError"},
    )


EXCEPTION_HANDLERS = {
    DomainError: domain_error_handler,
    Exception: unhandled_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
