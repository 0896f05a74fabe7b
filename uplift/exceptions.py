import logging
from typing import Optional

from fastapi import FastAPI, status
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class UpliftError(Exception):
    """Base class for all journal errors."""
    pass


class ConfigurationError(UpliftError):
    """Raised when the summarization service credential is missing."""
    pass


# ---------------------------
# Summarization service
# ---------------------------

class SummaryError(UpliftError):
    """Base class for failures while generating a nightly summary."""
    pass


class ServiceError(SummaryError):
    """The summarization service answered with a non-success status."""

    def __init__(self, status_code: Optional[int], body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Summary service error ({status_code}): {body}")


class EmptyResponseError(SummaryError):
    """The service succeeded but returned no text."""
    pass


class MalformedResponseError(SummaryError):
    """The service text did not contain a parseable JSON object."""
    pass


# ---------------------------
# Store
# ---------------------------

class ReconciliationError(UpliftError):
    """The nightly check-in could not be re-read after it was written."""
    pass


# ---------------------------
# FastAPI Exception Handlers
# ---------------------------

def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ConfigurationError)
    async def configuration_handler(request: Request, exc: ConfigurationError):
        logger.warning(f"Configuration error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc)},
        )

    @app.exception_handler(SummaryError)
    async def summary_handler(request: Request, exc: SummaryError):
        logger.error(f"Summary generation failed: {exc}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ReconciliationError)
    async def reconciliation_handler(request: Request, exc: ReconciliationError):
        logger.error(f"Reconciliation error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )
