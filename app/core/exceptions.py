import logging

from fastapi import status
from fastapi.requests import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# ---------------------------
# Storage
# ---------------------------

class StorageError(Exception):
    """Base class for all storage backend errors."""
    pass

class PermissionDeniedError(StorageError):
    """Raised when the remote document store refuses the caller's credentials."""
    pass

class LocalStorageError(StorageError):
    """Raised when the local fallback store cannot be written."""
    pass

# ---------------------------
# Service
# ---------------------------

class NotFoundError(Exception):
    """Raised when a requested resource does not exist."""
    pass

class UnknownProviderError(Exception):
    """Raised for a wearable provider name that has no sample feed."""
    pass

class ReportError(Exception):
    """Base class for report e-mail failures."""
    pass

class ReportConfigurationError(ReportError):
    """Raised when the SMTP credentials are not configured."""
    pass

class ReportDeliveryError(ReportError):
    """Raised when the mail transport rejects or fails to send a report."""
    pass


# ---------------------------
# FastAPI Exception Handlers
# ---------------------------

def register_exception_handlers(app):
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.exception_handler(UnknownProviderError)
    async def unknown_provider_handler(request: Request, exc: UnknownProviderError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ReportError)
    async def report_error_handler(request: Request, exc: ReportError):
        logger.error(f"Failed to send weekly report: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Unable to send weekly report."},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Storage unavailable"},
        )
