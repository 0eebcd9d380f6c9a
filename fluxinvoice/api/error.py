"""API error handling

Use case errors are raised as ClientError and rendered as
{"error": {"code": ..., "message": ...}}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fluxinvoice.libs.result import Error

logger = logging.getLogger(__name__)

# Write failures use 507 so clients can tell "not persisted" from bad input
STORAGE_FAILURE_CODES = {"SAVE_FAILED", "DUPLICATE_FAILED", "DELETE_FAILED", "EDIT_HANDOFF_FAILED"}


class ClientError(Exception):

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


def error_status(error: Error) -> int:
    """HTTP status for a use case error code"""
    if error.code == "INVOICE_NOT_FOUND":
        return status.HTTP_404_NOT_FOUND
    if error.code in STORAGE_FAILURE_CODES:
        return status.HTTP_507_INSUFFICIENT_STORAGE
    if error.code == "EXPORT_FAILED":
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def raise_for_error(error: Error) -> None:
    raise ClientError(error, status_code=error_status(error))


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} ({exc.error.reason})")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClientError, client_error_handler)
