"""Service error taxonomy and the handler that renders it as JSON.

Collaborator adapters raise their own narrow exceptions (``FetchError``,
``ImageMetadataError``, ``ObjectStoreError``); the services translate those
into ``ServiceError`` subclasses, which carry the HTTP status and the
client-facing message.
"""
import logging
from typing import Optional

from fastapi import Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Remote GET failed: network error, timeout or non-2xx status."""


class ImageMetadataError(Exception):
    """Bytes could not be identified as a supported image."""


class ObjectStoreError(Exception):
    """Object storage put/head failed."""


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request"


class NoDataError(ServiceError):
    status_code = 404
    default_message = "No data found to generate PDF"


class UpstreamFetchError(ServiceError):
    default_message = "Failed to upload image"


class MetadataError(ServiceError):
    default_message = "Failed to upload image"


class StorageError(ServiceError):
    default_message = "Failed to upload image"


class PersistenceError(ServiceError):
    default_message = "Failed to upload image"


class MetadataLookupError(ServiceError):
    default_message = "Failed to fetch file metadata"


class GenerationError(ServiceError):
    default_message = "Failed to generate PDF"


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.info(
        "%s %s -> %d %s", request.method, request.url.path, exc.status_code, type(exc).__name__
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


# Bodies that are absent, not JSON objects, or carry a non-string field are
# reported like a missing field on these routes.
REQUIRED_FIELD_MESSAGES = {
    "/upload": "Image URL is required",
    "/getfiledetails": "File key is required",
}


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = REQUIRED_FIELD_MESSAGES.get(request.url.path)
    if message is None:
        return await request_validation_exception_handler(request, exc)
    logger.warning("Rejected %s %s body: %s", request.method, request.url.path, exc.errors())
    return await service_error_handler(request, ValidationError(message))
