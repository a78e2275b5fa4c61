"""
Error taxonomy for the AI endpoints.

Every failure in the shelf-life pipeline is raised as one of these and turned
into a JSON body of the form ``{"error": ..., "details": ..., "rawResponse": ...}``
by :func:`register_exception_handlers`. Nothing is retried.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ExpiryTrackerError(Exception):
    status_code = 500

    def __init__(self, message: str, details: str | None = None, raw_response: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.raw_response = raw_response

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        if self.raw_response is not None:
            body["rawResponse"] = self.raw_response
        return body


class ValidationError(ExpiryTrackerError):
    """Malformed or missing input."""

    status_code = 400


class UnsupportedMediaType(ExpiryTrackerError):
    status_code = 415


class UpstreamError(ExpiryTrackerError):
    """The completion service call failed."""

    status_code = 500


class MalformedAIResponse(ExpiryTrackerError):
    """The completion service answered, but no JSON object could be recovered."""

    status_code = 500

    def __init__(self, message: str = "Invalid AI response format", raw_response: str | None = None,
                 details: str | None = None):
        super().__init__(message, details=details, raw_response=raw_response)


async def _handle_expiry_tracker_error(request: Request, exc: ExpiryTrackerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.details})")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ExpiryTrackerError, _handle_expiry_tracker_error)
