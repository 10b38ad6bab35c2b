"""API error helpers and exception handlers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

JOB_TITLE_REQUIRED = "Job title required"
RESUME_REQUIRED = "Resume file is required (PDF or DOCX)"
UPLOAD_TOO_LARGE = "Resume file exceeds size limit"
ANALYSIS_FAILED = "Resume analysis failed"
INVALID_PAYLOAD = "Invalid request payload"

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Application-level API error with status/code mapping.

    Only ``message`` reaches the response body; ``code`` and ``details`` are
    logged by ``api_error_handler``.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
    """Render contract-compliant error response."""
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(level, "api_error status=%s code=%s details=%s", exc.status_code, exc.code, exc.details)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize FastAPI validation errors to the API error shape."""
    return JSONResponse(status_code=400, content={"error": INVALID_PAYLOAD})
