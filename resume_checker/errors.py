"""Error taxonomy for the resume check pipeline.

Every failure raised inside the pipeline derives from ``ResumeCheckError`` and
carries a stable ``code``. The web layer maps these onto HTTP responses; the
detail attached here is for operator logs only.
"""

from __future__ import annotations

from typing import Any, Optional


class ResumeCheckError(Exception):
    """Base class for pipeline failures."""

    code = "RESUME_CHECK_FAILED"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ResumeCheckError):
    """Startup configuration is unusable (e.g. missing model credential)."""

    code = "CONFIGURATION_ERROR"


class ValidationError(ResumeCheckError):
    """Missing or invalid request input."""

    code = "VALIDATION_ERROR"


class UnsupportedType(ResumeCheckError):
    """Document media type has no extraction strategy."""

    code = "UNSUPPORTED_TYPE"

    def __init__(self, media_type: Optional[str]) -> None:
        super().__init__(f"Unsupported file type: {media_type!r}. Upload PDF or DOCX.")
        self.media_type = media_type


class ExtractionFailure(ResumeCheckError):
    """Extraction library failed to decode the document."""

    code = "EXTRACTION_FAILED"


class ModelCallFailed(ResumeCheckError):
    """Transport, authentication or provider-side failure of the model call."""

    code = "MODEL_CALL_FAILED"

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        provider_payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        # Opaque; only ever logged.
        self.provider_payload = provider_payload


class MalformedResponse(ResumeCheckError):
    """Model output could not be parsed into an evaluation."""

    code = "MALFORMED_RESPONSE"

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(message)
        self.raw_text = raw_text
