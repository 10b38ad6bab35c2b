"""Resume Checker Domain - extraction, prompt and response handling.

Nothing here talks to the network; the only I/O is reading the document handed
to the extractor.
"""

from .extractor import (
    DOCX_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    SUPPORTED_MEDIA_TYPES,
    extract_text,
    extract_text_async,
    is_supported_media_type,
)
from .normalizer import clean_model_text, normalize_response
from .prompts import DEFAULT_MAX_CHARS, EvaluationRequest, build_prompt, truncate_text
from .schemas import EvaluationResponse

__all__ = [
    # Extractor
    "extract_text",
    "extract_text_async",
    "is_supported_media_type",
    "PDF_MEDIA_TYPE",
    "DOCX_MEDIA_TYPE",
    "SUPPORTED_MEDIA_TYPES",
    # Prompts
    "build_prompt",
    "truncate_text",
    "EvaluationRequest",
    "DEFAULT_MAX_CHARS",
    # Normalizer
    "clean_model_text",
    "normalize_response",
    "EvaluationResponse",
]
