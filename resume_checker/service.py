"""Resume check pipeline: extract, prompt, evaluate, normalize."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

from .config import AppConfig
from .domain.extractor import extract_text_async
from .domain.normalizer import normalize_response
from .domain.prompts import DEFAULT_MAX_CHARS, EvaluationRequest
from .errors import ValidationError
from .evaluation import EvaluationClient
from .observability import CheckObserver
from .providers import create_provider
from .providers.types import GenerationConfig
from .retry import RetryConfig

logger = logging.getLogger(__name__)


class ResumeChecker:
    """Runs one resume through extraction, evaluation and normalization.

    Holds no per-request state; one instance serves concurrent requests.
    """

    def __init__(
        self,
        client: EvaluationClient,
        max_chars: int = DEFAULT_MAX_CHARS,
        strict_schema: bool = False,
    ) -> None:
        self.client = client
        self.max_chars = max_chars
        self.strict_schema = strict_schema

    @classmethod
    def from_config(cls, config: AppConfig) -> "ResumeChecker":
        provider = create_provider(
            provider=config.provider,
            api_key=config.api_key,
            model=config.model,
            api_base=config.api_base,
        )
        client = EvaluationClient(
            provider=provider,
            generation=GenerationConfig(
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                response_mime_type="application/json",
            ),
            timeout_seconds=config.timeout_seconds,
            retry=RetryConfig(max_attempts=config.max_attempts),
        )
        return cls(client=client, max_chars=config.max_prompt_chars, strict_schema=config.strict_schema)

    async def check(
        self,
        path: Union[str, Path],
        media_type: Optional[str],
        job_title: str,
        observer: Optional[CheckObserver] = None,
    ) -> Any:
        """Evaluate the resume stored at ``path`` against ``job_title``.

        Raises:
            ValidationError: blank job title.
            UnsupportedType, ExtractionFailure: document could not be read.
            ModelCallFailed: model call failed or timed out.
            MalformedResponse: model output was not usable JSON.
        """
        if not job_title or not job_title.strip():
            raise ValidationError("Job title required")
        observer = observer or CheckObserver()

        with observer.stage("extract", media_type=media_type) as details:
            resume_text = await extract_text_async(path, media_type)
            details["chars"] = len(resume_text)
        logger.info("Resume text extracted. Length: %d", len(resume_text))
        if not resume_text.strip():
            logger.warning("No text extracted from %s; evaluating an empty resume", path)

        request = EvaluationRequest.create(resume_text, job_title.strip(), self.max_chars)
        if len(request.resume_text) < len(resume_text):
            logger.info("Resume text truncated to %d characters", self.max_chars)

        with observer.stage("evaluate", model=self.client.model):
            raw = await self.client.evaluate(request.render())

        with observer.stage("normalize", strict=self.strict_schema):
            return normalize_response(raw, strict=self.strict_schema)
