"""Client that sends an evaluation prompt to the configured model."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .errors import ModelCallFailed
from .providers import ChatProvider
from .providers.types import GenerationConfig, LLMResponse, Message, ProviderError
from .retry import RetryConfig, retry_with_backoff

logger = logging.getLogger(__name__)


class EvaluationClient:
    """Single-message model client with a bounded timeout and optional retry."""

    def __init__(
        self,
        provider: ChatProvider,
        generation: Optional[GenerationConfig] = None,
        timeout_seconds: Optional[float] = 60.0,
        retry: Optional[RetryConfig] = None,
    ) -> None:
        self.provider = provider
        self.generation = generation or GenerationConfig(response_mime_type="application/json")
        self.timeout_seconds = timeout_seconds
        self.retry = retry or RetryConfig()

    @property
    def model(self) -> str:
        return getattr(self.provider, "model", "unknown")

    async def evaluate(self, prompt: str) -> str:
        """Send ``prompt`` as one user message and return the raw model text.

        Raises:
            ModelCallFailed: on timeout, transport, auth or provider error, or
                an empty response.
        """
        logger.info("Sending request to %s...", self.model)
        try:
            response = await retry_with_backoff(self._call_once, self.retry, prompt)
        except asyncio.CancelledError:
            raise
        except asyncio.TimeoutError as e:
            raise ModelCallFailed(
                f"Model call timed out after {self.timeout_seconds}s",
                cause=e,
            ) from e
        except Exception as e:
            logger.error("Model call failed: %s", e)
            raise ModelCallFailed(
                f"Model call failed: {e}",
                cause=e,
                provider_payload=e.payload if isinstance(e, ProviderError) else None,
            ) from e

        if not response.text:
            raise ModelCallFailed("Model returned an empty response", provider_payload=response.raw)

        logger.info(
            "Model raw response received (%d chars, usage=%s).",
            len(response.text),
            response.usage or {},
        )
        return response.text

    async def _call_once(self, prompt: str) -> LLMResponse:
        call = self.provider.generate([Message.user(prompt)], self.generation)
        if self.timeout_seconds:
            return await asyncio.wait_for(call, timeout=self.timeout_seconds)
        return await call
