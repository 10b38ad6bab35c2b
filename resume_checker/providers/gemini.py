"""Gemini provider implementation."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .types import GenerationConfig, LLMResponse, Message, ProviderError


class GeminiProvider:
    """Google Gemini provider using google-genai SDK."""

    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str = "",
    ) -> None:
        self.model = model
        # google-genai does not expose a stable api_base option; keep for future use
        _ = api_base
        self.client = genai.Client(api_key=api_key)

    async def generate(
        self,
        messages: List[Message],
        config: GenerationConfig,
    ) -> LLMResponse:
        contents = self._to_gemini_contents(messages)

        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(
                    system_instruction=config.system_prompt if config.system_prompt else None,
                    max_output_tokens=config.max_tokens,
                    temperature=config.temperature,
                    response_mime_type=config.response_mime_type,
                ),
            )
        except genai_errors.APIError as e:
            raise ProviderError(str(e), payload=e.details) from e

        return self._from_gemini_response(response)

    def _from_gemini_response(self, response) -> LLMResponse:
        if not response.candidates:
            raise RuntimeError("Empty LLM response: no candidates")

        candidate = response.candidates[0]
        parts = candidate.content.parts if candidate.content else []
        text_parts: List[str] = [part.text for part in parts or [] if part.text]

        return LLMResponse(
            text="".join(text_parts).strip(),
            usage=self._usage_from_metadata(getattr(response, "usage_metadata", None)),
            raw=response,
        )

    def _usage_from_metadata(self, metadata) -> Optional[Dict[str, int]]:
        if metadata is None:
            return None
        return {
            "prompt_tokens": int(getattr(metadata, "prompt_token_count", 0) or 0),
            "completion_tokens": int(getattr(metadata, "candidates_token_count", 0) or 0),
            "total_tokens": int(getattr(metadata, "total_token_count", 0) or 0),
        }

    def _to_gemini_contents(self, messages: List[Message]) -> List[types.Content]:
        contents: List[types.Content] = []
        for msg in messages:
            role = "model" if msg.role == "assistant" else "user"
            parts = [types.Part.from_text(text=part.text) for part in msg.parts if part.text]
            contents.append(types.Content(role=role, parts=parts))
        return contents
