"""OpenAI-compatible provider implementation."""

from __future__ import annotations

from typing import Any, Dict, List

import openai
from openai import AsyncOpenAI

from .types import GenerationConfig, LLMResponse, Message, ProviderError


class OpenAICompatibleProvider:
    """Provider for OpenAI-compatible chat APIs."""

    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str = "",
    ) -> None:
        self.model = model
        self.api_base = api_base or ""
        self.client = AsyncOpenAI(api_key=api_key, base_url=api_base or None)

    async def generate(
        self,
        messages: List[Message],
        config: GenerationConfig,
    ) -> LLMResponse:
        kwargs = self._build_chat_kwargs(
            messages=self._to_openai_messages(messages, config.system_prompt),
            config=config,
        )
        try:
            completion = await self.client.chat.completions.create(**kwargs)
        except openai.APIError as e:
            raise ProviderError(str(e), payload=e.body) from e
        return self._from_openai_completion(completion)

    def _build_chat_kwargs(
        self,
        messages: List[Dict[str, Any]],
        config: GenerationConfig,
    ) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }
        if config.max_tokens and config.max_tokens > 0:
            kwargs["max_tokens"] = config.max_tokens
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature
        if config.response_mime_type == "application/json":
            kwargs["response_format"] = {"type": "json_object"}
        return kwargs

    def _to_openai_messages(self, messages: List[Message], system_prompt: str) -> List[Dict[str, Any]]:
        result: List[Dict[str, Any]] = []
        if system_prompt:
            result.append({"role": "system", "content": system_prompt})
        for msg in messages:
            role = "assistant" if msg.role == "assistant" else "user"
            content = "\n".join(p.text for p in msg.parts if p.text)
            result.append({"role": role, "content": content})
        return result

    def _from_openai_completion(self, completion) -> LLMResponse:
        if not completion.choices:
            raise RuntimeError("Empty LLM response: no choices")

        message = completion.choices[0].message
        text = self._normalize_message_content(getattr(message, "content", ""))

        usage_data = getattr(completion, "usage", None)
        usage = None
        if usage_data:
            usage = {
                "prompt_tokens": int(getattr(usage_data, "prompt_tokens", 0) or 0),
                "completion_tokens": int(getattr(usage_data, "completion_tokens", 0) or 0),
                "total_tokens": int(getattr(usage_data, "total_tokens", 0) or 0),
            }

        return LLMResponse(text=text, usage=usage, raw=completion)

    def _normalize_message_content(self, content: Any) -> str:
        if content is None:
            return ""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            chunks: List[str] = []
            for item in content:
                if isinstance(item, str):
                    chunks.append(item)
                elif isinstance(item, dict):
                    chunks.append(str(item.get("text", "")))
                else:
                    chunks.append(str(getattr(item, "text", "") or ""))
            return "".join(chunks)
        return str(content)
