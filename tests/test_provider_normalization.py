"""Provider response normalization and factory tests."""

from types import SimpleNamespace

import httpx
import openai
import pytest
from google.genai import errors as genai_errors

from resume_checker.errors import ConfigurationError
from resume_checker.providers import create_provider, resolve_api_key
from resume_checker.providers.gemini import GeminiProvider
from resume_checker.providers.openai_compat import OpenAICompatibleProvider
from resume_checker.providers.types import GenerationConfig, Message, ProviderError


def test_gemini_response_joins_text_parts_and_usage():
    provider = GeminiProvider(api_key="test-key", model="gemini-2.5-flash")

    response = SimpleNamespace(
        candidates=[
            SimpleNamespace(
                content=SimpleNamespace(
                    parts=[
                        SimpleNamespace(text='{"atsScore": '),
                        SimpleNamespace(text=None),
                        SimpleNamespace(text="80}"),
                    ]
                )
            )
        ],
        usage_metadata=SimpleNamespace(prompt_token_count=100, candidates_token_count=20, total_token_count=120),
    )

    normalized = provider._from_gemini_response(response)
    assert normalized.text == '{"atsScore": 80}'
    assert normalized.usage == {"prompt_tokens": 100, "completion_tokens": 20, "total_tokens": 120}


def test_gemini_response_without_candidates_raises():
    provider = GeminiProvider(api_key="test-key", model="gemini-2.5-flash")

    with pytest.raises(RuntimeError):
        provider._from_gemini_response(SimpleNamespace(candidates=[]))


def test_gemini_contents_use_user_role():
    provider = GeminiProvider(api_key="test-key", model="gemini-2.5-flash")

    contents = provider._to_gemini_contents([Message.user("prompt")])

    assert len(contents) == 1
    assert contents[0].role == "user"
    assert contents[0].parts[0].text == "prompt"


def test_openai_completion_normalizes_list_content_and_usage():
    provider = OpenAICompatibleProvider(api_key="test-key", model="gpt-4o-mini")

    completion = SimpleNamespace(
        choices=[
            SimpleNamespace(
                message=SimpleNamespace(
                    content=[
                        {"type": "text", "text": '{"atsScore":'},
                        {"type": "text", "text": " 61}"},
                    ],
                )
            )
        ],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=20, total_tokens=30),
    )

    response = provider._from_openai_completion(completion)

    assert response.text == '{"atsScore": 61}'
    assert response.usage == {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30}


def test_openai_json_mode_requested_for_json_mime_type():
    provider = OpenAICompatibleProvider(api_key="test-key", model="gpt-4o-mini")
    config = GenerationConfig(response_mime_type="application/json", temperature=0.2)

    kwargs = provider._build_chat_kwargs(provider._to_openai_messages([Message.user("hi")], ""), config)

    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"] == [{"role": "user", "content": "hi"}]
    assert kwargs["temperature"] == 0.2


@pytest.mark.asyncio
async def test_openai_rejected_temperature_is_a_single_failed_call():
    provider = OpenAICompatibleProvider(api_key="test-key", model="kimi-k2", api_base="https://api.moonshot.cn/v1")
    calls = []

    async def create(**kwargs):
        calls.append(kwargs)
        raise openai.BadRequestError(
            "Error code: 400 - invalid temperature: only 1 is allowed for this model",
            response=httpx.Response(400, request=httpx.Request("POST", "https://api.moonshot.cn/v1/chat/completions")),
            body={"error": {"message": "invalid temperature: only 1 is allowed for this model"}},
        )

    provider.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    with pytest.raises(ProviderError) as exc_info:
        await provider.generate([Message.user("hi")], GenerationConfig(temperature=0.2))

    assert len(calls) == 1
    assert calls[0]["temperature"] == 0.2
    assert exc_info.value.payload == {"error": {"message": "invalid temperature: only 1 is allowed for this model"}}
    assert isinstance(exc_info.value.__cause__, openai.BadRequestError)


@pytest.mark.asyncio
async def test_gemini_api_error_carries_response_body():
    provider = GeminiProvider(api_key="test-key", model="gemini-2.5-flash")
    body = {"error": {"code": 400, "message": "API key not valid", "status": "INVALID_ARGUMENT"}}

    def generate_content(**kwargs):
        raise genai_errors.ClientError(400, body)

    provider.client = SimpleNamespace(models=SimpleNamespace(generate_content=generate_content))

    with pytest.raises(ProviderError) as exc_info:
        await provider.generate([Message.user("hi")], GenerationConfig())

    assert exc_info.value.payload == body
    assert isinstance(exc_info.value.__cause__, genai_errors.ClientError)


def test_create_provider_defaults_to_gemini():
    provider = create_provider(provider="gemini", api_key="test-key", model="gemini-2.5-flash")

    assert isinstance(provider, GeminiProvider)
    assert provider.model == "gemini-2.5-flash"


def test_create_provider_uses_default_api_base_for_openai_compatible():
    provider = create_provider(provider="deepseek", api_key="test-key", model="deepseek-chat")

    assert isinstance(provider, OpenAICompatibleProvider)
    assert provider.api_base == "https://api.deepseek.com"


def test_resolve_api_key_prefers_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")

    assert resolve_api_key("gemini", "config-key") == "env-key"


def test_resolve_api_key_expands_placeholder(monkeypatch):
    monkeypatch.setenv("MY_KEY", "from-placeholder")

    assert resolve_api_key("gemini", "${MY_KEY}") == "from-placeholder"


def test_resolve_api_key_missing_raises_configuration_error():
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_api_key("gemini", "")

    assert "GEMINI_API_KEY" in exc_info.value.message
