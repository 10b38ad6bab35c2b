"""Tests for the evaluation client."""

import asyncio

import pytest

from resume_checker.errors import ModelCallFailed
from resume_checker.evaluation import EvaluationClient
from resume_checker.providers.types import ProviderError
from resume_checker.retry import RetryConfig


@pytest.mark.asyncio
async def test_sends_single_user_message(fake_provider):
    client = EvaluationClient(fake_provider)

    text = await client.evaluate("Rate this resume")

    assert text == fake_provider.text
    assert len(fake_provider.calls) == 1
    messages = fake_provider.calls[0]
    assert len(messages) == 1
    assert messages[0].role == "user"
    assert messages[0].parts[0].text == "Rate this resume"


@pytest.mark.asyncio
async def test_requests_json_response_by_default(fake_provider):
    client = EvaluationClient(fake_provider)

    assert client.generation.response_mime_type == "application/json"
    assert client.model == "fake-model"


@pytest.mark.asyncio
async def test_provider_error_is_wrapped_with_cause(provider_factory):
    cause = PermissionError("API key not valid")
    client = EvaluationClient(provider_factory(error=cause))

    with pytest.raises(ModelCallFailed) as exc_info:
        await client.evaluate("prompt")

    assert exc_info.value.cause is cause
    assert exc_info.value.__cause__ is cause


@pytest.mark.asyncio
async def test_provider_payload_is_kept_opaque(provider_factory):
    error = ProviderError("400 INVALID_ARGUMENT", payload={"error": {"status": "INVALID_ARGUMENT"}})
    client = EvaluationClient(provider_factory(error=error))

    with pytest.raises(ModelCallFailed) as exc_info:
        await client.evaluate("prompt")

    assert exc_info.value.provider_payload == {"error": {"status": "INVALID_ARGUMENT"}}


@pytest.mark.asyncio
async def test_no_retry_by_default(provider_factory):
    provider = provider_factory(error=ConnectionError("connection reset"))
    client = EvaluationClient(provider)

    with pytest.raises(ModelCallFailed):
        await client.evaluate("prompt")

    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_bounded_retry_when_enabled(provider_factory):
    provider = provider_factory(error=ConnectionError("connection reset"))
    client = EvaluationClient(provider, retry=RetryConfig(max_attempts=3, base_delay=0.0, jitter_factor=0.0))

    with pytest.raises(ModelCallFailed):
        await client.evaluate("prompt")

    assert len(provider.calls) == 3


@pytest.mark.asyncio
async def test_timeout_raises_model_call_failed(provider_factory):
    client = EvaluationClient(provider_factory(delay=1.0), timeout_seconds=0.01)

    with pytest.raises(ModelCallFailed) as exc_info:
        await client.evaluate("prompt")

    assert "timed out" in exc_info.value.message


@pytest.mark.asyncio
async def test_empty_response_raises(provider_factory):
    provider = provider_factory()
    provider.text = ""
    client = EvaluationClient(provider)

    with pytest.raises(ModelCallFailed):
        await client.evaluate("prompt")


@pytest.mark.asyncio
async def test_cancellation_propagates(provider_factory):
    client = EvaluationClient(provider_factory(delay=5.0), timeout_seconds=None)

    task = asyncio.create_task(client.evaluate("prompt"))
    await asyncio.sleep(0.01)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task


@pytest.mark.asyncio
async def test_plain_exception_has_no_provider_payload(provider_factory):
    error = RuntimeError("boom")
    error.details = {"not": "a provider body"}
    client = EvaluationClient(provider_factory(error=error))

    with pytest.raises(ModelCallFailed) as exc_info:
        await client.evaluate("prompt")

    assert exc_info.value.provider_payload is None
