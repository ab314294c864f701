"""
Test Generation Client Module

This module tests the bounded retry behaviour of GenerationClient against a fake
AsyncOpenAI client.

Dependencies:
- pytest / pytest-asyncio: For testing framework
- openai: For real SDK error types
- app.services.generation.generation_client: The module being tested
"""

import httpx
import openai
import pytest
from app.errors.exceptions import PermanentProviderError, TransientProviderError
from app.services.generation.generation_client import (
    GenerationClient,
    MAX_ATTEMPTS,
    RETRY_DELAY_SECONDS,
    is_overload_error,
)


@pytest.mark.asyncio
async def test_retries_overload_then_succeeds(generation_client, fake_openai, sleep_recorder, completion, overload):
    fake_openai.chat.completions.create.side_effect = [
        overload(),
        overload(),
        completion('["Q1", "Q2"]'),
    ]

    text = await generation_client.generate("prompt", "test-key")

    assert text == '["Q1", "Q2"]'
    assert fake_openai.chat.completions.create.await_count == 3
    assert sleep_recorder.delays == [2.0, 2.0]
    assert all(delay >= 2.0 for delay in sleep_recorder.delays)


@pytest.mark.asyncio
async def test_non_overload_error_fails_after_one_call(generation_client, fake_openai, sleep_recorder, status_error):
    body = {"error": {"code": 401, "message": "API key not valid", "status": "UNAUTHENTICATED"}}
    fake_openai.chat.completions.create.side_effect = status_error(401, body)

    with pytest.raises(PermanentProviderError) as exc_info:
        await generation_client.generate("prompt", "bad-key")

    assert fake_openai.chat.completions.create.await_count == 1
    assert sleep_recorder.delays == []
    assert exc_info.value.details == body


@pytest.mark.asyncio
async def test_quota_exhaustion_is_not_retried(generation_client, fake_openai, status_error):
    fake_openai.chat.completions.create.side_effect = status_error(429, {"error": {"code": 429, "status": "RESOURCE_EXHAUSTED"}})

    with pytest.raises(PermanentProviderError):
        await generation_client.generate("prompt", "test-key")

    assert fake_openai.chat.completions.create.await_count == 1


@pytest.mark.asyncio
async def test_overload_exhaustion_raises_transient_error(generation_client, fake_openai, sleep_recorder, overload):
    fake_openai.chat.completions.create.side_effect = [overload() for _ in range(MAX_ATTEMPTS)]

    with pytest.raises(TransientProviderError) as exc_info:
        await generation_client.generate("prompt", "test-key")

    assert fake_openai.chat.completions.create.await_count == MAX_ATTEMPTS
    # No sleep after the final attempt
    assert sleep_recorder.delays == [RETRY_DELAY_SECONDS] * (MAX_ATTEMPTS - 1)
    assert exc_info.value.status_code == 503
    assert exc_info.value.details["error"]["status"] == "UNAVAILABLE"


@pytest.mark.asyncio
async def test_connection_error_is_permanent(generation_client, fake_openai):
    request = httpx.Request("POST", "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions")
    fake_openai.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

    with pytest.raises(PermanentProviderError):
        await generation_client.generate("prompt", "test-key")

    assert fake_openai.chat.completions.create.await_count == 1


@pytest.mark.asyncio
async def test_empty_completion_is_permanent_error(generation_client, fake_openai, completion):
    fake_openai.chat.completions.create.return_value = completion("")

    with pytest.raises(PermanentProviderError, match="No content returned"):
        await generation_client.generate("prompt", "test-key")


@pytest.mark.asyncio
async def test_sends_prompt_as_single_user_message(fake_openai, completion):
    fake_openai.chat.completions.create.return_value = completion("ok")
    client = GenerationClient(model="gemini-test", client_factory=lambda api_key: fake_openai)

    await client.generate("Generate 3 questions", "test-key")

    fake_openai.chat.completions.create.assert_awaited_once_with(
        model="gemini-test",
        messages=[{"role": "user", "content": "Generate 3 questions"}],
    )


@pytest.mark.asyncio
async def test_one_sdk_client_per_api_key(fake_openai, completion):
    fake_openai.chat.completions.create.return_value = completion("ok")
    created = []

    def factory(api_key):
        created.append(api_key)
        return fake_openai

    client = GenerationClient(client_factory=factory)
    await client.generate("p", "key-a")
    await client.generate("p", "key-a")
    await client.generate("p", "key-b")

    assert created == ["key-a", "key-b"]


def test_overload_detected_from_error_body(status_error):
    # Some gateways report the provider status only in the body
    body = [{"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}}]
    assert is_overload_error(status_error(500, body))
    assert not is_overload_error(status_error(500, {"error": {"code": 500, "status": "INTERNAL"}}))
    assert not is_overload_error(ValueError("boom"))


def test_rejects_zero_attempts():
    with pytest.raises(ValueError):
        GenerationClient(max_attempts=0)
