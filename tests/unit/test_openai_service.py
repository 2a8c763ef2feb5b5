"""
Test the OpenAI wrapper's response parsing and error mapping.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from app.services.openai_service import OpenAIService
from app.utils.errors import ExternalServiceError

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def _completion(content: str | None):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(total_tokens=42),
    )


def _service(create: AsyncMock) -> OpenAIService:
    client = MagicMock()
    client.chat.completions.create = create
    return OpenAIService(client=client)


def _status_error(error_cls, status_code: int):
    request = httpx.Request("POST", OPENAI_URL)
    return error_cls(
        message=f"status {status_code}",
        response=httpx.Response(status_code, request=request),
        body=None,
    )


def test_not_configured_without_key():
    assert OpenAIService().is_configured is False


@pytest.mark.asyncio
async def test_not_configured_call_is_auth_misconfigured():
    with pytest.raises(ExternalServiceError) as exc_info:
        await OpenAIService().generate_text("hello")
    assert exc_info.value.reason == "auth_misconfigured"


@pytest.mark.asyncio
async def test_generate_text_strips_content():
    service = _service(AsyncMock(return_value=_completion("  A great post  ")))

    assert await service.generate_text("prompt") == "A great post"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error,reason,retryable",
    [
        (_status_error(openai.RateLimitError, 429), "rate_limited", True),
        (_status_error(openai.AuthenticationError, 401), "auth_misconfigured", False),
        (_status_error(openai.PermissionDeniedError, 403), "auth_misconfigured", False),
        (_status_error(openai.InternalServerError, 500), "failure", False),
        (openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL)), "failure", False),
    ],
)
async def test_provider_errors_mapped(error, reason, retryable):
    service = _service(AsyncMock(side_effect=error))

    with pytest.raises(ExternalServiceError) as exc_info:
        await service.generate_text("prompt")

    assert exc_info.value.reason == reason
    assert exc_info.value.retryable is retryable
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_empty_response_is_failure():
    service = _service(AsyncMock(return_value=_completion("")))

    with pytest.raises(ExternalServiceError) as exc_info:
        await service.generate_text("prompt")
    assert exc_info.value.reason == "failure"


@pytest.mark.asyncio
async def test_post_ideas_parsed_from_json_array():
    reply = """Here you go:
[
  {"title": "Testing in prod", "description": "Why staging lies", "reason": "Shows judgement"},
  {"title": "Async Python", "description": "Event loops explained"},
  {"description": "missing title"}
]"""
    service = _service(AsyncMock(return_value=_completion(reply)))

    ideas = await service.generate_post_ideas(["Python"], count=5)

    assert [idea["title"] for idea in ideas] == ["Testing in prod", "Async Python"]
    assert ideas[1]["reason"] == ""


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["no json here", "[not valid json", '[{"description": "x"}]'])
async def test_unparseable_ideas_are_failure(reply):
    service = _service(AsyncMock(return_value=_completion(reply)))

    with pytest.raises(ExternalServiceError) as exc_info:
        await service.generate_post_ideas(["Python"])
    assert exc_info.value.reason == "failure"


@pytest.mark.asyncio
async def test_recruiter_messages_limited_to_three():
    reply = '["one", "two", "three", "four"]'
    service = _service(AsyncMock(return_value=_completion(reply)))

    messages = await service.generate_recruiter_messages("Maria", "Acme", ["Go"], "", "pt")

    assert messages == ["one", "two", "three"]
    prompt = service.client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
    assert "Brazilian Portuguese" in prompt
