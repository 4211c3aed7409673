"""
Unit Tests: Completion Client

Runs the OpenAI SDK against an httpx mock transport and checks:
- Request payload and credential header
- Credential lookup before any network call
- Error classification
"""

import json

import httpx
import pytest

from mindful_journal.domain.exceptions import (
    CredentialError,
    InvalidCredentialError,
    MalformedResponseError,
    MissingCredentialError,
    RateLimitError,
    RemoteApiError,
    TransportError,
)
from mindful_journal.infrastructure.external_services import OpenAICompletionClient
from tests.fakes import InMemorySettingsRepository

BASE_URL = "https://completions.test/v1"


def completion_payload(content="Hi"):
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


class RecordingTransport:
    """Mock transport handler that records requests"""

    def __init__(self, responder):
        self.responder = responder
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def settings_repository():
    return InMemorySettingsRepository({"openaiApiKey": "sk-test"})


def make_client(settings_repository, responder):
    transport = RecordingTransport(responder)
    client = OpenAICompletionClient(
        settings_repository=settings_repository,
        base_url=BASE_URL,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(transport)),
    )
    return client, transport


# ============================================================================
# SUCCESS PATH
# ============================================================================

@pytest.mark.asyncio
async def test_returns_first_reply(settings_repository):
    client, transport = make_client(
        settings_repository, lambda request: httpx.Response(200, json=completion_payload("Hello there"))
    )

    reply = await client.send_message([{"role": "user", "content": "Hello"}])

    assert reply == "Hello there"
    assert len(transport.requests) == 1
    await client.aclose()


@pytest.mark.asyncio
async def test_request_payload_and_headers(settings_repository):
    client, transport = make_client(
        settings_repository, lambda request: httpx.Response(200, json=completion_payload())
    )

    await client.send_message(
        [
            {"role": "user", "content": "Context"},
            {"role": "assistant", "content": "Earlier reply"},
            {"role": "user", "content": "Hello"},
        ],
        system_prompt="Be kind",
    )

    request = transport.requests[0]
    body = json.loads(request.content)

    assert request.method == "POST"
    assert str(request.url) == f"{BASE_URL}/chat/completions"
    assert request.headers["authorization"] == "Bearer sk-test"
    assert body["model"] == "gpt-4o-mini"
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 500
    assert body["messages"] == [
        {"role": "system", "content": "Be kind"},
        {"role": "user", "content": "Context"},
        {"role": "assistant", "content": "Earlier reply"},
        {"role": "user", "content": "Hello"},
    ]
    await client.aclose()


@pytest.mark.asyncio
async def test_no_system_entry_without_system_prompt(settings_repository):
    client, transport = make_client(
        settings_repository, lambda request: httpx.Response(200, json=completion_payload())
    )

    await client.send_message([{"role": "user", "content": "Hello"}])

    body = json.loads(transport.requests[0].content)
    assert body["messages"] == [{"role": "user", "content": "Hello"}]
    await client.aclose()


@pytest.mark.asyncio
async def test_caller_messages_are_not_mutated(settings_repository):
    client, _ = make_client(
        settings_repository, lambda request: httpx.Response(200, json=completion_payload())
    )
    messages = [{"role": "user", "content": "Hello"}]

    await client.send_message(messages, system_prompt="Be kind")

    assert messages == [{"role": "user", "content": "Hello"}]
    await client.aclose()


@pytest.mark.asyncio
async def test_api_key_read_on_every_call(settings_repository):
    client, transport = make_client(
        settings_repository, lambda request: httpx.Response(200, json=completion_payload())
    )

    await client.send_message([{"role": "user", "content": "one"}])
    await settings_repository.set("openaiApiKey", "sk-rotated")
    await client.send_message([{"role": "user", "content": "two"}])

    assert settings_repository.get_calls == 2
    assert transport.requests[1].headers["authorization"] == "Bearer sk-rotated"
    await client.aclose()


# ============================================================================
# CREDENTIALS
# ============================================================================

@pytest.mark.asyncio
@pytest.mark.parametrize("stored", [{}, {"openaiApiKey": ""}])
async def test_missing_api_key_fails_before_request(stored):
    client, transport = make_client(
        InMemorySettingsRepository(stored),
        lambda request: httpx.Response(200, json=completion_payload()),
    )

    with pytest.raises(MissingCredentialError) as exc_info:
        await client.send_message([{"role": "user", "content": "Hello"}])

    assert isinstance(exc_info.value, CredentialError)
    assert "API key is not configured" in str(exc_info.value)
    assert transport.requests == []
    await client.aclose()


@pytest.mark.asyncio
async def test_unauthorized_is_invalid_credential(settings_repository):
    client, _ = make_client(
        settings_repository,
        lambda request: httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}}),
    )

    with pytest.raises(InvalidCredentialError) as exc_info:
        await client.send_message([{"role": "user", "content": "Hello"}])

    assert str(exc_info.value) == "Invalid API key. Please check your API key in Profile settings."
    await client.aclose()


# ============================================================================
# REMOTE ERRORS
# ============================================================================

@pytest.mark.asyncio
async def test_too_many_requests_is_rate_limit(settings_repository):
    client, transport = make_client(
        settings_repository,
        lambda request: httpx.Response(429, json={"error": {"message": "Slow down"}}),
    )

    with pytest.raises(RateLimitError) as exc_info:
        await client.send_message([{"role": "user", "content": "Hello"}])

    assert str(exc_info.value) == "Rate limit exceeded. Please try again in a moment."
    # Single attempt, no retry
    assert len(transport.requests) == 1
    await client.aclose()


@pytest.mark.asyncio
async def test_structured_error_message_is_surfaced(settings_repository):
    client, transport = make_client(
        settings_repository,
        lambda request: httpx.Response(
            500, json={"error": {"message": "The model is overloaded", "type": "server_error"}}
        ),
    )

    with pytest.raises(RemoteApiError) as exc_info:
        await client.send_message([{"role": "user", "content": "Hello"}])

    assert exc_info.value.status_code == 500
    assert str(exc_info.value) == "The model is overloaded"
    assert len(transport.requests) == 1
    await client.aclose()


@pytest.mark.asyncio
async def test_unstructured_error_uses_status_message(settings_repository):
    client, _ = make_client(
        settings_repository, lambda request: httpx.Response(404, text="not here")
    )

    with pytest.raises(RemoteApiError) as exc_info:
        await client.send_message([{"role": "user", "content": "Hello"}])

    assert str(exc_info.value) == "API request failed with status 404. Please try again."
    await client.aclose()


@pytest.mark.asyncio
async def test_network_failure_is_transport_error(settings_repository):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client, transport = make_client(settings_repository, refuse)

    with pytest.raises(TransportError) as exc_info:
        await client.send_message([{"role": "user", "content": "Hello"}])

    assert str(exc_info.value) == "Network error. Please check your connection and try again."
    assert len(transport.requests) == 1
    await client.aclose()


# ============================================================================
# MALFORMED PAYLOADS
# ============================================================================

@pytest.mark.asyncio
async def test_no_choices_is_malformed(settings_repository):
    payload = completion_payload()
    payload["choices"] = []
    client, _ = make_client(settings_repository, lambda request: httpx.Response(200, json=payload))

    with pytest.raises(MalformedResponseError) as exc_info:
        await client.send_message([{"role": "user", "content": "Hello"}])

    assert str(exc_info.value) == "Invalid response from API. Please try again."
    await client.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", None])
async def test_empty_reply_is_malformed(settings_repository, content):
    client, _ = make_client(
        settings_repository, lambda request: httpx.Response(200, json=completion_payload(content))
    )

    with pytest.raises(MalformedResponseError) as exc_info:
        await client.send_message([{"role": "user", "content": "Hello"}])

    assert str(exc_info.value) == "Empty response from API. Please try again."
    await client.aclose()


@pytest.mark.asyncio
async def test_invalid_json_success_body_is_malformed(settings_repository):
    client, transport = make_client(
        settings_repository,
        lambda request: httpx.Response(
            200, headers={"content-type": "application/json"}, content=b"{not json"
        ),
    )

    with pytest.raises(MalformedResponseError) as exc_info:
        await client.send_message([{"role": "user", "content": "Hello"}])

    assert str(exc_info.value) == "Invalid response from API. Please try again."
    assert len(transport.requests) == 1
    await client.aclose()


# ============================================================================
# HTTP CLIENT OWNERSHIP
# ============================================================================

@pytest.mark.asyncio
async def test_aclose_leaves_injected_http_client_open(settings_repository):
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=completion_payload()))
    )
    client = OpenAICompletionClient(settings_repository=settings_repository, http_client=http_client)

    await client.aclose()

    assert not http_client.is_closed
    await http_client.aclose()


@pytest.mark.asyncio
async def test_aclose_closes_own_http_client(settings_repository):
    client = OpenAICompletionClient(settings_repository=settings_repository)

    await client.aclose()

    assert client.http_client.is_closed
