"""Tests for the Expo push client."""

from __future__ import annotations

import json

import httpx
import pytest

from notifier.config import Settings
from notifier.domain.entities import PushMessage, PushOutcome
from notifier.infrastructure.notifications import (
    ExpoPushSender,
    NullPushSender,
    create_push_sender,
)

pytestmark = pytest.mark.anyio

URL = "https://push.test/--/api/v2/push/send"
TOKEN = "ExponentPushToken[xyz]"
MESSAGE = PushMessage(title="New message", body="Hello", data={"category": "direct-message"})


def _sender(handler, **kwargs) -> ExpoPushSender:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ExpoPushSender(url=URL, client=client, **kwargs)


async def test_ok_ticket_is_success() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"data": {"status": "ok", "id": "ticket-1"}})

    outcome = await _sender(handler).send(TOKEN, MESSAGE)

    assert outcome is PushOutcome.OK
    body = json.loads(requests[0].content)
    assert body["to"] == TOKEN
    assert body["title"] == "New message"
    assert body["data"] == {"category": "direct-message"}
    assert "authorization" not in requests[0].headers


async def test_access_token_is_sent_as_bearer() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("authorization", "")
        return httpx.Response(200, json={"data": [{"status": "ok"}]})

    outcome = await _sender(handler, access_token="secret").send(TOKEN, MESSAGE)

    assert outcome is PushOutcome.OK
    assert seen["auth"] == "Bearer secret"


async def test_device_not_registered_is_invalid_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "data": {
                    "status": "error",
                    "message": "not a registered push notification recipient",
                    "details": {"error": "DeviceNotRegistered"},
                }
            },
        )

    assert await _sender(handler).send(TOKEN, MESSAGE) is PushOutcome.INVALID_TOKEN


async def test_other_ticket_errors_are_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"data": {"status": "error", "details": {"error": "MessageRateExceeded"}}},
        )

    assert await _sender(handler).send(TOKEN, MESSAGE) is PushOutcome.TRANSIENT_ERROR


async def test_server_error_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"errors": [{"message": "internal"}]})

    assert await _sender(handler).send(TOKEN, MESSAGE) is PushOutcome.TRANSIENT_ERROR


async def test_timeout_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    assert await _sender(handler).send(TOKEN, MESSAGE) is PushOutcome.TRANSIENT_ERROR


async def test_malformed_token_is_invalid_without_request() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"data": {"status": "ok"}})

    outcome = await _sender(handler).send("not-a-token", MESSAGE)

    assert outcome is PushOutcome.INVALID_TOKEN
    assert calls == []


async def test_null_sender_reports_success() -> None:
    assert await NullPushSender().send(TOKEN, MESSAGE) is PushOutcome.OK


def test_factory_honours_push_enabled() -> None:
    disabled = Settings(database_url="sqlite://", secret_key="k", push_enabled=False)
    enabled = Settings(database_url="sqlite://", secret_key="k", push_enabled=True)

    assert isinstance(create_push_sender(disabled), NullPushSender)
    assert isinstance(create_push_sender(enabled), ExpoPushSender)
