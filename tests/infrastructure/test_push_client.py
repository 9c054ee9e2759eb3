"""Tests for the push gateway client."""

import json

import httpx
import pytest

from eventpass.domain.exceptions import DeliveryFailure
from eventpass.infrastructure.push import ExpoPushClient, PushMessage

GATEWAY_URL = "https://push.example.test/send"


def _client(handler, *, enabled=True) -> ExpoPushClient:
    return ExpoPushClient(
        url=GATEWAY_URL,
        timeout=2,
        enabled=enabled,
        transport=httpx.MockTransport(handler),
    )


def _messages(count=2):
    return [
        PushMessage(
            to=f"ExponentPushToken[{index}]",
            title="Hola",
            body="Mensaje",
            data={"type": "broadcast", "relatedId": "7"},
        )
        for index in range(count)
    ]


def test_batch_is_posted_as_one_request() -> None:
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"data": [{"status": "ok", "id": "a"}, {"status": "ok", "id": "b"}]})

    tickets = _client(handler).send_batch(_messages())

    assert len(requests) == 1
    body = json.loads(requests[0].content)
    assert [item["to"] for item in body] == ["ExponentPushToken[0]", "ExponentPushToken[1]"]
    assert body[0]["sound"] == "default"
    assert body[0]["priority"] == "high"
    assert body[0]["channelId"] == "default"
    assert body[0]["data"] == {"type": "broadcast", "relatedId": "7"}
    assert all(ticket.ok for ticket in tickets)


def test_rejected_tokens_are_returned_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "data": [
                    {"status": "ok", "id": "a"},
                    {
                        "status": "error",
                        "message": "not a registered push token",
                        "details": {"error": "DeviceNotRegistered"},
                    },
                ]
            },
        )

    tickets = _client(handler).send_batch(_messages())

    assert [ticket.ok for ticket in tickets] == [True, False]
    assert tickets[1].details == {"error": "DeviceNotRegistered"}


def test_gateway_error_status_raises_delivery_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"errors": [{"message": "Service unavailable"}]})

    with pytest.raises(DeliveryFailure) as exc_info:
        _client(handler).send_batch(_messages())

    assert exc_info.value.channel == "push"
    assert "Service unavailable" in str(exc_info.value)


def test_timeout_raises_delivery_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(DeliveryFailure):
        _client(handler).send_batch(_messages())


def test_disabled_client_and_empty_batch_skip_the_gateway() -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not run
        raise AssertionError("gateway should not be called")

    assert _client(handler, enabled=False).send_batch(_messages()) == []
    assert _client(handler).send_batch([]) == []
