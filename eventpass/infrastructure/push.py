"""Client for the external push-notification gateway (Expo push API)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx

from eventpass.config import get_settings
from eventpass.domain.exceptions import DeliveryFailure

logger = logging.getLogger(__name__)

PUSH_CHANNEL = "push"


@dataclass
class PushMessage:
    """One message addressed to a single device token."""

    to: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "sound": "default",
            "title": self.title,
            "body": self.body,
            "data": self.data,
            "priority": "high",
            "channelId": "default",
        }


@dataclass
class PushTicket:
    """Gateway verdict for one message of a batch."""

    status: str
    id: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def _extract_gateway_error_details(body: Any) -> str | None:
    """Return a human readable description for a gateway error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item.get("message"))
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    return None


class ExpoPushClient:
    """Send batches of push messages with a bounded request time."""

    def __init__(
        self,
        *,
        url: str,
        timeout: float,
        enabled: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._enabled = enabled
        self._transport = transport

    def send_batch(self, messages: Sequence[PushMessage]) -> list[PushTicket]:
        """Deliver ``messages`` in one gateway call.

        Raises :class:`DeliveryFailure` when the call as a whole fails
        (transport error, timeout or non-2xx answer). Rejected tokens are
        reported through the returned tickets.
        """

        if not messages:
            return []
        if not self._enabled:
            logger.info("Push gateway disabled; skipping %s messages", len(messages))
            return []

        payload = [message.to_payload() for message in messages]
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(
                    self._url,
                    json=payload,
                    headers={
                        "Accept": "application/json",
                        "Accept-Encoding": "gzip, deflate",
                    },
                )
        except httpx.TimeoutException as exc:
            raise DeliveryFailure(
                PUSH_CHANNEL, f"Push gateway timed out after {self._timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise DeliveryFailure(PUSH_CHANNEL, f"Push gateway request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            details = _extract_gateway_error_details(response.text)
            message = f"Push gateway responded with status {response.status_code}"
            if details:
                message = f"{message}: {details}"
            raise DeliveryFailure(PUSH_CHANNEL, message)

        tickets = self._parse_tickets(response)
        rejected = [ticket for ticket in tickets if not ticket.ok]
        if rejected:
            logger.warning(
                "Push gateway rejected %s of %s messages: %s",
                len(rejected),
                len(messages),
                "; ".join(ticket.message or ticket.status for ticket in rejected),
            )
        return tickets

    @staticmethod
    def _parse_tickets(response: httpx.Response) -> list[PushTicket]:
        try:
            body = response.json()
        except ValueError:
            logger.warning("Push gateway returned a non JSON body")
            return []

        data = body.get("data") if isinstance(body, dict) else None
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            return []

        tickets: list[PushTicket] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            tickets.append(
                PushTicket(
                    status=str(item.get("status", "error")),
                    id=item.get("id"),
                    message=item.get("message"),
                    details=item.get("details"),
                )
            )
        return tickets


def build_push_client() -> ExpoPushClient:
    """Return a client configured from the application settings."""

    settings = get_settings()
    return ExpoPushClient(
        url=settings.push_gateway_url,
        timeout=settings.push_gateway_timeout_seconds,
        enabled=settings.push_enabled,
    )


__all__ = [
    "ExpoPushClient",
    "PUSH_CHANNEL",
    "PushMessage",
    "PushTicket",
    "build_push_client",
]
