"""Fan-out of one logical message to many accounts across delivery channels.

Recipients are deduplicated and processed in fixed-size chunks. For each
chunk the in-app inbox rows are written first (one all-or-nothing insert),
then a realtime event is emitted per recipient and finally a single push
gateway request is sent for the recipients holding a device token. A
failing channel is logged and never affects the other channels or the
remaining chunks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventpass.domain.entities import Notification
from eventpass.infrastructure.notifications import NotificationPublisher
from eventpass.infrastructure.push import PushMessage, PushTicket
from eventpass.infrastructure.repositories import NotificationRepository, UserRepository
from eventpass.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100

INBOX_CHANNEL = "inbox"
REALTIME_CHANNEL = "realtime"
PUSH_CHANNEL = "push"


class RealtimeEmitter(Protocol):
    def emit(self, room: str, event_name: str, payload: Any) -> None: ...


class PushSender(Protocol):
    def send_batch(self, messages: Sequence[PushMessage]) -> list[PushTicket]: ...


@dataclass(frozen=True)
class FanOutMessage:
    """Content delivered identically to every recipient."""

    title: str
    body: str
    type: str
    related_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ChunkReport:
    """Outcome of one chunk, kept for logging and tests."""

    index: int
    recipients: int
    inbox_ok: bool = False
    realtime_ok: bool = False
    push_attempted: bool = False
    push_ok: bool = False


def unique_recipients(recipient_ids: Iterable[int | None]) -> list[int]:
    """Return the distinct truthy ids preserving first-seen order."""

    seen: set[int] = set()
    unique: list[int] = []
    for recipient_id in recipient_ids:
        if not recipient_id or recipient_id in seen:
            continue
        seen.add(recipient_id)
        unique.append(recipient_id)
    return unique


def chunked(items: Sequence[int], size: int) -> Iterator[Sequence[int]]:
    if size <= 0:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(items), size):
        yield items[start : start + size]


class FanOutEngine:
    """Deliver :class:`FanOutMessage` objects to resolved recipients."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        realtime: RealtimeEmitter,
        push_client: PushSender,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk size must be positive")
        self.session_factory = session_factory
        self.realtime = realtime
        self.push_client = push_client
        self.chunk_size = chunk_size
        self._publisher = NotificationPublisher(realtime)

    def deliver(
        self, recipient_ids: Iterable[int | None], message: FanOutMessage
    ) -> list[ChunkReport]:
        """Deliver ``message`` to every distinct recipient, chunk by chunk."""

        recipients = unique_recipients(recipient_ids)
        reports: list[ChunkReport] = []
        for index, chunk in enumerate(chunked(recipients, self.chunk_size)):
            reports.append(self._deliver_chunk(index, chunk, message))
        logger.info(
            "Fan-out '%s' delivered to %s recipients in %s chunks",
            message.type,
            len(recipients),
            len(reports),
        )
        return reports

    def _deliver_chunk(
        self, index: int, chunk: Sequence[int], message: FanOutMessage
    ) -> ChunkReport:
        report = ChunkReport(index=index, recipients=len(chunk))
        session = self.session_factory()
        try:
            try:
                saved = self._write_inbox(session, chunk, message)
            except SQLAlchemyError:
                logger.exception(
                    "Fan-out chunk %s: channel %s failed for %s recipients; chunk skipped",
                    index,
                    INBOX_CHANNEL,
                    len(chunk),
                )
                return report
            report.inbox_ok = True

            report.realtime_ok = self._emit_realtime(index, saved)
            report.push_attempted, report.push_ok = self._send_push(
                session, index, chunk, message
            )
        finally:
            session.close()
        return report

    @staticmethod
    def _write_inbox(
        session: Session, chunk: Sequence[int], message: FanOutMessage
    ) -> list[Notification]:
        created_at = now_in_app_timezone()
        notifications = [
            Notification(
                id=None,
                user_id=recipient_id,
                title=message.title,
                body=message.body,
                type=message.type,
                related_id=message.related_id,
                read=False,
                created_at=created_at,
            )
            for recipient_id in chunk
        ]
        return NotificationRepository(session).create_many(notifications)

    def _emit_realtime(self, index: int, notifications: Sequence[Notification]) -> bool:
        failed = 0
        last_error: Exception | None = None
        for notification in notifications:
            try:
                self._publisher.dispatch(notification)
            except Exception as exc:  # realtime delivery is best effort
                failed += 1
                last_error = exc
        if failed:
            logger.warning(
                "Fan-out chunk %s: channel %s failed for %s of %s recipients: %s",
                index,
                REALTIME_CHANNEL,
                failed,
                len(notifications),
                last_error,
            )
        return failed == 0

    def _send_push(
        self,
        session: Session,
        index: int,
        chunk: Sequence[int],
        message: FanOutMessage,
    ) -> tuple[bool, bool]:
        try:
            tokens = UserRepository(session).get_push_tokens(chunk)
        except SQLAlchemyError:
            logger.exception(
                "Fan-out chunk %s: could not load push tokens for %s recipients",
                index,
                len(chunk),
            )
            return False, False
        if not tokens:
            return False, True

        data = {"type": message.type, "relatedId": message.related_id, **message.data}
        messages = [
            PushMessage(to=tokens[recipient_id], title=message.title, body=message.body, data=data)
            for recipient_id in chunk
            if recipient_id in tokens
        ]
        try:
            self.push_client.send_batch(messages)
        except Exception as exc:
            logger.warning(
                "Fan-out chunk %s: channel %s failed for %s recipients: %s",
                index,
                PUSH_CHANNEL,
                len(messages),
                exc,
            )
            return True, False
        return True, True


__all__ = [
    "ChunkReport",
    "DEFAULT_CHUNK_SIZE",
    "FanOutEngine",
    "FanOutMessage",
    "chunked",
    "unique_recipients",
]
