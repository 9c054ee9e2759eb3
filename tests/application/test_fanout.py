"""Tests for the notification fan-out engine and event broadcasts."""

import pytest
from sqlalchemy.exc import OperationalError

from eventpass.application.use_cases.notifications import (
    FanOutEngine,
    FanOutMessage,
    broadcast_to_event,
    list_broadcasts,
    prepare_broadcast,
    resolve_broadcast_recipients,
)
from eventpass.domain.entities import ROLE_PARTICIPANT
from eventpass.domain.exceptions import NotFoundError, UnauthorizedError
from eventpass.infrastructure.database import SessionLocal
from eventpass.infrastructure.models import NotificationModel, UserModel
from eventpass.infrastructure.repositories import BroadcastRepository, NotificationRepository


def _bulk_users(session, count):
    models = [
        UserModel(
            name=f"User {index}",
            email=f"user{index}@x.com",
            password="not-a-real-hash",
            role=ROLE_PARTICIPANT,
            push_token=f"ExponentPushToken[{index}]",
        )
        for index in range(count)
    ]
    session.add_all(models)
    session.commit()
    return [model.id for model in models]


MESSAGE = FanOutMessage(title="Heads up", body="Doors open at 9", type="broadcast", related_id="1")


def test_push_failure_in_one_chunk_does_not_stop_the_rest(
    session, fan_out_engine, fake_push
) -> None:
    recipient_ids = _bulk_users(session, 250)
    fake_push.fail_on = {2}

    reports = fan_out_engine.deliver(recipient_ids, MESSAGE)

    assert session.query(NotificationModel).count() == 250
    assert [len(batch) for batch in fake_push.batches] == [100, 100, 50]
    assert [report.push_attempted for report in reports] == [True, True, True]
    assert [report.push_ok for report in reports] == [True, False, True]
    assert all(report.inbox_ok for report in reports)


def test_duplicates_and_empty_ids_are_delivered_once(
    session, make_user, fan_out_engine, fake_realtime
) -> None:
    account = make_user("a@x.com")

    reports = fan_out_engine.deliver([account.id, None, account.id], MESSAGE)

    assert len(reports) == 1
    assert NotificationRepository(session).count_for_user(account.id) == 1
    assert len(fake_realtime.in_room(f"user:{account.id}", "notification")) == 1


def test_recipients_without_push_token_skip_the_gateway(
    session, make_user, fan_out_engine, fake_push
) -> None:
    account = make_user("a@x.com")

    (report,) = fan_out_engine.deliver([account.id], MESSAGE)

    assert fake_push.batches == []
    assert report.push_attempted is False
    assert report.inbox_ok is True


def test_push_payload_carries_type_and_related_id(
    session, make_user, fan_out_engine, fake_push
) -> None:
    account = make_user("a@x.com", push_token="ExponentPushToken[abc]")

    fan_out_engine.deliver([account.id], MESSAGE)

    (message,) = fake_push.batches[0]
    assert message.to == "ExponentPushToken[abc]"
    assert message.data == {"type": "broadcast", "relatedId": "1"}


def test_inbox_failure_skips_only_that_chunk(
    session, fake_realtime, fake_push, monkeypatch
) -> None:
    recipient_ids = _bulk_users(session, 5)
    engine = FanOutEngine(SessionLocal, realtime=fake_realtime, push_client=fake_push, chunk_size=2)

    original_create_many = NotificationRepository.create_many
    calls = []

    def flaky_create_many(self, notifications):
        calls.append(len(notifications))
        if len(calls) == 2:
            raise OperationalError("INSERT", {}, Exception("database is locked"))
        return original_create_many(self, notifications)

    monkeypatch.setattr(NotificationRepository, "create_many", flaky_create_many)

    reports = engine.deliver(recipient_ids, MESSAGE)

    assert [report.inbox_ok for report in reports] == [True, False, True]
    assert session.query(NotificationModel).count() == 3
    assert len(fake_push.batches) == 2


def test_realtime_failure_is_absorbed(session, make_user, fake_push) -> None:
    class BrokenRealtime:
        def emit(self, room, event_name, payload):
            raise RuntimeError("socket layer down")

    account = make_user("a@x.com", push_token="ExponentPushToken[abc]")
    engine = FanOutEngine(SessionLocal, realtime=BrokenRealtime(), push_client=fake_push)

    (report,) = engine.deliver([account.id], MESSAGE)

    assert report.inbox_ok is True
    assert report.realtime_ok is False
    assert report.push_ok is True


def test_one_failing_emit_does_not_skip_other_recipients(session, fake_push) -> None:
    class FlakyRealtime:
        def __init__(self):
            self.attempts = 0
            self.rooms = []

        def emit(self, room, event_name, payload):
            self.attempts += 1
            if self.attempts == 1:
                raise RuntimeError("socket closed")
            self.rooms.append(room)

    recipient_ids = _bulk_users(session, 5)
    realtime = FlakyRealtime()
    engine = FanOutEngine(SessionLocal, realtime=realtime, push_client=fake_push)

    (report,) = engine.deliver(recipient_ids, MESSAGE)

    assert realtime.attempts == 5
    assert len(realtime.rooms) == 4
    assert report.realtime_ok is False
    assert report.inbox_ok is True
    assert report.push_ok is True


def test_broadcast_deduplicates_guest_and_account_registrations(
    session, make_user, make_event, make_registration, fan_out_engine
) -> None:
    account = make_user("a@x.com")
    event = make_event()
    make_registration(event, "a@x.com")
    make_registration(event, "a.work@x.com", user_id=account.id)

    count = broadcast_to_event(
        session,
        event_id=event.id,
        organizer_id=event.organizer_id,
        title=None,
        message="See you tomorrow",
        engine=fan_out_engine,
    )

    assert count == 1
    inbox = NotificationRepository(session).list_for_user(account.id)
    assert len(inbox) == 1
    assert inbox[0].title == f"Novedades: {event.title}"
    assert inbox[0].type == "broadcast"


def test_broadcast_excludes_the_organizer_and_unknown_guests(
    session, make_user, make_event, make_registration, organizer
) -> None:
    attendee = make_user("b@x.com")
    event = make_event()
    make_registration(event, organizer.email)
    make_registration(event, "b@x.com")
    make_registration(event, "nobody@x.com")

    assert resolve_broadcast_recipients(
        session, event_id=event.id, organizer_id=organizer.id
    ) == [attendee.id]


def test_broadcast_is_recorded_in_history(
    session, make_user, make_event, make_registration, organizer, fan_out_engine
) -> None:
    make_user("b@x.com")
    event = make_event()
    make_registration(event, "b@x.com")

    broadcast_to_event(
        session,
        event_id=event.id,
        organizer_id=organizer.id,
        title="Parking",
        message="Use gate B",
        engine=fan_out_engine,
    )

    (record,) = list_broadcasts(session, event_id=event.id, organizer_id=organizer.id)
    assert (record.title, record.message) == ("Parking", "Use gate B")


def test_history_write_failure_is_absorbed(
    session, make_user, make_event, make_registration, organizer, fan_out_engine, monkeypatch
) -> None:
    recipient = make_user("b@x.com")
    event = make_event()
    make_registration(event, "b@x.com")

    def failing_create(self, record):
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(BroadcastRepository, "create", failing_create)

    count = broadcast_to_event(
        session,
        event_id=event.id,
        organizer_id=organizer.id,
        title=None,
        message="Hello",
        engine=fan_out_engine,
    )

    assert count == 1
    assert NotificationRepository(session).count_for_user(recipient.id) == 1


def test_broadcast_requires_owner_and_message(session, make_user, make_event) -> None:
    stranger = make_user("stranger@x.com")
    event = make_event()

    with pytest.raises(UnauthorizedError):
        prepare_broadcast(
            session, event_id=event.id, organizer_id=stranger.id, title=None, message="Hi"
        )
    with pytest.raises(NotFoundError):
        prepare_broadcast(
            session, event_id=9999, organizer_id=stranger.id, title=None, message="Hi"
        )
    with pytest.raises(ValueError):
        prepare_broadcast(
            session, event_id=event.id, organizer_id=event.organizer_id, title=None, message=" "
        )
