"""Shared fixtures: a throwaway SQLite database and fake delivery channels."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "eventpass_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["PUSH_ENABLED"] = "false"

from eventpass.config import get_settings  # noqa: E402

get_settings.cache_clear()

from eventpass.application.use_cases.notifications import FanOutEngine  # noqa: E402
from eventpass.domain.entities import (  # noqa: E402
    ROLE_ORGANIZER,
    ROLE_PARTICIPANT,
    Event,
    Registration,
    RegistrationStatus,
    User,
)
from eventpass.domain.exceptions import DeliveryFailure  # noqa: E402
from eventpass.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from eventpass.infrastructure.push import PushMessage, PushTicket  # noqa: E402
from eventpass.infrastructure.repositories import (  # noqa: E402
    EventRepository,
    RegistrationRepository,
    UserRepository,
)
from eventpass.infrastructure.security import get_password_hash  # noqa: E402

TEST_PASSWORD = "Secret123!"
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


class FakeRealtime:
    """Records every emitted realtime event."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, Any]] = []

    def emit(self, room: str, event_name: str, payload: Any) -> None:
        self.events.append((room, event_name, payload))

    def in_room(self, room: str, event_name: str | None = None) -> list[Any]:
        return [
            payload
            for emitted_room, name, payload in self.events
            if emitted_room == room and (event_name is None or name == event_name)
        ]


class FakePush:
    """Records push batches; the calls listed in ``fail_on`` (1-based) fail."""

    def __init__(self, fail_on: Sequence[int] = ()) -> None:
        self.batches: list[list[PushMessage]] = []
        self.fail_on = set(fail_on)

    def send_batch(self, messages: Sequence[PushMessage]) -> list[PushTicket]:
        self.batches.append(list(messages))
        if len(self.batches) in self.fail_on:
            raise DeliveryFailure("push", "gateway unavailable")
        return [PushTicket(status="ok", id=f"ticket-{index}") for index, _ in enumerate(messages)]


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def fake_realtime() -> FakeRealtime:
    return FakeRealtime()


@pytest.fixture()
def fake_push() -> FakePush:
    return FakePush()


@pytest.fixture()
def fan_out_engine(fake_realtime: FakeRealtime, fake_push: FakePush) -> FanOutEngine:
    return FanOutEngine(
        SessionLocal,
        realtime=fake_realtime,
        push_client=fake_push,
        chunk_size=100,
    )


@pytest.fixture()
def make_user(session):
    def _make_user(
        email: str,
        *,
        name: str = "Test User",
        role: str = ROLE_PARTICIPANT,
        push_token: str | None = None,
    ) -> User:
        return UserRepository(session).create(
            User(
                id=None,
                name=name,
                email=email,
                password=TEST_PASSWORD_HASH,
                role=role,
                push_token=push_token,
                last_login=None,
                created_at=None,
            )
        )

    return _make_user


@pytest.fixture()
def organizer(make_user) -> User:
    return make_user("organizer@example.com", name="Olga Organizer", role=ROLE_ORGANIZER)


@pytest.fixture()
def make_event(session, organizer):
    counter = iter(range(1, 10_000))

    def _make_event(
        *,
        title: str = "Tech Summit",
        requires_approval: bool = False,
        check_in_enabled: bool = True,
        organizer_id: int | None = None,
    ) -> Event:
        return EventRepository(session).create(
            Event(
                id=None,
                organizer_id=organizer_id or organizer.id,
                title=title,
                description=None,
                location="Main hall",
                start_date=datetime.now(timezone.utc) + timedelta(days=7),
                end_date=None,
                requires_approval=requires_approval,
                check_in_enabled=check_in_enabled,
                public_link=f"link{next(counter):04d}",
                created_at=None,
            )
        )

    return _make_event


@pytest.fixture()
def make_registration(session):
    counter = iter(range(1, 100_000))

    def _make_registration(
        event: Event,
        email: str,
        *,
        status: RegistrationStatus = RegistrationStatus.APPROVED,
        user_id: int | None = None,
        name: str = "Attendee",
    ) -> Registration:
        number = next(counter)
        return RegistrationRepository(session).create(
            Registration(
                id=None,
                event_id=event.id,
                user_id=user_id,
                name=name,
                email=email,
                phone=None,
                status=status,
                qr_code=f"QR-test-{number}",
                ticket_link=f"ticket-test{number}",
            )
        )

    return _make_registration
