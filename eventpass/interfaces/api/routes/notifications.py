"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from eventpass.application.use_cases.notifications import (
    list_notifications,
    mark_notifications_read,
)
from eventpass.domain.entities import User
from eventpass.infrastructure.database import SessionLocal, get_db
from eventpass.infrastructure.notifications import (
    event_room,
    realtime_manager,
    serialize_notification,
    user_room,
)
from eventpass.infrastructure.repositories import EventRepository
from eventpass.interfaces.api.dependencies import get_current_user, resolve_current_user
from eventpass.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationMarkReadResult,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=list[NotificationRead])
def read_notifications(
    unread_only: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications(
        db, user_id=current_user.id, unread_only=unread_only, limit=limit
    )
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.post("/mark-read", response_model=NotificationMarkReadResult)
def mark_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationMarkReadResult:
    updated = mark_notifications_read(
        db, user_id=current_user.id, notification_ids=payload.unique_ids()
    )
    return NotificationMarkReadResult(updated=updated)


def _organizes_event(user_id: int, event_id: Any) -> bool:
    if not isinstance(event_id, int):
        return False
    session = SessionLocal()
    try:
        event = EventRepository(session).get(event_id)
    finally:
        session.close()
    return event is not None and event.is_owned_by(user_id)


def _acknowledge(user_id: int, ids: Any) -> None:
    if not isinstance(ids, list) or not ids:
        return
    session = SessionLocal()
    try:
        mark_notifications_read(
            session,
            user_id=user_id,
            notification_ids=[value for value in ids if isinstance(value, int)],
        )
    finally:
        session.close()


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint streaming notifications and live registration updates.

    Clients may send ``ping``, ``ack`` (with ``ids``) and, for events they
    organize, ``join-event``/``leave-event`` (with ``event_id``).
    """

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        pending_notifications = list_notifications(session, user_id=user.id, unread_only=True)
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    await realtime_manager.connect(user_room(user.id), websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification(n) for n in pending_notifications]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "ack":
                _acknowledge(user.id, message.get("ids"))
            elif message_type == "join-event":
                event_id = message.get("event_id")
                if _organizes_event(user.id, event_id):
                    realtime_manager.join(event_room(event_id), websocket)
                    await websocket.send_json({"type": "joined", "data": {"event_id": event_id}})
                else:
                    await websocket.send_json(
                        {"type": "error", "data": {"detail": "No autorizado", "event_id": event_id}}
                    )
            elif message_type == "leave-event":
                event_id = message.get("event_id")
                if isinstance(event_id, int):
                    realtime_manager.leave(event_room(event_id), websocket)
    except WebSocketDisconnect:
        realtime_manager.disconnect(websocket)
    except Exception:  # pragma: no cover - unexpected socket failure
        realtime_manager.disconnect(websocket)
        logger.exception("Websocket de notificaciones cerrado por error para %s", user.id)
        raise
