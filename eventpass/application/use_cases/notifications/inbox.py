"""Use cases for the in-app notification inbox."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from eventpass.domain.entities import Notification
from eventpass.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session, *, user_id: int, unread_only: bool = False, limit: int = 50
) -> Sequence[Notification]:
    return NotificationRepository(session).list_for_user(
        user_id, unread_only=unread_only, limit=limit
    )


def mark_notifications_read(
    session: Session, *, user_id: int, notification_ids: Sequence[int]
) -> int:
    """Mark the recipient's own notifications as read and return how many changed."""

    return NotificationRepository(session).mark_as_read(notification_ids, user_id=user_id)


__all__ = ["list_notifications", "mark_notifications_read"]
