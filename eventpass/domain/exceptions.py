"""Errors raised by the registration lifecycle and notification fan-out."""

from __future__ import annotations


class NotFoundError(LookupError):
    """A referenced registration, event, account or code does not exist."""


class UnauthorizedError(PermissionError):
    """The acting account is not allowed to operate on the event."""


class AlreadyRegisteredError(ValueError):
    """The email already holds a registration for the event."""


class InvalidTransitionError(ValueError):
    """The requested action is not allowed from the current status."""

    def __init__(self, current_status: str, action: str, message: str | None = None) -> None:
        self.current_status = current_status
        self.action = action
        super().__init__(
            message
            or f"No se puede aplicar '{action}' a una inscripción en estado '{current_status}'"
        )


class DeliveryFailure(RuntimeError):
    """A delivery channel failed while fanning out a notification."""

    def __init__(self, channel: str, message: str) -> None:
        self.channel = channel
        super().__init__(message)


__all__ = [
    "AlreadyRegisteredError",
    "DeliveryFailure",
    "InvalidTransitionError",
    "NotFoundError",
    "UnauthorizedError",
]
