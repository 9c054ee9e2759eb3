"""Domain entity representing an account."""

from dataclasses import dataclass
from datetime import datetime

ROLE_PARTICIPANT = "participant"
ROLE_ORGANIZER = "organizer"
ROLE_VERIFIER = "verifier"

ROLES = (ROLE_PARTICIPANT, ROLE_ORGANIZER, ROLE_VERIFIER)


@dataclass
class User:
    """Authenticated identity owning zero or more registrations."""

    id: int | None
    name: str
    email: str
    password: str
    role: str
    push_token: str | None
    last_login: datetime | None
    created_at: datetime | None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the account role matches ``role``."""

        return self.role.lower() == role.lower()


__all__ = ["User", "ROLES", "ROLE_PARTICIPANT", "ROLE_ORGANIZER", "ROLE_VERIFIER"]
