"""Domain entity for the check-in audit trail."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class CheckInType(str, Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


@dataclass
class CheckInRecord:
    """Append-only entry written for every admission or exit."""

    id: int | None
    registration_id: int
    verifier_id: int | None
    type: CheckInType
    timestamp: datetime | None


__all__ = ["CheckInRecord", "CheckInType"]
