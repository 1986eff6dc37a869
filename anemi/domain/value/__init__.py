"""Domain value objects for Anemi Meets."""

from anemi.domain.value.identifiers import CafeId, InviteId
from anemi.domain.value.types import (
    EmailAddress,
    InviteStatus,
    InviteToken,
    MeetupDate,
    MeetupTime,
)

__all__ = [
    # Identifiers
    "InviteId",
    "CafeId",
    # Types
    "EmailAddress",
    "InviteStatus",
    "InviteToken",
    "MeetupDate",
    "MeetupTime",
]
