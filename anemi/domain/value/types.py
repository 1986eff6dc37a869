"""Domain value objects for Anemi Meets.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
import secrets
from datetime import date
from enum import Enum

from pydantic import EmailStr, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from anemi.domain.value.common import RootValueObject

_TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")
_EMAIL_ADAPTER = TypeAdapter(EmailStr)

# 32 random bytes, base64url encoded: 43 characters
TOKEN_BYTES = 32


class InviteStatus(str, Enum):
    """Stored status of a meetup invite.

    Expiry is not a status: it is derived from ``expires_at`` at read time.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"


class InviteToken(RootValueObject[str]):
    """URL-safe invite token, the public lookup key for an invite."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is URL-safe and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        if not re.match(r"^[A-Za-z0-9_-]+$", v):
            raise ValueError("Token must be URL-safe")
        return v

    @classmethod
    def generate(cls) -> "InviteToken":
        """Generate a fresh unguessable token."""
        return cls(secrets.token_urlsafe(TOKEN_BYTES))

    def masked(self) -> str:
        """Shortened form for logs."""
        return self.root[:8] + "..."


class EmailAddress(RootValueObject[str]):
    """Email address, normalized to lower case without surrounding spaces."""

    @field_validator("root", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Validate and normalize the address."""
        if not isinstance(v, str):
            raise ValueError("Email must be a string")
        try:
            address = _EMAIL_ADAPTER.validate_python(v.strip())
        except PydanticValidationError:
            raise ValueError("Invalid email address")
        return address.lower()


class MeetupDate(RootValueObject[str]):
    """Candidate or chosen meetup date as an ISO ``YYYY-MM-DD`` string."""

    @field_validator("root")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        """Validate the string is a real calendar date."""
        try:
            parsed = date.fromisoformat(v)
        except ValueError:
            raise ValueError(f"Invalid date: {v!r} (expected YYYY-MM-DD)")
        return parsed.isoformat()


class MeetupTime(RootValueObject[str]):
    """Candidate or chosen meetup time as ``HH:MM`` (24h)."""

    @field_validator("root")
    @classmethod
    def validate_time_format(cls, v: str) -> str:
        """Validate the string is a 24h clock time."""
        if not _TIME_PATTERN.match(v):
            raise ValueError(f"Invalid time: {v!r} (expected HH:MM)")
        return v
