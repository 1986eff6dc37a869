"""Builders for domain objects used across tests."""

from datetime import timedelta
from uuid import uuid4

from anemi.domain.model import Cafe, MeetupInvite
from anemi.domain.model.invite import utc_now
from anemi.domain.value import CafeId, EmailAddress, InviteId, InviteStatus, InviteToken


def make_invite(**overrides) -> MeetupInvite:
    """Build a pending invite with sensible defaults.

    Args:
        **overrides: Field values to replace

    Returns:
        MeetupInvite
    """
    now = utc_now()
    fields = {
        "id": InviteId(uuid4()),
        "token": InviteToken.generate(),
        "organizer_name": "Ada Lovelace",
        "organizer_email": EmailAddress("ada@example.com"),
        "cafe_id": CafeId(""),
        "available_dates": ["2026-11-02", "2026-11-03"],
        "available_times": ["09:00", "14:00"],
        "status": InviteStatus.PENDING,
        "expires_at": now + timedelta(days=7),
        "created_by": "ada@example.com",
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return MeetupInvite(**fields)


def make_cafe(**overrides) -> Cafe:
    """Build a cafe with sensible defaults."""
    fields = {
        "id": CafeId("cafe-rotterdam-1"),
        "name": "Koffiebar Anemi",
        "address": "Witte de Withstraat 10",
        "city": "Rotterdam",
        "price_range": "$$",
        "rating": 4.6,
    }
    fields.update(overrides)
    return Cafe(**fields)
