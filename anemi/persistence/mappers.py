"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from anemi.domain.model import Cafe, MeetupInvite
from anemi.domain.value import (
    CafeId,
    EmailAddress,
    InviteId,
    InviteStatus,
    InviteToken,
)


def row_to_cafe(row: Dict[str, Any]) -> Cafe:
    """Convert database row to Cafe domain model.

    Args:
        row: Database row as dict

    Returns:
        Cafe domain model
    """
    return Cafe(
        id=CafeId(row["id"]),
        name=row["name"],
        address=row["address"],
        city=row["city"],
        price_range=row.get("price_range"),
        rating=row.get("rating"),
        description=row.get("description"),
    )


def cafe_to_dict(cafe: Cafe) -> Dict[str, Any]:
    """Convert Cafe domain model to database dict."""
    return cafe.model_dump()


def row_to_invite(row: Dict[str, Any]) -> MeetupInvite:
    """Convert database row to MeetupInvite domain model.

    Args:
        row: Database row as dict

    Returns:
        MeetupInvite domain model
    """
    return MeetupInvite(
        id=InviteId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        token=InviteToken(row["token"]),
        organizer_name=row["organizer_name"],
        organizer_email=EmailAddress(row["organizer_email"]),
        invitee_name=row.get("invitee_name"),
        invitee_email=(
            EmailAddress(row["invitee_email"]) if row.get("invitee_email") else None
        ),
        cafe_id=CafeId(row.get("cafe_id") or ""),
        available_dates=list(row.get("available_dates") or []),
        available_times=list(row.get("available_times") or []),
        chosen_date=row.get("chosen_date"),
        chosen_time=row.get("chosen_time"),
        status=InviteStatus(row["status"]),
        expires_at=row["expires_at"],
        confirmed_at=row.get("confirmed_at"),
        declined_at=row.get("declined_at"),
        decline_reason=row.get("decline_reason"),
        created_by=row["created_by"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def invite_to_dict(invite: MeetupInvite) -> Dict[str, Any]:
    """Convert MeetupInvite domain model to database dict.

    Args:
        invite: MeetupInvite domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = invite.model_dump()
    data["status"] = invite.status.value
    # No venue is stored as NULL so the foreign key holds
    data["cafe_id"] = invite.cafe_id or None
    return data
