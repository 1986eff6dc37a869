"""Invite response models shared by the invite use cases."""

from datetime import datetime

from pydantic import BaseModel

from anemi.domain.model import Cafe, MeetupInvite
from anemi.domain.value import InviteStatus


class CafeItem(BaseModel):
    """Venue details shown with an invite."""

    id: str
    name: str
    address: str
    city: str
    price_range: str | None = None
    rating: float | None = None


class InviteItem(BaseModel):
    """Public view of an invite, as seen through its link.

    Carries no internal identifier; the token is the handle.
    """

    token: str
    organizer_name: str
    organizer_email: str
    invitee_name: str | None = None
    invitee_email: str | None = None
    cafe_id: str
    cafe: CafeItem | None = None
    available_dates: list[str]
    available_times: list[str]
    chosen_date: str | None = None
    chosen_time: str | None = None
    status: InviteStatus
    expires_at: datetime
    confirmed_at: datetime | None = None
    declined_at: datetime | None = None
    decline_reason: str | None = None
    created_at: datetime


class OwnedInviteItem(InviteItem):
    """Owner view of an invite, with the id used for edit/delete."""

    invite_id: str
    invite_url: str
    expired: bool
    updated_at: datetime


def cafe_item(cafe: Cafe | None) -> CafeItem | None:
    if cafe is None:
        return None
    return CafeItem(
        id=cafe.id,
        name=cafe.name,
        address=cafe.address,
        city=cafe.city,
        price_range=cafe.price_range,
        rating=cafe.rating,
    )


def invite_item(invite: MeetupInvite, cafe: Cafe | None = None) -> InviteItem:
    """Build the public view of an invite."""
    return InviteItem(**_public_fields(invite, cafe))


def owned_invite_item(
    invite: MeetupInvite, invite_url: str, now: datetime, cafe: Cafe | None = None
) -> OwnedInviteItem:
    """Build the owner view of an invite."""
    return OwnedInviteItem(
        **_public_fields(invite, cafe),
        invite_id=str(invite.id),
        invite_url=invite_url,
        expired=invite.status == InviteStatus.PENDING and invite.is_expired(now),
        updated_at=invite.updated_at,
    )


def _public_fields(invite: MeetupInvite, cafe: Cafe | None) -> dict:
    return {
        "token": invite.token.root,
        "organizer_name": invite.organizer_name,
        "organizer_email": invite.organizer_email.root,
        "invitee_name": invite.invitee_name,
        "invitee_email": invite.invitee_email.root if invite.invitee_email else None,
        "cafe_id": invite.cafe_id,
        "cafe": cafe_item(cafe),
        "available_dates": invite.available_dates,
        "available_times": invite.available_times,
        "chosen_date": invite.chosen_date,
        "chosen_time": invite.chosen_time,
        "status": invite.status,
        "expires_at": invite.expires_at,
        "confirmed_at": invite.confirmed_at,
        "declined_at": invite.declined_at,
        "decline_reason": invite.decline_reason,
        "created_at": invite.created_at,
    }
