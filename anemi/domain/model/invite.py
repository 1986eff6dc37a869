"""Meetup invite entity.

An organizer proposes candidate dates and times for a coffee meetup and
shares the invite link; the invitee accepts (picking a slot) or declines.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from anemi.domain.model.common import DomainModel
from anemi.domain.value import CafeId, EmailAddress, InviteId, InviteStatus, InviteToken


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class MeetupInvite(DomainModel):
    """Meetup invite aggregate.

    Business rules:
    - Status only moves pending -> confirmed or pending -> declined
    - Invitee details, chosen slot and transition timestamps are write-once
    - An invite past ``expires_at`` is inert even while stored as pending
    - Soft-deleted invites keep their status
    """

    id: InviteId
    token: InviteToken
    organizer_name: str
    organizer_email: EmailAddress
    invitee_name: Optional[str] = None
    invitee_email: Optional[EmailAddress] = None
    cafe_id: CafeId = CafeId("")
    available_dates: list[str] = Field(default_factory=list)
    available_times: list[str] = Field(default_factory=list)
    chosen_date: Optional[str] = None
    chosen_time: Optional[str] = None
    status: InviteStatus = InviteStatus.PENDING
    expires_at: datetime
    confirmed_at: Optional[datetime] = None
    declined_at: Optional[datetime] = None
    decline_reason: Optional[str] = None
    created_by: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        """Whether the invite can no longer be acted upon."""
        return now > self.expires_at

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def has_invitee(self) -> bool:
        return self.invitee_email is not None
