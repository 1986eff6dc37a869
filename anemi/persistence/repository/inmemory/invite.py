"""In-memory invite repository for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from anemi.domain.model.invite import MeetupInvite
from anemi.domain.repository.invite import InviteRepository
from anemi.domain.value import EmailAddress, InviteId, InviteStatus, InviteToken

from .cafe import InMemoryCafeRepository


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing.

    Methods never await between reading and writing, so each call is atomic
    on the event loop.
    """

    def __init__(self, cafe_repository: InMemoryCafeRepository | None = None) -> None:
        self._invites: dict[InviteId, MeetupInvite] = {}
        self.cafe_repository = cafe_repository or InMemoryCafeRepository()

    async def find_by_id(
        self, invite_id: InviteId, include_deleted: bool = False
    ) -> Optional[MeetupInvite]:
        """Find an invite by ID."""
        invite = self._invites.get(invite_id)
        if invite and invite.is_deleted and not include_deleted:
            return None
        return invite

    async def find_by_token(self, token: InviteToken) -> Optional[MeetupInvite]:
        """Find a non-deleted invite by its token."""
        for invite in self._invites.values():
            if invite.token == token and not invite.is_deleted:
                return invite
        return None

    async def save(self, invite: MeetupInvite) -> MeetupInvite:
        """Save an invite (create or update).

        Raises:
            IntegrityError: If another invite already uses the token
        """
        for existing in self._invites.values():
            if existing.token == invite.token and existing.id != invite.id:
                raise IntegrityError("Duplicate invite token", None, Exception())

        self._invites[invite.id] = invite
        return invite

    async def save_if_pending(self, invite: MeetupInvite) -> Optional[MeetupInvite]:
        """Write the invite only if the stored copy is still pending."""
        current = self._invites.get(invite.id)
        if (
            current is None
            or current.is_deleted
            or current.status != InviteStatus.PENDING
        ):
            return None
        self._invites[invite.id] = invite
        return invite

    async def commit(self) -> None:
        pass

    async def find_by_creator(
        self, created_by: str, limit: int = 50, offset: int = 0
    ) -> list[MeetupInvite]:
        """Find non-deleted invites by creator with pagination."""
        matches = [
            invite
            for invite in self._invites.values()
            if invite.created_by == created_by and not invite.is_deleted
        ]
        matches.sort(key=lambda inv: inv.created_at, reverse=True)
        return matches[offset : offset + limit]

    async def find_by_invitee_email(
        self, email: EmailAddress, limit: int = 50, offset: int = 0
    ) -> list[MeetupInvite]:
        """Find non-deleted invites answered by an invitee with pagination."""
        matches = [
            invite
            for invite in self._invites.values()
            if invite.invitee_email == email and not invite.is_deleted
        ]
        matches.sort(key=lambda inv: inv.created_at, reverse=True)
        return matches[offset : offset + limit]

    def _in_city(self, city: str, statuses: list[InviteStatus]) -> list[MeetupInvite]:
        matches = []
        for invite in self._invites.values():
            if invite.is_deleted or invite.status not in statuses:
                continue
            cafe = self.cafe_repository.get(invite.cafe_id)
            if cafe and cafe.city == city:
                matches.append(invite)
        return matches

    async def count_in_city(
        self,
        city: str,
        statuses: list[InviteStatus],
        created_from: datetime | None = None,
        created_to: datetime | None = None,
    ) -> int:
        """Count non-deleted invites at cafes in a city."""
        count = 0
        for invite in self._in_city(city, statuses):
            if created_from is not None and invite.created_at < created_from:
                continue
            if created_to is not None and invite.created_at >= created_to:
                continue
            count += 1
        return count

    async def count_upcoming_in_city(
        self, city: str, statuses: list[InviteStatus], today: str
    ) -> int:
        """Count invites in a city whose chosen date is today or later."""
        return sum(
            1
            for invite in self._in_city(city, statuses)
            if invite.chosen_date is not None and invite.chosen_date >= today
        )

    async def purge_deleted_before(self, cutoff: datetime) -> int:
        """Remove invites soft-deleted before the cutoff."""
        doomed = [
            invite_id
            for invite_id, invite in self._invites.items()
            if invite.deleted_at is not None and invite.deleted_at < cutoff
        ]
        for invite_id in doomed:
            del self._invites[invite_id]
        return len(doomed)
