"""Meetup invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from anemi.domain.model.invite import MeetupInvite
from anemi.domain.value import EmailAddress, InviteId, InviteStatus, InviteToken


class InviteRepository(ABC):
    """Repository for the MeetupInvite aggregate.

    Defines the contract for invite persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(
        self, invite_id: InviteId, include_deleted: bool = False
    ) -> MeetupInvite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier
            include_deleted: Also return soft-deleted invites (internal use)

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InviteToken) -> MeetupInvite | None:
        """Find a non-deleted invite by its public token.

        Args:
            token: The invite token

        Returns:
            The invite if found and not soft-deleted, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, invite: MeetupInvite) -> MeetupInvite:
        """Save an invite (create or update).

        Args:
            invite: The invite to save

        Returns:
            The saved invite
        """
        pass

    @abstractmethod
    async def save_if_pending(self, invite: MeetupInvite) -> MeetupInvite | None:
        """Write an invite only if the stored row is still pending.

        This is the compare-and-swap that serializes accept/decline on the
        same invite: the write and the status check are one atomic step.

        Args:
            invite: The invite carrying the new state

        Returns:
            The saved invite, or None if the stored status was no longer
            pending (someone else acted first) or the invite was deleted
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make all changes so far durable."""
        pass

    @abstractmethod
    async def find_by_creator(
        self, created_by: str, limit: int = 50, offset: int = 0
    ) -> list[MeetupInvite]:
        """Find non-deleted invites created by a caller, newest first.

        Args:
            created_by: Creator identity
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invites
        """
        pass

    @abstractmethod
    async def find_by_invitee_email(
        self, email: EmailAddress, limit: int = 50, offset: int = 0
    ) -> list[MeetupInvite]:
        """Find non-deleted invites answered by an invitee, newest first.

        Args:
            email: Invitee email
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invites
        """
        pass

    @abstractmethod
    async def count_in_city(
        self,
        city: str,
        statuses: list[InviteStatus],
        created_from: datetime | None = None,
        created_to: datetime | None = None,
    ) -> int:
        """Count non-deleted invites at cafes in a city.

        Args:
            city: City of the attached cafe
            statuses: Statuses to include
            created_from: Optional inclusive lower bound on created_at
            created_to: Optional exclusive upper bound on created_at

        Returns:
            Number of matching invites
        """
        pass

    @abstractmethod
    async def count_upcoming_in_city(
        self, city: str, statuses: list[InviteStatus], today: str
    ) -> int:
        """Count non-deleted invites in a city with ``chosen_date >= today``.

        Args:
            city: City of the attached cafe
            statuses: Statuses to include
            today: ISO date string (UTC)

        Returns:
            Number of upcoming meetups
        """
        pass

    @abstractmethod
    async def purge_deleted_before(self, cutoff: datetime) -> int:
        """Permanently remove invites soft-deleted before ``cutoff``.

        Args:
            cutoff: Deletion timestamp threshold

        Returns:
            Number of removed invites
        """
        pass
