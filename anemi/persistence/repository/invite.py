"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from anemi.domain.model import MeetupInvite
from anemi.domain.repository import InviteRepository
from anemi.domain.value import EmailAddress, InviteId, InviteStatus, InviteToken
from anemi.persistence.mappers import invite_to_dict, row_to_invite
from anemi.persistence.tables import cafes_table, meetup_invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, invite_id: InviteId, include_deleted: bool = False
    ) -> Optional[MeetupInvite]:
        """Find an invite by ID.

        Args:
            invite_id: Invite ID to look up
            include_deleted: Also return soft-deleted invites

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(meetup_invites_table).where(meetup_invites_table.c.id == invite_id)
        if not include_deleted:
            stmt = stmt.where(meetup_invites_table.c.deleted_at.is_(None))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_token(self, token: InviteToken) -> Optional[MeetupInvite]:
        """Find a non-deleted invite by its token.

        Args:
            token: Invite token to look up

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(meetup_invites_table).where(
            and_(
                meetup_invites_table.c.token == token.root,
                meetup_invites_table.c.deleted_at.is_(None),
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def save(self, invite: MeetupInvite) -> MeetupInvite:
        """Save an invite (create or update).

        Args:
            invite: Invite to save

        Returns:
            Saved invite
        """
        invite_dict = invite_to_dict(invite)

        # Check if invite exists
        existing = await self.find_by_id(invite.id, include_deleted=True)

        if existing:
            stmt = (
                update(meetup_invites_table)
                .where(meetup_invites_table.c.id == invite.id)
                .values(**invite_dict)
            )
        else:
            stmt = insert(meetup_invites_table).values(**invite_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return invite

    async def save_if_pending(self, invite: MeetupInvite) -> Optional[MeetupInvite]:
        """Write a pending -> terminal transition as one conditional UPDATE.

        Row-level locking makes concurrent updates on the same row wait; the
        loser re-evaluates the WHERE clause against the committed row and
        matches nothing.

        Args:
            invite: Invite carrying the new state

        Returns:
            Saved invite, or None if the row was no longer pending
        """
        stmt = (
            update(meetup_invites_table)
            .where(
                and_(
                    meetup_invites_table.c.id == invite.id,
                    meetup_invites_table.c.status == InviteStatus.PENDING.value,
                    meetup_invites_table.c.deleted_at.is_(None),
                )
            )
            .values(**invite_to_dict(invite))
            .returning(meetup_invites_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_invite(dict(row)) if row else None

    async def commit(self) -> None:
        await self.session.commit()

    async def find_by_creator(
        self, created_by: str, limit: int = 50, offset: int = 0
    ) -> list[MeetupInvite]:
        """Find non-deleted invites by creator with pagination.

        Args:
            created_by: Creator identity
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of matching invites
        """
        stmt = (
            select(meetup_invites_table)
            .where(
                and_(
                    meetup_invites_table.c.created_by == created_by,
                    meetup_invites_table.c.deleted_at.is_(None),
                )
            )
            .order_by(meetup_invites_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_invite(dict(row)) for row in rows]

    async def find_by_invitee_email(
        self, email: EmailAddress, limit: int = 50, offset: int = 0
    ) -> list[MeetupInvite]:
        """Find non-deleted invites answered by an invitee with pagination."""
        stmt = (
            select(meetup_invites_table)
            .where(
                and_(
                    meetup_invites_table.c.invitee_email == email.root,
                    meetup_invites_table.c.deleted_at.is_(None),
                )
            )
            .order_by(meetup_invites_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_invite(dict(row)) for row in rows]

    def _count_in_city_stmt(self, city: str, statuses: list[InviteStatus]):
        return (
            select(func.count())
            .select_from(
                meetup_invites_table.join(
                    cafes_table, meetup_invites_table.c.cafe_id == cafes_table.c.id
                )
            )
            .where(
                and_(
                    cafes_table.c.city == city,
                    meetup_invites_table.c.status.in_([s.value for s in statuses]),
                    meetup_invites_table.c.deleted_at.is_(None),
                )
            )
        )

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
            created_from: Inclusive lower bound on created_at
            created_to: Exclusive upper bound on created_at

        Returns:
            Count of matching invites
        """
        stmt = self._count_in_city_stmt(city, statuses)
        if created_from is not None:
            stmt = stmt.where(meetup_invites_table.c.created_at >= created_from)
        if created_to is not None:
            stmt = stmt.where(meetup_invites_table.c.created_at < created_to)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_upcoming_in_city(
        self, city: str, statuses: list[InviteStatus], today: str
    ) -> int:
        """Count invites in a city whose chosen date is today or later.

        ISO dates compare correctly as strings, so the filter stays in SQL.
        """
        stmt = self._count_in_city_stmt(city, statuses).where(
            and_(
                meetup_invites_table.c.chosen_date.is_not(None),
                meetup_invites_table.c.chosen_date >= today,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def purge_deleted_before(self, cutoff: datetime) -> int:
        """Hard-delete invites soft-deleted before the cutoff.

        Args:
            cutoff: Deletion timestamp threshold

        Returns:
            Number of deleted rows
        """
        stmt = delete(meetup_invites_table).where(
            and_(
                meetup_invites_table.c.deleted_at.is_not(None),
                meetup_invites_table.c.deleted_at < cutoff,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
