"""Meetup invite domain service.

Owns the invite state machine:

    pending --accept--> confirmed
    pending --decline-> declined

Expiry is evaluated against the clock on every action rather than stored.
Each operation re-reads the invite; the pending -> terminal write goes
through the repository's conditional update so concurrent accept/decline
calls on one token serialize at the store.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from anemi.domain.error import (
    InviteConflictError,
    InviteExpiredError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from anemi.domain.model import Cafe, MeetupInvite
from anemi.domain.model.invite import utc_now
from anemi.domain.repository import CafeRepository, InviteRepository
from anemi.domain.value import (
    CafeId,
    EmailAddress,
    InviteId,
    InviteStatus,
    InviteToken,
    MeetupDate,
    MeetupTime,
)
from anemi.domain.value.common import ValueObject

from .base import Service

ORGANIZER_NAME_MIN = 2
ORGANIZER_NAME_MAX = 50
INVITEE_NAME_MAX = 100
DECLINE_REASON_MAX = 500


class InviteChange(ValueObject):
    """One edited field of an invite, for change notifications."""

    field: str
    old: str | list[str]
    new: str | list[str]


class InviteService(Service):
    """Domain service for the meetup invite lifecycle."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        cafe_repository: CafeRepository,
        expiry_days: int = 7,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            cafe_repository: Cafe repository
            expiry_days: Days until a new invite expires
            clock: Source of the current (UTC) time
        """
        self.invite_repository = invite_repository
        self.cafe_repository = cafe_repository
        self.expiry_days = expiry_days
        self.clock = clock

    async def create_invite(
        self,
        organizer_name: str,
        organizer_email: str,
        cafe_id: str,
        dates: list[str],
        times: list[str],
        created_by: str | None = None,
    ) -> MeetupInvite:
        """Create a new pending invite.

        Args:
            organizer_name: Organizer display name (2-50 characters)
            organizer_email: Organizer email
            cafe_id: Suggested cafe, or "" if none chosen yet
            dates: Candidate dates (YYYY-MM-DD), at least one
            times: Candidate times (HH:MM), may be empty
            created_by: Owner identity; defaults to the organizer email

        Returns:
            Created invite

        Raises:
            ValidationError: If any input is malformed or the cafe is unknown
        """
        name = _clean_name(
            organizer_name, "Organizer name", ORGANIZER_NAME_MIN, ORGANIZER_NAME_MAX
        )
        email = _parse_email(organizer_email, "Organizer email")
        available_dates = _parse_dates(dates)
        available_times = _parse_times(times)

        with logfire.span(
            "invite_service.create_invite",
            organizer_email=email.root,
            cafe_id=cafe_id,
            date_count=len(available_dates),
        ):
            cafe_id = cafe_id.strip()
            if cafe_id and not await self.cafe_repository.find_by_id(CafeId(cafe_id)):
                logfire.warn("Unknown cafe for invite", cafe_id=cafe_id)
                raise ValidationError(f"Unknown cafe: {cafe_id}")

            now = self.clock()
            invite = MeetupInvite(
                id=InviteId(uuid4()),
                token=InviteToken.generate(),
                organizer_name=name,
                organizer_email=email,
                cafe_id=CafeId(cafe_id),
                available_dates=available_dates,
                available_times=available_times,
                status=InviteStatus.PENDING,
                expires_at=now + timedelta(days=self.expiry_days),
                created_by=created_by or email.root,
                created_at=now,
                updated_at=now,
            )

            saved = await self.invite_repository.save(invite)
            await self.invite_repository.commit()
            logfire.info(
                "Invite created",
                invite_id=str(saved.id),
                token=saved.token.masked(),
                expires_at=saved.expires_at,
            )
            return saved

    async def get_invite_by_token(self, token: str) -> MeetupInvite:
        """Look up an actionable invite by its public token.

        Args:
            token: Invite token

        Returns:
            The invite

        Raises:
            NotFoundError: If no such token or the invite was deleted
            InviteExpiredError: If the invite has expired
        """
        invite_token = _parse_token(token)
        with logfire.span(
            "invite_service.get_invite_by_token", token=invite_token.masked()
        ):
            invite = await self.invite_repository.find_by_token(invite_token)
            if not invite:
                logfire.warn("Invite not found", token=invite_token.masked())
                raise NotFoundError("Invite", invite_token.masked())

            if invite.is_expired(self.clock()):
                logfire.info(
                    "Invite expired",
                    invite_id=str(invite.id),
                    expires_at=invite.expires_at,
                )
                raise InviteExpiredError(invite_token.masked())

            return invite

    async def get_pending_invite(self, token: str) -> MeetupInvite:
        """Look up an invite that is still waiting for an answer.

        Raises:
            NotFoundError: If no such token or the invite was deleted
            InviteExpiredError: If the invite has expired
            InviteConflictError: If the invite was already accepted or declined
        """
        return await self._get_actionable(token)

    async def accept_invite(
        self,
        token: str,
        invitee_name: str,
        invitee_email: str,
        chosen_date: str,
        chosen_time: str,
    ) -> MeetupInvite:
        """Accept an invite, fixing the meetup slot.

        Args:
            token: Invite token
            invitee_name: Invitee display name
            invitee_email: Invitee email
            chosen_date: One of the invite's available dates
            chosen_time: Chosen time (HH:MM)

        Returns:
            The confirmed invite

        Raises:
            ValidationError: If input is missing or malformed
            NotFoundError: If no such invite
            InviteExpiredError: If the invite has expired
            InviteConflictError: If the invite was already accepted or declined
        """
        name = _clean_name(invitee_name, "Invitee name", 1, INVITEE_NAME_MAX)
        email = _parse_email(invitee_email, "Invitee email")
        if not chosen_date or not chosen_time:
            raise ValidationError("Date and time selection are required")
        date_value = _parse_dates([chosen_date])[0]
        time_value = _parse_times([chosen_time])[0]

        invite = await self._get_actionable(token)
        with logfire.span(
            "invite_service.accept_invite",
            invite_id=str(invite.id),
            chosen_date=date_value,
            chosen_time=time_value,
        ):
            if date_value not in invite.available_dates:
                raise ValidationError(
                    f"Chosen date {date_value} is not one of the proposed dates"
                )

            now = self.clock()
            confirmed = invite.model_copy(
                update={
                    "status": InviteStatus.CONFIRMED,
                    "invitee_name": name,
                    "invitee_email": email,
                    "chosen_date": date_value,
                    "chosen_time": time_value,
                    "confirmed_at": now,
                    "updated_at": now,
                }
            )
            saved = await self._transition(confirmed)
            logfire.info(
                "Invite confirmed",
                invite_id=str(saved.id),
                chosen_date=saved.chosen_date,
                chosen_time=saved.chosen_time,
            )
            return saved

    async def decline_invite(
        self,
        token: str,
        invitee_name: str,
        invitee_email: str,
        reason: str | None = None,
    ) -> MeetupInvite:
        """Decline an invite.

        Args:
            token: Invite token
            invitee_name: Invitee display name
            invitee_email: Invitee email
            reason: Optional free-text reason

        Returns:
            The declined invite

        Raises:
            ValidationError: If input is missing or malformed
            NotFoundError: If no such invite
            InviteExpiredError: If the invite has expired
            InviteConflictError: If the invite was already accepted or declined
        """
        name = _clean_name(invitee_name, "Invitee name", 1, INVITEE_NAME_MAX)
        email = _parse_email(invitee_email, "Invitee email")
        reason = (reason or "").strip() or None
        if reason and len(reason) > DECLINE_REASON_MAX:
            raise ValidationError(
                f"Decline reason must be at most {DECLINE_REASON_MAX} characters"
            )

        invite = await self._get_actionable(token)
        with logfire.span("invite_service.decline_invite", invite_id=str(invite.id)):
            now = self.clock()
            declined = invite.model_copy(
                update={
                    "status": InviteStatus.DECLINED,
                    "invitee_name": name,
                    "invitee_email": email,
                    "decline_reason": reason,
                    "declined_at": now,
                    "updated_at": now,
                }
            )
            saved = await self._transition(declined)
            logfire.info(
                "Invite declined",
                invite_id=str(saved.id),
                has_reason=reason is not None,
            )
            return saved

    async def update_invite(
        self,
        invite_id: InviteId,
        caller: str,
        organizer_name: str | None = None,
        available_dates: list[str] | None = None,
        available_times: list[str] | None = None,
    ) -> tuple[MeetupInvite, list[InviteChange]]:
        """Edit the organizer-owned details of an invite.

        Only the provided fields are applied; status, token and expiry are
        never touched. Answered invites stay editable so a confirmed meetup
        can be rescheduled.

        Args:
            invite_id: Invite ID
            caller: Identity of the caller
            organizer_name: New organizer name
            available_dates: New candidate dates
            available_times: New candidate times

        Returns:
            Tuple of (updated invite, list of changed fields)

        Raises:
            NotFoundError: If the invite does not exist or was deleted
            NotAuthorizedError: If the caller does not own the invite
            ValidationError: If a provided field is malformed
                or would drop the chosen date of a confirmed invite
        """
        with logfire.span(
            "invite_service.update_invite", invite_id=str(invite_id), caller=caller
        ):
            invite = await self._get_owned(invite_id, caller)

            update: dict = {}
            changes: list[InviteChange] = []
            if organizer_name is not None:
                name = _clean_name(
                    organizer_name,
                    "Organizer name",
                    ORGANIZER_NAME_MIN,
                    ORGANIZER_NAME_MAX,
                )
                if name != invite.organizer_name:
                    update["organizer_name"] = name
                    changes.append(
                        InviteChange(
                            field="organizer_name", old=invite.organizer_name, new=name
                        )
                    )
            if available_dates is not None:
                dates = _parse_dates(available_dates)
                if (
                    invite.status == InviteStatus.CONFIRMED
                    and invite.chosen_date not in dates
                ):
                    raise ValidationError(
                        "Proposed dates must keep the confirmed date "
                        f"{invite.chosen_date}"
                    )
                if dates != invite.available_dates:
                    update["available_dates"] = dates
                    changes.append(
                        InviteChange(
                            field="available_dates",
                            old=invite.available_dates,
                            new=dates,
                        )
                    )
            if available_times is not None:
                times = _parse_times(available_times)
                if times != invite.available_times:
                    update["available_times"] = times
                    changes.append(
                        InviteChange(
                            field="available_times",
                            old=invite.available_times,
                            new=times,
                        )
                    )

            if not changes:
                logfire.info("Invite update without changes", invite_id=str(invite_id))
                return invite, []

            update["updated_at"] = self.clock()
            saved = await self.invite_repository.save(invite.model_copy(update=update))
            await self.invite_repository.commit()
            logfire.info(
                "Invite updated",
                invite_id=str(invite_id),
                changed_fields=[c.field for c in changes],
            )
            return saved, changes

    async def delete_invite(self, invite_id: InviteId, caller: str) -> MeetupInvite:
        """Soft-delete an invite. The status is left as it is.

        Args:
            invite_id: Invite ID
            caller: Identity of the caller

        Returns:
            The deleted invite

        Raises:
            NotFoundError: If the invite does not exist or was already deleted
            NotAuthorizedError: If the caller does not own the invite
        """
        with logfire.span(
            "invite_service.delete_invite", invite_id=str(invite_id), caller=caller
        ):
            invite = await self._get_owned(invite_id, caller)
            now = self.clock()
            deleted = await self.invite_repository.save(
                invite.model_copy(update={"deleted_at": now, "updated_at": now})
            )
            await self.invite_repository.commit()
            logfire.info(
                "Invite soft-deleted",
                invite_id=str(invite_id),
                status=deleted.status.value,
            )
            return deleted

    async def restore_invite(self, invite_id: InviteId, caller: str) -> MeetupInvite:
        """Undo a soft delete.

        Args:
            invite_id: Invite ID
            caller: Identity of the caller

        Returns:
            The restored invite

        Raises:
            NotFoundError: If the invite does not exist or is not deleted
            NotAuthorizedError: If the caller does not own the invite
        """
        with logfire.span(
            "invite_service.restore_invite", invite_id=str(invite_id), caller=caller
        ):
            invite = await self.invite_repository.find_by_id(
                invite_id, include_deleted=True
            )
            if not invite or not invite.is_deleted:
                raise NotFoundError("Deleted invite", str(invite_id))
            if invite.created_by != caller:
                raise NotAuthorizedError("invite", str(invite_id), caller)

            restored = await self.invite_repository.save(
                invite.model_copy(update={"deleted_at": None, "updated_at": self.clock()})
            )
            await self.invite_repository.commit()
            logfire.info("Invite restored", invite_id=str(invite_id))
            return restored

    async def list_created_invites(
        self, created_by: str, limit: int = 50, offset: int = 0
    ) -> list[MeetupInvite]:
        """List invites the caller created, newest first."""
        with logfire.span(
            "invite_service.list_created_invites",
            created_by=created_by,
            limit=limit,
            offset=offset,
        ):
            invites = await self.invite_repository.find_by_creator(
                created_by, limit, offset
            )
            logfire.info("Created invites listed", count=len(invites))
            return invites

    async def list_received_invites(
        self, email: str, limit: int = 50, offset: int = 0
    ) -> list[MeetupInvite]:
        """List invites the caller answered as invitee, newest first."""
        invitee_email = _parse_email(email, "Email")
        with logfire.span(
            "invite_service.list_received_invites",
            email=invitee_email.root,
            limit=limit,
            offset=offset,
        ):
            invites = await self.invite_repository.find_by_invitee_email(
                invitee_email, limit, offset
            )
            logfire.info("Received invites listed", count=len(invites))
            return invites

    async def get_cafe(self, cafe_id: CafeId) -> Cafe | None:
        """Get the cafe attached to an invite, if any."""
        if not cafe_id:
            return None
        return await self.cafe_repository.find_by_id(cafe_id)

    async def purge_deleted_invites(self, older_than_days: int) -> int:
        """Permanently remove invites soft-deleted more than N days ago.

        Args:
            older_than_days: Age threshold in days

        Returns:
            Number of purged invites
        """
        cutoff = self.clock() - timedelta(days=older_than_days)
        with logfire.span("invite_service.purge_deleted_invites", cutoff=cutoff):
            purged = await self.invite_repository.purge_deleted_before(cutoff)
            await self.invite_repository.commit()
            logfire.info("Deleted invites purged", count=purged, cutoff=cutoff)
            return purged

    async def _get_actionable(self, token: str) -> MeetupInvite:
        """Load an invite that can still be accepted or declined.

        Expiry is checked before status: an expired invite is reported as
        expired whatever its status.
        """
        invite = await self.get_invite_by_token(token)
        if invite.status != InviteStatus.PENDING:
            logfire.warn(
                "Invite already answered",
                invite_id=str(invite.id),
                status=invite.status.value,
            )
            raise InviteConflictError.for_status(invite.status)
        return invite

    async def _transition(self, invite: MeetupInvite) -> MeetupInvite:
        """Persist a pending -> terminal transition, or report who won."""
        saved = await self.invite_repository.save_if_pending(invite)
        if saved is None:
            current = await self.invite_repository.find_by_id(
                invite.id, include_deleted=True
            )
            if current is None or current.is_deleted:
                raise NotFoundError("Invite", invite.token.masked())
            logfire.warn(
                "Invite transition lost race",
                invite_id=str(invite.id),
                attempted=invite.status.value,
                current=current.status.value,
            )
            raise InviteConflictError.for_status(current.status)
        await self.invite_repository.commit()
        return saved

    async def _get_owned(self, invite_id: InviteId, caller: str) -> MeetupInvite:
        invite = await self.invite_repository.find_by_id(invite_id)
        if not invite:
            raise NotFoundError("Invite", str(invite_id))
        if invite.created_by != caller:
            logfire.warn(
                "Invite ownership check failed",
                invite_id=str(invite_id),
                caller=caller,
            )
            raise NotAuthorizedError("invite", str(invite_id), caller)
        return invite


def _clean_name(value: str | None, label: str, min_length: int, max_length: int) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationError(f"{label} is required")
    if not min_length <= len(name) <= max_length:
        raise ValidationError(
            f"{label} must be {min_length}-{max_length} characters"
        )
    return name


def _parse_email(value: str | None, label: str) -> EmailAddress:
    if not value or not value.strip():
        raise ValidationError(f"{label} is required")
    try:
        return EmailAddress(value)
    except PydanticValidationError:
        raise ValidationError(f"{label} is not a valid email address")


def _parse_token(value: str) -> InviteToken:
    if not value or not value.strip():
        raise ValidationError("Invite token is required")
    try:
        return InviteToken(value.strip())
    except PydanticValidationError:
        # Not a token we could ever have issued
        raise NotFoundError("Invite", value[:8] + "...")


def _parse_dates(values: list[str]) -> list[str]:
    if not values:
        raise ValidationError("At least one date is required")
    try:
        return [MeetupDate(v).root for v in values]
    except PydanticValidationError as e:
        raise ValidationError(_first_error(e))


def _parse_times(values: list[str]) -> list[str]:
    try:
        return [MeetupTime(v).root for v in values]
    except PydanticValidationError as e:
        raise ValidationError(_first_error(e))


def _first_error(error: PydanticValidationError) -> str:
    # pydantic prefixes custom messages with "Value error, "
    return error.errors()[0]["msg"].removeprefix("Value error, ")
