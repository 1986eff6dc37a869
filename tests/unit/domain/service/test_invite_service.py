"""Unit tests for InviteService."""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from anemi.domain.error import (
    AlreadyConfirmedError,
    AlreadyDeclinedError,
    InviteConflictError,
    InviteExpiredError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from anemi.domain.repository import CafeRepository, InviteRepository
from anemi.domain.service import InviteService
from anemi.domain.value import CafeId, EmailAddress, InviteId, InviteStatus
from tests.factories import make_cafe, make_invite
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


async def build_service(unit_env, clock: FakeClock | None = None) -> InviteService:
    return InviteService(
        invite_repository=await unit_env.get(InviteRepository),
        cafe_repository=await unit_env.get(CafeRepository),
        expiry_days=7,
        clock=clock or FakeClock(),
    )


async def create_default_invite(service: InviteService, **overrides):
    fields = {
        "organizer_name": "Ada Lovelace",
        "organizer_email": "Ada@Example.com",
        "cafe_id": "",
        "dates": ["2026-11-02", "2026-11-03"],
        "times": ["09:00", "14:00"],
    }
    fields.update(overrides)
    return await service.create_invite(**fields)


class TestCreateInvite:
    """Tests for InviteService.create_invite."""

    @pytest.mark.asyncio
    async def test_create_invite_success(self, unit_env):
        """Should create a pending invite expiring after the configured days."""
        # Arrange
        service = await build_service(unit_env)

        # Act
        invite = await create_default_invite(service)

        # Assert
        assert invite.status == InviteStatus.PENDING
        assert invite.organizer_email == EmailAddress("ada@example.com")
        assert invite.expires_at == NOW + timedelta(days=7)
        assert invite.created_by == "ada@example.com"
        assert invite.invitee_email is None
        assert invite.chosen_date is None

        stored = await service.invite_repository.find_by_token(invite.token)
        assert stored == invite

    @pytest.mark.asyncio
    async def test_create_invite_records_authenticated_owner(self, unit_env):
        service = await build_service(unit_env)

        invite = await create_default_invite(service, created_by="owner@example.com")

        assert invite.created_by == "owner@example.com"

    @pytest.mark.asyncio
    async def test_create_invite_with_known_cafe(self, unit_env):
        # Arrange
        cafe_repo = await unit_env.get(CafeRepository)
        cafe = await cafe_repo.save(make_cafe())
        service = await build_service(unit_env)

        # Act
        invite = await create_default_invite(service, cafe_id=cafe.id)

        # Assert
        assert invite.cafe_id == cafe.id

    @pytest.mark.asyncio
    async def test_create_invite_unknown_cafe_fails(self, unit_env):
        service = await build_service(unit_env)

        with pytest.raises(ValidationError, match="Unknown cafe"):
            await create_default_invite(service, cafe_id="cafe-nowhere")

    @pytest.mark.asyncio
    async def test_create_invite_allows_empty_times(self, unit_env):
        service = await build_service(unit_env)

        invite = await create_default_invite(service, times=[])

        assert invite.available_times == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"organizer_name": ""}, "Organizer name is required"),
            ({"organizer_name": "A"}, "Organizer name must be 2-50 characters"),
            ({"organizer_name": "x" * 51}, "Organizer name must be 2-50 characters"),
            ({"organizer_email": ""}, "Organizer email is required"),
            ({"organizer_email": "not-an-email"}, "not a valid email"),
            ({"dates": []}, "At least one date is required"),
            ({"dates": ["2026-13-01"]}, "Invalid date"),
            ({"times": ["25:00"]}, "Invalid time"),
        ],
    )
    async def test_create_invite_validation(self, unit_env, overrides, message):
        """Should reject malformed input with a descriptive message."""
        service = await build_service(unit_env)

        with pytest.raises(ValidationError, match=message):
            await create_default_invite(service, **overrides)


class TestGetInviteByToken:
    """Tests for InviteService.get_invite_by_token."""

    @pytest.mark.asyncio
    async def test_get_invite_by_token(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        found = await service.get_invite_by_token(invite.token.root)

        assert found.id == invite.id

    @pytest.mark.asyncio
    async def test_unknown_token_not_found(self, unit_env):
        service = await build_service(unit_env)

        with pytest.raises(NotFoundError):
            await service.get_invite_by_token("unknown-token-value")

    @pytest.mark.asyncio
    async def test_malformed_token_not_found(self, unit_env):
        service = await build_service(unit_env)

        with pytest.raises(NotFoundError):
            await service.get_invite_by_token("bad token!")

    @pytest.mark.asyncio
    async def test_empty_token_is_invalid(self, unit_env):
        service = await build_service(unit_env)

        with pytest.raises(ValidationError):
            await service.get_invite_by_token("   ")

    @pytest.mark.asyncio
    async def test_expired_invite_is_gone(self, unit_env):
        """Should report expiry once the clock passes expires_at."""
        # Arrange
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        invite = await create_default_invite(service)

        # Act
        clock.now = invite.expires_at + timedelta(seconds=1)

        # Assert
        with pytest.raises(InviteExpiredError):
            await service.get_invite_by_token(invite.token.root)

    @pytest.mark.asyncio
    async def test_invite_still_valid_at_expiry_instant(self, unit_env):
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        invite = await create_default_invite(service)

        clock.now = invite.expires_at

        found = await service.get_invite_by_token(invite.token.root)
        assert found.id == invite.id

    @pytest.mark.asyncio
    async def test_deleted_invite_not_found(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.delete_invite(invite.id, "ada@example.com")

        with pytest.raises(NotFoundError):
            await service.get_invite_by_token(invite.token.root)


class TestAcceptInvite:
    """Tests for InviteService.accept_invite."""

    @pytest.mark.asyncio
    async def test_accept_invite_success(self, unit_env):
        """Should confirm the invite and record invitee and chosen slot."""
        # Arrange
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        # Act
        confirmed = await service.accept_invite(
            invite.token.root, "Bob", "Bob@Example.com", "2026-11-03", "14:00"
        )

        # Assert
        assert confirmed.status == InviteStatus.CONFIRMED
        assert confirmed.invitee_name == "Bob"
        assert confirmed.invitee_email == EmailAddress("bob@example.com")
        assert confirmed.chosen_date == "2026-11-03"
        assert confirmed.chosen_time == "14:00"
        assert confirmed.confirmed_at == NOW
        assert confirmed.declined_at is None

        stored = await service.invite_repository.find_by_id(invite.id)
        assert stored.status == InviteStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_accept_allows_time_outside_proposals(self, unit_env):
        """Only the time format is checked; the invitee may suggest another."""
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        confirmed = await service.accept_invite(
            invite.token.root, "Bob", "bob@example.com", "2026-11-02", "16:30"
        )

        assert confirmed.chosen_time == "16:30"

    @pytest.mark.asyncio
    async def test_accept_rejects_date_outside_proposals(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        with pytest.raises(ValidationError, match="not one of the proposed dates"):
            await service.accept_invite(
                invite.token.root, "Bob", "bob@example.com", "2026-12-25", "09:00"
            )

        stored = await service.invite_repository.find_by_id(invite.id)
        assert stored.status == InviteStatus.PENDING

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name, email, date, time, message",
        [
            ("", "bob@example.com", "2026-11-02", "09:00", "Invitee name is required"),
            ("Bob", "", "2026-11-02", "09:00", "Invitee email is required"),
            ("Bob", "bob", "2026-11-02", "09:00", "not a valid email"),
            ("Bob", "bob@example.com", "", "09:00", "Date and time"),
            ("Bob", "bob@example.com", "2026-11-02", "", "Date and time"),
        ],
    )
    async def test_accept_validation(self, unit_env, name, email, date, time, message):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        with pytest.raises(ValidationError, match=message):
            await service.accept_invite(invite.token.root, name, email, date, time)

    @pytest.mark.asyncio
    async def test_accept_twice_conflicts(self, unit_env):
        # Arrange
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.accept_invite(
            invite.token.root, "Bob", "bob@example.com", "2026-11-02", "09:00"
        )

        # Act / Assert
        with pytest.raises(AlreadyConfirmedError):
            await service.accept_invite(
                invite.token.root, "Eve", "eve@example.com", "2026-11-03", "14:00"
            )

        stored = await service.invite_repository.find_by_id(invite.id)
        assert stored.invitee_name == "Bob"

    @pytest.mark.asyncio
    async def test_accept_after_decline_conflicts(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.decline_invite(invite.token.root, "Bob", "bob@example.com")

        with pytest.raises(AlreadyDeclinedError):
            await service.accept_invite(
                invite.token.root, "Bob", "bob@example.com", "2026-11-02", "09:00"
            )

    @pytest.mark.asyncio
    async def test_expiry_reported_before_status(self, unit_env):
        """An expired invite is reported as expired even if already answered."""
        # Arrange
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        invite = await create_default_invite(service)
        await service.accept_invite(
            invite.token.root, "Bob", "bob@example.com", "2026-11-02", "09:00"
        )

        # Act
        clock.now = invite.expires_at + timedelta(days=1)

        # Assert
        with pytest.raises(InviteExpiredError):
            await service.accept_invite(
                invite.token.root, "Eve", "eve@example.com", "2026-11-02", "09:00"
            )

    @pytest.mark.asyncio
    async def test_expired_pending_invite_cannot_be_accepted(self, unit_env):
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        invite = await create_default_invite(service)
        clock.now = invite.expires_at + timedelta(minutes=1)

        with pytest.raises(InviteExpiredError):
            await service.accept_invite(
                invite.token.root, "Bob", "bob@example.com", "2026-11-02", "09:00"
            )

        stored = await service.invite_repository.find_by_id(invite.id)
        assert stored.status == InviteStatus.PENDING


class TestDeclineInvite:
    """Tests for InviteService.decline_invite."""

    @pytest.mark.asyncio
    async def test_decline_invite_with_reason(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        declined = await service.decline_invite(
            invite.token.root, "Bob", "bob@example.com", "  Out of town  "
        )

        assert declined.status == InviteStatus.DECLINED
        assert declined.decline_reason == "Out of town"
        assert declined.declined_at == NOW
        assert declined.confirmed_at is None
        assert declined.chosen_date is None

    @pytest.mark.asyncio
    async def test_decline_blank_reason_is_none(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        declined = await service.decline_invite(
            invite.token.root, "Bob", "bob@example.com", "   "
        )

        assert declined.decline_reason is None

    @pytest.mark.asyncio
    async def test_decline_reason_too_long(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        with pytest.raises(ValidationError, match="at most 500"):
            await service.decline_invite(
                invite.token.root, "Bob", "bob@example.com", "x" * 501
            )

    @pytest.mark.asyncio
    async def test_decline_after_accept_conflicts(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.accept_invite(
            invite.token.root, "Bob", "bob@example.com", "2026-11-02", "09:00"
        )

        with pytest.raises(AlreadyConfirmedError):
            await service.decline_invite(invite.token.root, "Bob", "bob@example.com")


class TestConcurrentTransitions:
    """Concurrent accept/decline on one token must have exactly one winner."""

    @pytest.mark.asyncio
    async def test_concurrent_accept_and_decline(self, unit_env):
        # Arrange
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        token = invite.token.root

        # Act
        results = await asyncio.gather(
            service.accept_invite(token, "Bob", "bob@example.com", "2026-11-02", "09:00"),
            service.decline_invite(token, "Eve", "eve@example.com", "busy"),
            return_exceptions=True,
        )

        # Assert
        winners = [r for r in results if not isinstance(r, Exception)]
        losers = [r for r in results if isinstance(r, Exception)]
        assert len(winners) == 1
        assert len(losers) == 1
        assert isinstance(losers[0], InviteConflictError)

        stored = await service.invite_repository.find_by_id(invite.id)
        assert stored.status == winners[0].status
        assert losers[0].status == stored.status

    @pytest.mark.asyncio
    async def test_many_concurrent_accepts(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        results = await asyncio.gather(
            *[
                service.accept_invite(
                    invite.token.root,
                    f"Guest {i}",
                    f"guest{i}@example.com",
                    "2026-11-02",
                    "09:00",
                )
                for i in range(10)
            ],
            return_exceptions=True,
        )

        winners = [r for r in results if not isinstance(r, Exception)]
        assert len(winners) == 1
        assert all(
            isinstance(r, AlreadyConfirmedError)
            for r in results
            if isinstance(r, Exception)
        )

        stored = await service.invite_repository.find_by_id(invite.id)
        assert stored.invitee_email == winners[0].invitee_email

    @pytest.mark.asyncio
    async def test_lost_race_reports_current_status(self, unit_env):
        """A conditional write that finds a terminal row reports that status."""
        # Arrange
        service = await build_service(unit_env)
        invite_repo = service.invite_repository
        invite = await invite_repo.save(make_invite())
        stale = invite.model_copy(update={"status": InviteStatus.CONFIRMED})
        await invite_repo.save(invite.model_copy(update={"status": InviteStatus.DECLINED}))

        # Act / Assert
        with pytest.raises(AlreadyDeclinedError):
            await service._transition(stale)


class TestUpdateInvite:
    """Tests for InviteService.update_invite."""

    @pytest.mark.asyncio
    async def test_update_reports_changed_fields(self, unit_env):
        # Arrange
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        invite = await create_default_invite(service)
        clock.now = NOW + timedelta(hours=1)

        # Act
        updated, changes = await service.update_invite(
            invite.id,
            "ada@example.com",
            organizer_name="Ada King",
            available_dates=["2026-11-02", "2026-11-04"],
            available_times=["09:00", "14:00"],
        )

        # Assert
        assert updated.organizer_name == "Ada King"
        assert updated.available_dates == ["2026-11-02", "2026-11-04"]
        assert [c.field for c in changes] == ["organizer_name", "available_dates"]
        assert changes[0].old == "Ada Lovelace"
        assert changes[0].new == "Ada King"
        assert updated.updated_at == clock.now
        assert updated.token == invite.token
        assert updated.expires_at == invite.expires_at

    @pytest.mark.asyncio
    async def test_update_without_changes(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        updated, changes = await service.update_invite(
            invite.id, "ada@example.com", organizer_name="Ada Lovelace"
        )

        assert changes == []
        assert updated == invite

    @pytest.mark.asyncio
    async def test_update_confirmed_invite_keeps_status(self, unit_env):
        """A confirmed meetup can still be rescheduled by its organizer."""
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.accept_invite(
            invite.token.root, "Bob", "bob@example.com", "2026-11-02", "09:00"
        )

        updated, changes = await service.update_invite(
            invite.id, "ada@example.com", available_times=["10:00"]
        )

        assert updated.status == InviteStatus.CONFIRMED
        assert updated.invitee_email == EmailAddress("bob@example.com")
        assert [c.field for c in changes] == ["available_times"]

    @pytest.mark.asyncio
    async def test_update_confirmed_invite_must_keep_chosen_date(self, unit_env):
        # Arrange
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.accept_invite(
            invite.token.root, "Bob", "bob@example.com", "2026-11-02", "09:00"
        )

        # Act / Assert
        with pytest.raises(ValidationError, match="confirmed date 2026-11-02"):
            await service.update_invite(
                invite.id, "ada@example.com", available_dates=["2026-11-03"]
            )

        updated, changes = await service.update_invite(
            invite.id, "ada@example.com", available_dates=["2026-11-02", "2026-11-04"]
        )
        assert updated.chosen_date == "2026-11-02"
        assert [c.field for c in changes] == ["available_dates"]

    @pytest.mark.asyncio
    async def test_update_by_other_caller_forbidden(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        with pytest.raises(NotAuthorizedError):
            await service.update_invite(
                invite.id, "mallory@example.com", organizer_name="Mallory"
            )

    @pytest.mark.asyncio
    async def test_update_unknown_invite(self, unit_env):
        service = await build_service(unit_env)

        with pytest.raises(NotFoundError):
            await service.update_invite(
                InviteId(uuid4()), "ada@example.com", organizer_name="Ada"
            )

    @pytest.mark.asyncio
    async def test_update_rejects_empty_dates(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        with pytest.raises(ValidationError):
            await service.update_invite(
                invite.id, "ada@example.com", available_dates=[]
            )


class TestDeleteAndRestore:
    """Tests for soft delete and restore."""

    @pytest.mark.asyncio
    async def test_delete_keeps_status(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.accept_invite(
            invite.token.root, "Bob", "bob@example.com", "2026-11-02", "09:00"
        )

        deleted = await service.delete_invite(invite.id, "ada@example.com")

        assert deleted.deleted_at == NOW
        assert deleted.status == InviteStatus.CONFIRMED
        assert await service.invite_repository.find_by_id(invite.id) is None

    @pytest.mark.asyncio
    async def test_delete_twice_not_found(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.delete_invite(invite.id, "ada@example.com")

        with pytest.raises(NotFoundError):
            await service.delete_invite(invite.id, "ada@example.com")

    @pytest.mark.asyncio
    async def test_delete_by_other_caller_forbidden(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        with pytest.raises(NotAuthorizedError):
            await service.delete_invite(invite.id, "mallory@example.com")

        assert await service.invite_repository.find_by_id(invite.id) is not None

    @pytest.mark.asyncio
    async def test_restore_deleted_invite(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.delete_invite(invite.id, "ada@example.com")

        restored = await service.restore_invite(invite.id, "ada@example.com")

        assert restored.deleted_at is None
        found = await service.get_invite_by_token(invite.token.root)
        assert found.id == invite.id

    @pytest.mark.asyncio
    async def test_restore_not_deleted_invite(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)

        with pytest.raises(NotFoundError):
            await service.restore_invite(invite.id, "ada@example.com")

    @pytest.mark.asyncio
    async def test_restore_by_other_caller_forbidden(self, unit_env):
        service = await build_service(unit_env)
        invite = await create_default_invite(service)
        await service.delete_invite(invite.id, "ada@example.com")

        with pytest.raises(NotAuthorizedError):
            await service.restore_invite(invite.id, "mallory@example.com")


class TestListingAndPurge:
    """Tests for listing and housekeeping."""

    @pytest.mark.asyncio
    async def test_list_created_invites_newest_first(self, unit_env):
        # Arrange
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        first = await create_default_invite(service)
        clock.now = NOW + timedelta(minutes=5)
        second = await create_default_invite(service)
        await create_default_invite(service, organizer_email="other@example.com")

        # Act
        invites = await service.list_created_invites("ada@example.com")

        # Assert
        assert [i.id for i in invites] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_created_invites_pagination(self, unit_env):
        service = await build_service(unit_env)
        for _ in range(3):
            await create_default_invite(service)

        page = await service.list_created_invites("ada@example.com", limit=2, offset=2)

        assert len(page) == 1

    @pytest.mark.asyncio
    async def test_list_received_invites(self, unit_env):
        service = await build_service(unit_env)
        accepted = await create_default_invite(service)
        declined = await create_default_invite(service)
        await create_default_invite(service)
        await service.accept_invite(
            accepted.token.root, "Bob", "bob@example.com", "2026-11-02", "09:00"
        )
        await service.decline_invite(declined.token.root, "Bob", "BOB@example.com")

        invites = await service.list_received_invites("Bob@Example.com")

        assert {i.id for i in invites} == {accepted.id, declined.id}

    @pytest.mark.asyncio
    async def test_get_cafe_without_cafe(self, unit_env):
        service = await build_service(unit_env)

        assert await service.get_cafe(CafeId("")) is None

    @pytest.mark.asyncio
    async def test_purge_deleted_invites(self, unit_env):
        # Arrange
        clock = FakeClock()
        service = await build_service(unit_env, clock)
        old = await create_default_invite(service)
        recent = await create_default_invite(service)
        kept = await create_default_invite(service)
        await service.delete_invite(old.id, "ada@example.com")
        clock.now = NOW + timedelta(days=300)
        await service.delete_invite(recent.id, "ada@example.com")

        # Act
        clock.now = NOW + timedelta(days=400)
        purged = await service.purge_deleted_invites(older_than_days=365)

        # Assert
        assert purged == 1
        repo = service.invite_repository
        assert await repo.find_by_id(old.id, include_deleted=True) is None
        assert await repo.find_by_id(recent.id, include_deleted=True) is not None
        assert await repo.find_by_id(kept.id) is not None
