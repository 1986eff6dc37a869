"""Meetup statistics use case."""

import re
from collections.abc import Callable
from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from anemi.application.usecase.base import BaseUseCase
from anemi.domain.error import ValidationError
from anemi.domain.model.invite import utc_now
from anemi.domain.repository import InviteRepository
from anemi.domain.value import InviteStatus

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

# Declined invites never turn into a meetup
COUNTED_STATUSES = [InviteStatus.PENDING, InviteStatus.CONFIRMED]


class GetMeetupStatsRequest(BaseModel):
    """Meetup stats request."""

    city: str
    month: str | None = None  # YYYY-MM (UTC), defaults to the current month


class StatsPeriod(BaseModel):
    start: datetime
    end: datetime


class MeetupStatsResponse(BaseModel):
    """Meetup counts for a city."""

    city: str
    month: str
    meetups_this_month: int
    total_meetups: int
    upcoming_meetups: int
    period: StatsPeriod


class GetMeetupStatsUseCase(BaseUseCase):
    """Use case for per-city meetup counts.

    Counts non-deleted pending and confirmed invites at cafes in the city:
    created in the month, created ever, and with a chosen date from today on.
    """

    def __init__(
        self,
        invite_repository: InviteRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize stats use case.

        Args:
            invite_repository: Invite repository
            clock: Source of the current (UTC) time
        """
        self.invite_repository = invite_repository
        self.clock = clock

    async def execute(self, request: GetMeetupStatsRequest) -> MeetupStatsResponse:
        """Compute stats.

        Raises:
            ValidationError: If the city is missing or the month is malformed
        """
        city = request.city.strip()
        if not city:
            raise ValidationError("City parameter is required")

        now = self.clock()
        month = request.month or f"{now.year:04d}-{now.month:02d}"
        start, end = _month_bounds(month)

        with logfire.span("get_meetup_stats.execute", city=city, month=month):
            this_month = await self.invite_repository.count_in_city(
                city, COUNTED_STATUSES, created_from=start, created_to=end
            )
            total = await self.invite_repository.count_in_city(city, COUNTED_STATUSES)
            upcoming = await self.invite_repository.count_upcoming_in_city(
                city, COUNTED_STATUSES, now.date().isoformat()
            )

            logfire.info(
                "Meetup stats computed",
                city=city,
                month=month,
                meetups_this_month=this_month,
                total_meetups=total,
                upcoming_meetups=upcoming,
            )
            return MeetupStatsResponse(
                city=city,
                month=month,
                meetups_this_month=this_month,
                total_meetups=total,
                upcoming_meetups=upcoming,
                period=StatsPeriod(start=start, end=end),
            )


def _month_bounds(month: str) -> tuple[datetime, datetime]:
    """Return [start, end) of a YYYY-MM month in UTC."""
    match = _MONTH_PATTERN.match(month)
    if not match:
        raise ValidationError("Invalid month format (expected YYYY-MM)")
    year, month_number = int(match.group(1)), int(match.group(2))
    # 9999-12 has no representable end bound
    if not 1 <= year <= 9998 or not 1 <= month_number <= 12:
        raise ValidationError("Invalid month format (expected YYYY-MM)")

    start = datetime(year, month_number, 1, tzinfo=timezone.utc)
    if month_number == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, month_number + 1, 1, tzinfo=timezone.utc)
    return start, end
