"""Meetup statistics routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from anemi.application.usecase.stats import (
    GetMeetupStatsRequest,
    GetMeetupStatsUseCase,
    MeetupStatsResponse,
)
from anemi.domain.error import DomainError
from anemi.interface.error import to_http_exception

router = APIRouter(prefix="/stats", tags=["stats"], route_class=DishkaRoute)


@router.get("/meetups", response_model=MeetupStatsResponse)
async def get_meetup_stats(
    get_meetup_stats_use_case: FromDishka[GetMeetupStatsUseCase],
    city: str = Query(default=""),
    month: str | None = Query(default=None, description="YYYY-MM, UTC"),
) -> MeetupStatsResponse:
    """Meetup counts for a city: this month, all time, and upcoming.

    Raises:
        HTTPException: 400 if the city is missing or the month is malformed
    """
    try:
        return await get_meetup_stats_use_case.execute(
            GetMeetupStatsRequest(city=city, month=month)
        )
    except DomainError as e:
        raise to_http_exception(e)
