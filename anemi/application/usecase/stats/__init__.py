"""Stats use cases."""

from anemi.application.usecase.stats.get_meetup_stats import (
    GetMeetupStatsRequest,
    GetMeetupStatsUseCase,
    MeetupStatsResponse,
)

__all__ = [
    "GetMeetupStatsRequest",
    "GetMeetupStatsUseCase",
    "MeetupStatsResponse",
]
