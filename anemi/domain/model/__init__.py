"""Domain model entities for Anemi Meets."""

from anemi.domain.model.cafe import Cafe
from anemi.domain.model.invite import MeetupInvite

__all__ = [
    "Cafe",
    "MeetupInvite",
]
