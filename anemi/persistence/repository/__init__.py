"""PostgreSQL repository implementations."""

from anemi.persistence.repository.cafe import PostgresCafeRepository
from anemi.persistence.repository.invite import PostgresInviteRepository

__all__ = [
    "PostgresCafeRepository",
    "PostgresInviteRepository",
]
