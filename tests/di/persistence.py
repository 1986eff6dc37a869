"""Mock persistence providers for testing."""

from dishka import Scope, alias, provide

from anemi.domain.repository import CafeRepository, InviteRepository
from anemi.persistence.repository.inmemory import (
    InMemoryCafeRepository,
    InMemoryInviteRepository,
)
from anemi.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so every request of one container sees the same store;
    each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_cafe_repository(self) -> InMemoryCafeRepository:
        """Provide in-memory cafe repository."""
        return InMemoryCafeRepository()

    @provide(scope=Scope.APP)
    def get_invite_repository(
        self, cafe_repository: InMemoryCafeRepository
    ) -> InMemoryInviteRepository:
        """Provide in-memory invite repository."""
        return InMemoryInviteRepository(cafe_repository=cafe_repository)

    cafe_repository = alias(source=InMemoryCafeRepository, provides=CafeRepository)
    invite_repository = alias(
        source=InMemoryInviteRepository, provides=InviteRepository
    )
