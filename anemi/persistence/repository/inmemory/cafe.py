"""In-memory cafe repository for testing."""

from typing import Optional

from anemi.domain.model.cafe import Cafe
from anemi.domain.repository.cafe import CafeRepository
from anemi.domain.value import CafeId


class InMemoryCafeRepository(CafeRepository):
    """In-memory implementation of CafeRepository for testing."""

    def __init__(self) -> None:
        self._cafes: dict[CafeId, Cafe] = {}

    def get(self, cafe_id: CafeId) -> Optional[Cafe]:
        return self._cafes.get(cafe_id)

    async def find_by_id(self, cafe_id: CafeId) -> Optional[Cafe]:
        """Find a cafe by ID."""
        return self.get(cafe_id)

    async def save(self, cafe: Cafe) -> Cafe:
        """Insert or update a cafe."""
        self._cafes[cafe.id] = cafe
        return cafe
