"""Cafe repository interface."""

from abc import ABC, abstractmethod

from anemi.domain.model.cafe import Cafe
from anemi.domain.value import CafeId


class CafeRepository(ABC):
    """Read access to the venue catalogue."""

    @abstractmethod
    async def find_by_id(self, cafe_id: CafeId) -> Cafe | None:
        """Find a cafe by ID.

        Args:
            cafe_id: Cafe identifier

        Returns:
            The cafe if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, cafe: Cafe) -> Cafe:
        """Insert or update a cafe (catalogue seeding)."""
        pass
