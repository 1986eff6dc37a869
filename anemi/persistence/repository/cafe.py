"""PostgreSQL implementation of Cafe repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from anemi.domain.model import Cafe
from anemi.domain.repository import CafeRepository
from anemi.domain.value import CafeId
from anemi.persistence.mappers import cafe_to_dict, row_to_cafe
from anemi.persistence.tables import cafes_table


class PostgresCafeRepository(CafeRepository):
    """PostgreSQL implementation of CafeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, cafe_id: CafeId) -> Optional[Cafe]:
        """Find a cafe by ID.

        Args:
            cafe_id: Cafe ID to look up

        Returns:
            Cafe if found, None otherwise
        """
        stmt = select(cafes_table).where(cafes_table.c.id == cafe_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_cafe(dict(row)) if row else None

    async def save(self, cafe: Cafe) -> Cafe:
        """Insert or update a cafe."""
        cafe_dict = cafe_to_dict(cafe)
        stmt = insert(cafes_table).values(**cafe_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[cafes_table.c.id],
            set_={k: v for k, v in cafe_dict.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return cafe
