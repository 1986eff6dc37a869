"""Cafe entity.

Cafes come from the venue catalogue; invites only reference them.
"""

from typing import Optional

from anemi.domain.model.common import DomainModel
from anemi.domain.value import CafeId


class Cafe(DomainModel):
    """A coffee venue that can be suggested for a meetup."""

    id: CafeId
    name: str
    address: str
    city: str
    price_range: Optional[str] = None
    rating: Optional[float] = None
    description: Optional[str] = None
