"""Repository interfaces for the Anemi domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from anemi.domain.repository.cafe import CafeRepository
from anemi.domain.repository.invite import InviteRepository

__all__ = [
    "CafeRepository",
    "InviteRepository",
]
