"""Strongly typed identifiers for Anemi domain entities."""

from typing import NewType
from uuid import UUID

InviteId = NewType("InviteId", UUID)

# Cafe ids come from the venue catalogue and are opaque strings;
# an empty string means no venue has been chosen yet.
CafeId = NewType("CafeId", str)
