"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, AnimalId wrap UUIDs — storage identifiers, never the business tag
    - Diio is the externally-assigned numeric tag (unique across all animals), 1..DIIO_MAX
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
AnimalId = NewType("AnimalId", UUID)
Diio = NewType("Diio", int)


# ─── Limits ──────────────────────────────────────────────────────

SICK_NOTE_MAX_LENGTH = 150
# diio is stored in a 32-bit INTEGER column
DIIO_MAX = 2_147_483_647


# ─── Enums ───────────────────────────────────────────────────────

class Sex(str, Enum):
    """Animal sex as carried on the wire (`genre`)."""
    FEMALE = "F"
    MALE = "M"


class UserRole(str, Enum):
    """The two account roles. Both may manage the herd."""
    ADMIN = "admin"
    USER = "user"
