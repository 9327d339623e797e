"""Boundary Protocols — contracts between services and the record store.

Invariants:
    - Services depend on these Protocols, never on a concrete store
    - Implementations provided by infrastructure/ via dependency injection
    - Records returned are objects exposing the attributes listed in *Like protocols

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods: every implementation does IO
"""

from datetime import datetime
from typing import Any, Protocol, Sequence
from uuid import UUID

from gestion_bovina.core.animal_patch import AnimalFilter
from gestion_bovina.core.domain_types import AnimalId, Diio, Sex, UserId, UserRole


class UserLike(Protocol):
    """Structural contract for stored users."""
    id: UUID
    email: str
    password_hash: str
    password_salt: str
    role: UserRole


class AnimalLike(Protocol):
    """Structural contract for stored animals."""
    id: UUID
    diio: int
    birth_date: datetime
    sex: Sex
    breed: str
    location: str
    sick: str | None
    active: bool


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def get_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def add(
        self, email: str, password_hash: str, password_salt: str, role: UserRole,
    ) -> UserLike: ...


class AnimalRepository(Protocol):
    """Contract for animal persistence."""
    async def find(
        self, active: bool | None, animal_filter: AnimalFilter,
    ) -> Sequence[AnimalLike]: ...
    async def get_active(self, animal_id: AnimalId) -> AnimalLike | None: ...
    async def get_by_diio(self, diio: Diio) -> AnimalLike | None: ...
    async def add(self, fields: dict[str, Any]) -> AnimalLike: ...
    async def save(self, animal: AnimalLike) -> AnimalLike: ...
    async def deactivate(self, animal_id: AnimalId) -> AnimalLike | None: ...
