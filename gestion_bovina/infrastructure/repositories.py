"""Record Store Adapter — SQLAlchemy implementations of the repository protocols.

Invariants:
    - One repository instance per request session; never shared across requests
    - Unique-constraint violations on write surface as ConflictError, not DatabaseError
      (the service pre-check can lose a race; the constraint is the final word)
    - deactivate is a single UPDATE ... WHERE id AND active RETURNING statement:
      atomic per row, no read-modify-write window
    - Listings are ordered by created_at so responses are stable

Design Decisions:
    - Writes commit immediately: every operation touches one row and the API has no
      multi-row transaction to protect
    - Other SQLAlchemy errors propagate to DatabaseSessionManager, which maps them
"""

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gestion_bovina.core.animal_patch import AnimalFilter
from gestion_bovina.core.domain_types import AnimalId, Diio, UserId, UserRole
from gestion_bovina.core.errors import ConflictError
from gestion_bovina.models.animal import Animal
from gestion_bovina.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """User persistence on an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def add(
        self, email: str, password_hash: str, password_salt: str, role: UserRole,
    ) -> User:
        user = User(
            email=email, password_hash=password_hash,
            password_salt=password_salt, role=role,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("Concurrent registration lost unique race")
            raise ConflictError("This user already exists")
        await self.db.refresh(user)
        return user


class SqlAnimalRepository:
    """Animal persistence on an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(
        self, active: bool | None, animal_filter: AnimalFilter,
    ) -> Sequence[Animal]:
        """Animals matching the filter; active=None ignores the state flag."""
        query = select(Animal).order_by(Animal.created_at, Animal.diio)
        if active is not None:
            query = query.where(Animal.active.is_(active))
        for name, value in animal_filter.as_criteria().items():
            query = query.where(getattr(Animal, name) == value)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def get_active(self, animal_id: AnimalId) -> Animal | None:
        result = await self.db.execute(
            select(Animal)
            .where(Animal.id == animal_id)
            .where(Animal.active.is_(True)),
        )
        return result.scalar_one_or_none()

    async def get_by_diio(self, diio: Diio) -> Animal | None:
        result = await self.db.execute(select(Animal).where(Animal.diio == diio))
        return result.scalar_one_or_none()

    async def add(self, fields: dict[str, Any]) -> Animal:
        animal = Animal(**fields, active=True)
        self.db.add(animal)
        await self._commit_unique(fields.get("diio"))
        await self.db.refresh(animal)
        return animal

    async def save(self, animal: Animal) -> Animal:
        await self._commit_unique(animal.diio)
        await self.db.refresh(animal)
        return animal

    async def deactivate(self, animal_id: AnimalId) -> Animal | None:
        """Flip active → False for an active animal. None if no active row matched."""
        result = await self.db.execute(
            update(Animal)
            .where(Animal.id == animal_id)
            .where(Animal.active.is_(True))
            .values(active=False, updated_at=datetime.now(timezone.utc))
            .returning(Animal)
            .execution_options(populate_existing=True),
        )
        animal = result.scalar_one_or_none()
        await self.db.commit()
        return animal

    async def _commit_unique(self, diio: int | None) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning("Duplicate diio rejected by store", extra={"diio": diio})
            raise ConflictError(f"An animal with DIIO '{diio}' already exists")
