"""Animal Service — herd listing, lookup, registration, patching and soft delete.

Invariants:
    - get_by_id / update / destroy reject malformed ids (InvalidArgumentError) before any IO
    - Only active animals are visible to get_by_id, update and destroy
    - diio is unique across active and inactive animals (create and diio-changing updates)
    - list / list_inactive raise EmptyResultError when nothing matches
    - destroy never removes a row; it flips active to False

Design Decisions:
    - Empty listings answer 404 instead of 200 [] to keep the published API contract
    - update takes an AnimalPatch, never a raw dict: only present fields are applied
"""

import logging
from typing import Any, Sequence
from uuid import UUID

from gestion_bovina.core.animal_patch import AnimalFilter, AnimalPatch
from gestion_bovina.core.domain_types import AnimalId, Diio
from gestion_bovina.core.errors import (
    ConflictError, EmptyResultError, InvalidArgumentError, ResourceNotFoundError,
)
from gestion_bovina.core.repository_protocols import AnimalLike, AnimalRepository

logger = logging.getLogger(__name__)


def parse_animal_id(raw: str) -> AnimalId:
    """Parse a path identifier or raise InvalidArgumentError."""
    try:
        return AnimalId(UUID(str(raw)))
    except ValueError:
        raise InvalidArgumentError(f"The ID '{raw}' is not valid", field="id")


class AnimalService:
    """Use cases over the herd."""

    def __init__(self, animals: AnimalRepository):
        self.animals = animals

    async def list(self, animal_filter: AnimalFilter | None = None) -> Sequence[AnimalLike]:
        """Active animals matching the filter."""
        found = await self.animals.find(True, animal_filter or AnimalFilter())
        if not found:
            raise EmptyResultError("No animals registered")
        return found

    async def list_inactive(
        self, animal_filter: AnimalFilter | None = None,
    ) -> Sequence[AnimalLike]:
        """Soft-deleted animals matching the filter."""
        found = await self.animals.find(False, animal_filter or AnimalFilter())
        if not found:
            raise EmptyResultError("No deactivated animals")
        return found

    async def get_all(self) -> Sequence[AnimalLike]:
        return await self.animals.find(None, AnimalFilter())

    async def get_by_id(self, raw_id: str) -> AnimalLike:
        animal_id = parse_animal_id(raw_id)
        animal = await self.animals.get_active(animal_id)
        if animal is None:
            raise ResourceNotFoundError("Animal", str(animal_id))
        return animal

    async def create(self, fields: dict[str, Any]) -> AnimalLike:
        """Register a new active animal; the diio must be unused."""
        diio = Diio(fields["diio"])
        if await self.animals.get_by_diio(diio) is not None:
            logger.warning("Duplicate diio on create", extra={"diio": diio})
            raise ConflictError(f"An animal with DIIO '{diio}' already exists")
        animal = await self.animals.add(fields)
        logger.info(
            "Animal created", extra={"animal_id": animal.id, "diio": animal.diio},
        )
        return animal

    async def update(self, raw_id: str, patch: AnimalPatch) -> AnimalLike:
        """Apply the fields present in patch to an active animal."""
        animal = await self.get_by_id(raw_id)
        if patch.touches("diio") and patch.get("diio") != animal.diio:
            holder = await self.animals.get_by_diio(Diio(patch.get("diio")))
            if holder is not None:
                logger.warning(
                    "Duplicate diio on update", extra={"diio": patch.get("diio")},
                )
                raise ConflictError(
                    f"An animal with DIIO '{patch.get('diio')}' already exists",
                )
        changed = patch.apply(animal)
        if not changed:
            return animal
        animal = await self.animals.save(animal)
        logger.info(
            f"Animal updated: {', '.join(changed)}",
            extra={"animal_id": animal.id, "diio": animal.diio},
        )
        return animal

    async def destroy(self, raw_id: str) -> AnimalLike:
        """Soft delete: mark an active animal inactive."""
        animal_id = parse_animal_id(raw_id)
        animal = await self.animals.deactivate(animal_id)
        if animal is None:
            raise ResourceNotFoundError("Active animal", str(animal_id))
        logger.info(
            "Animal deactivated", extra={"animal_id": animal.id, "diio": animal.diio},
        )
        return animal
