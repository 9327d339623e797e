"""Animal Routes — /vacas CRUD with soft delete, all behind bearer auth.

Invariants:
    - Every route depends on get_current_user (router-level dependency)
    - /vacas/all and /vacas/desactivadas are declared before /vacas/{animal_id}
    - Listing filters: ?diio=<int>&genre=<F|M>, equality only; blank values are ignored
    - DELETE never removes data; it returns the archived record

Design Decisions:
    - animal_id is taken as str and validated by the service, so a malformed id is a
      400 from the same rule the service enforces everywhere
    - PUT and PATCH share AnimalService.update; PUT simply sends every field
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from gestion_bovina.api.dependencies import get_animal_service, get_current_user
from gestion_bovina.core.animal_patch import AnimalFilter
from gestion_bovina.core.repository_protocols import UserLike
from gestion_bovina.schemas.animal import (
    AnimalCreate, AnimalDeleteResponse, AnimalResponse, AnimalUpdate, ListingQuery,
)
from gestion_bovina.services.animal_service import AnimalService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/vacas", tags=["vacas"], dependencies=[Depends(get_current_user)],
)


def _listing_filter(query: Annotated[ListingQuery, Query()]) -> AnimalFilter:
    return query.to_filter()


@router.get("", response_model=list[AnimalResponse])
async def list_animals(
    animal_filter: AnimalFilter = Depends(_listing_filter),
    service: AnimalService = Depends(get_animal_service),
):
    """Active animals, optionally filtered by diio and genre."""
    animals = await service.list(animal_filter)
    return [AnimalResponse.from_model(a) for a in animals]


@router.get("/all", response_model=list[AnimalResponse])
async def list_all_animals(service: AnimalService = Depends(get_animal_service)):
    """Every animal, active or not."""
    animals = await service.get_all()
    return [AnimalResponse.from_model(a) for a in animals]


@router.get("/desactivadas", response_model=list[AnimalResponse])
async def list_inactive_animals(
    animal_filter: AnimalFilter = Depends(_listing_filter),
    service: AnimalService = Depends(get_animal_service),
):
    """Soft-deleted animals, optionally filtered by diio and genre."""
    animals = await service.list_inactive(animal_filter)
    return [AnimalResponse.from_model(a) for a in animals]


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal(
    animal_id: str, service: AnimalService = Depends(get_animal_service),
):
    """One active animal by storage id."""
    return AnimalResponse.from_model(await service.get_by_id(animal_id))


@router.post(
    "", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED,
)
async def create_animal(
    body: AnimalCreate,
    service: AnimalService = Depends(get_animal_service),
    current_user: UserLike = Depends(get_current_user),
):
    """Register a new animal (always active)."""
    animal = await service.create(body.to_fields())
    logger.info(
        "Animal registered via API",
        extra={"user_id": current_user.id, "animal_id": animal.id},
    )
    return AnimalResponse.from_model(animal)


@router.put("/{animal_id}", response_model=AnimalResponse)
async def replace_animal(
    animal_id: str,
    body: AnimalCreate,
    service: AnimalService = Depends(get_animal_service),
    current_user: UserLike = Depends(get_current_user),
):
    """Replace every editable field of an active animal."""
    animal = await service.update(animal_id, body.to_patch())
    logger.info(
        "Animal replaced via API",
        extra={"user_id": current_user.id, "animal_id": animal.id},
    )
    return AnimalResponse.from_model(animal)


@router.patch("/{animal_id}", response_model=AnimalResponse)
async def patch_animal(
    animal_id: str,
    body: AnimalUpdate,
    service: AnimalService = Depends(get_animal_service),
    current_user: UserLike = Depends(get_current_user),
):
    """Change only the fields sent."""
    animal = await service.update(animal_id, body.to_patch())
    logger.info(
        "Animal patched via API",
        extra={"user_id": current_user.id, "animal_id": animal.id},
    )
    return AnimalResponse.from_model(animal)


@router.delete("/{animal_id}", response_model=AnimalDeleteResponse)
async def delete_animal(
    animal_id: str,
    service: AnimalService = Depends(get_animal_service),
    current_user: UserLike = Depends(get_current_user),
):
    """Soft delete: the animal moves to /vacas/desactivadas."""
    animal = await service.destroy(animal_id)
    logger.info(
        "Animal deactivated via API",
        extra={"user_id": current_user.id, "animal_id": animal.id},
    )
    return AnimalDeleteResponse(
        message=f"Animal with ID '{animal.id}' deactivated",
        vaca=AnimalResponse.from_model(animal),
    )
