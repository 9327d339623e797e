"""Animal Schemas — wire contract for /vacas payloads and responses.

Invariants:
    - Wire names: _id, diio, dateBirthday, genre, race, location, sick, cowState
    - Inputs also accept the Python field names (populate_by_name)
    - 0 < diio ≤ DIIO_MAX; breed/location non-blank after strip; sick ≤ 150 chars, blank → None
    - birth_date is always timezone-aware; naive input is read as UTC
    - cowState is never read from input: create always starts active, updates never reactivate
    - AnimalUpdate rejects explicit null for required fields

Design Decisions:
    - AnimalUpdate.to_patch uses exclude_unset: "absent" and "null" stay distinguishable
    - PUT reuses AnimalCreate (full replacement = patch with every field present)
    - ListingQuery treats a blank query value (`?genre=`) as "no filter"
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gestion_bovina.core.animal_patch import NULLABLE_FIELDS, AnimalFilter, AnimalPatch
from gestion_bovina.core.domain_types import DIIO_MAX, SICK_NOTE_MAX_LENGTH, Diio, Sex
from gestion_bovina.core.repository_protocols import AnimalLike


def _strip_required(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v


def _strip_note(v: str | None) -> str | None:
    if v is None:
        return v
    return v.strip() or None


def _as_utc(v: datetime | None) -> datetime | None:
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class AnimalCreate(BaseModel):
    """Animal registration (POST) and full replacement (PUT)."""
    model_config = ConfigDict(populate_by_name=True)

    diio: int = Field(gt=0, le=DIIO_MAX)
    birth_date: datetime = Field(alias="dateBirthday")
    sex: Sex = Field(alias="genre")
    breed: str = Field(alias="race", max_length=100)
    location: str = Field(max_length=200)
    sick: str | None = Field(None, max_length=SICK_NOTE_MAX_LENGTH)

    @field_validator("breed", "location")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return _strip_required(v)

    @field_validator("sick")
    @classmethod
    def strip_sick(cls, v: str | None) -> str | None:
        return _strip_note(v)

    @field_validator("birth_date")
    @classmethod
    def birth_date_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)

    def to_fields(self) -> dict:
        return self.model_dump()

    def to_patch(self) -> AnimalPatch:
        return AnimalPatch(self.model_dump())


class AnimalUpdate(BaseModel):
    """Partial update (PATCH) — only the fields sent are changed."""
    model_config = ConfigDict(populate_by_name=True)

    diio: int | None = Field(None, gt=0, le=DIIO_MAX)
    birth_date: datetime | None = Field(None, alias="dateBirthday")
    sex: Sex | None = Field(None, alias="genre")
    breed: str | None = Field(None, alias="race", max_length=100)
    location: str | None = Field(None, max_length=200)
    sick: str | None = Field(None, max_length=SICK_NOTE_MAX_LENGTH)

    @field_validator("breed", "location")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return _strip_required(v)

    @field_validator("sick")
    @classmethod
    def strip_sick(cls, v: str | None) -> str | None:
        return _strip_note(v)

    @field_validator("birth_date")
    @classmethod
    def birth_date_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in NULLABLE_FIELDS:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_patch(self) -> AnimalPatch:
        return AnimalPatch(self.model_dump(exclude_unset=True))


class AnimalResponse(BaseModel):
    """Public animal representation."""
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(alias="_id")
    diio: int
    birth_date: datetime = Field(alias="dateBirthday")
    sex: Sex = Field(alias="genre")
    breed: str = Field(alias="race")
    location: str
    sick: str | None = None
    active: bool = Field(alias="cowState")

    @field_validator("birth_date")
    @classmethod
    def birth_date_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @classmethod
    def from_model(cls, animal: AnimalLike) -> "AnimalResponse":
        return cls(
            id=animal.id,
            diio=animal.diio,
            birth_date=animal.birth_date,
            sex=animal.sex,
            breed=animal.breed,
            location=animal.location,
            sick=animal.sick,
            active=animal.active,
        )


class AnimalDeleteResponse(BaseModel):
    """Soft-delete acknowledgement with the archived record."""
    message: str
    vaca: AnimalResponse


class ListingQuery(BaseModel):
    """`?diio=&genre=` on the listing routes; blank values mean no filter."""

    diio: int | None = Field(None, gt=0, le=DIIO_MAX)
    genre: Sex | None = None

    @field_validator("diio", "genre", mode="before")
    @classmethod
    def blank_is_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_filter(self) -> AnimalFilter:
        return AnimalFilter(
            diio=Diio(self.diio) if self.diio is not None else None, sex=self.genre,
        )
