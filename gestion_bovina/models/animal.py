"""Animal ORM — one row per animal in the herd.

Invariants:
    - id is the storage identifier (UUID); diio is the business tag, unique across
      active AND inactive rows
    - sex is F or M
    - sick is an optional note of at most SICK_NOTE_MAX_LENGTH chars
    - active defaults to True; soft delete sets it to False, rows are never removed

Design Decisions:
    - Index on active: every listing filters on it
    - updated_at maintained by the ORM (onupdate) so soft deletes and patches both bump it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, DateTime, Enum as SAEnum, Integer, String,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from gestion_bovina.core.domain_types import SICK_NOTE_MAX_LENGTH, Sex
from gestion_bovina.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Animal(Base):
    __tablename__ = "animals"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    diio: Mapped[int] = mapped_column(
        Integer, nullable=False, unique=True, index=True,
    )
    birth_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    sex: Mapped[Sex] = mapped_column(
        SAEnum(
            Sex, native_enum=False, length=1,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    breed: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    sick: Mapped[str | None] = mapped_column(
        String(SICK_NOTE_MAX_LENGTH), nullable=True, default=None,
    )
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
