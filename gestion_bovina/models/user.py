"""User ORM — accounts allowed to manage the herd.

Invariants:
    - id is UUID primary key (client-side default)
    - email is unique, stored stripped and lower-cased by the auth service
    - password_hash is an Argon2 encoded hash; password_salt is the hex salt used for it
    - Users are never deleted

Design Decisions:
    - role stored as its string value (native_enum=False): portable across PostgreSQL/SQLite
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum as SAEnum, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from gestion_bovina.core.domain_types import UserRole
from gestion_bovina.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    password_salt: Mapped[str] = mapped_column(String(64), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(
            UserRole, native_enum=False, length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=UserRole.USER,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
