"""Initial schema — users and animals.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("password_salt", sa.String(64), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "animals",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("diio", sa.Integer, nullable=False),
        sa.Column("birth_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sex", sa.String(1), nullable=False),
        sa.Column("breed", sa.String(100), nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("sick", sa.String(150), nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("sex IN ('F', 'M')", name="ck_animals_sex"),
    )
    op.create_index("ix_animals_diio", "animals", ["diio"], unique=True)
    op.create_index("ix_animals_active", "animals", ["active"])


def downgrade() -> None:
    op.drop_index("ix_animals_active", table_name="animals")
    op.drop_index("ix_animals_diio", table_name="animals")
    op.drop_table("animals")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
