"""ORM Models — SQLAlchemy declarative models for users and animals.

Invariants:
    - All models inherit from Base (db/base.py)
    - Animals are never physically deleted; `active` flips to False instead

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all and Alembic
"""

from gestion_bovina.models.user import User  # noqa: F401
from gestion_bovina.models.animal import Animal  # noqa: F401
