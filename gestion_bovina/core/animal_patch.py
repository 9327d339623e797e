"""Animal Patch & Filter — explicit partial-update structure and listing predicates.

Invariants:
    - AnimalPatch only carries fields from PATCHABLE_FIELDS; `active` is never patchable
    - A field absent from the patch is left untouched; a present field is applied even if None
    - Required fields (everything but `sick`) never accept None
    - AnimalFilter is equality-only; unset predicates match everything

Design Decisions:
    - Patch as an immutable mapping of present fields instead of a blind attribute merge:
      the caller sees exactly which fields change and unknown keys are rejected early
    - apply() works on any object with matching attributes — no ORM import in core
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from gestion_bovina.core.domain_types import Diio, Sex

PATCHABLE_FIELDS = ("diio", "birth_date", "sex", "breed", "location", "sick")
NULLABLE_FIELDS = frozenset({"sick"})


@dataclass(frozen=True)
class AnimalPatch:
    """Set of field changes to apply to an existing animal."""
    changes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        unknown = set(self.changes) - set(PATCHABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields not patchable: {', '.join(sorted(unknown))}")
        for name, value in self.changes.items():
            if value is None and name not in NULLABLE_FIELDS:
                raise ValueError(f"Field '{name}' cannot be null")
        object.__setattr__(self, "changes", MappingProxyType(dict(self.changes)))

    @property
    def is_empty(self) -> bool:
        return not self.changes

    def touches(self, name: str) -> bool:
        return name in self.changes

    def get(self, name: str, default: Any = None) -> Any:
        return self.changes.get(name, default)

    def apply(self, target: Any) -> list[str]:
        """Write present fields onto target. Returns names whose value changed."""
        changed = []
        for name in PATCHABLE_FIELDS:
            if name not in self.changes:
                continue
            value = self.changes[name]
            if getattr(target, name) != value:
                setattr(target, name, value)
                changed.append(name)
        return changed


@dataclass(frozen=True)
class AnimalFilter:
    """Equality predicates for listing endpoints (`?diio=&genre=`)."""
    diio: Diio | None = None
    sex: Sex | None = None

    def as_criteria(self) -> dict[str, Any]:
        """Only the predicates that were provided."""
        criteria: dict[str, Any] = {}
        if self.diio is not None:
            criteria["diio"] = self.diio
        if self.sex is not None:
            criteria["sex"] = self.sex
        return criteria
