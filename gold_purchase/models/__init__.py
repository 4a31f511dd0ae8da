"""Data models for catalog entities and purchase cost inputs."""

from dataclasses import dataclass, field
from enum import Enum


class EntityKind(Enum):
    """Kinds of purchasable entities."""

    UNIT = "unit"
    BUILDING = "building"
    WONDER = "wonder"


class HurryScope(Enum):
    """Where a hurry cost modifier applies."""

    LOCAL = "local"  # City only
    EMPIRE = "empire"  # All cities


@dataclass(frozen=True)
class TechRecord:
    """A technology and its horizontal position in the tech tree."""

    id: str  # e.g., "TECH_IRON_WORKING"
    column: int  # GridX, 0 = Agriculture
    name: str


@dataclass(frozen=True)
class CatalogEntity:
    """A unit, building or wonder from the game catalog."""

    id: str
    name: str
    kind: EntityKind
    production_cost: int
    prereq_tech: str | None = None
    hurry_cost_modifier: int | None = None  # -1 = cannot be purchased
    help_text: str = ""


@dataclass
class Catalog:
    """Technologies and entities loaded from a catalog file."""

    technologies: list[TechRecord] = field(default_factory=list)
    entities: list[CatalogEntity] = field(default_factory=list)

    def entities_of_kind(self, kind: EntityKind) -> list[CatalogEntity]:
        """Get all entities of one kind, in catalog order."""
        return [entity for entity in self.entities if entity.kind == kind]

    def get_entity(self, entity_id: str) -> CatalogEntity | None:
        """Look up an entity by id."""
        return next((e for e in self.entities if e.id == entity_id), None)


@dataclass(frozen=True)
class ProductionColumnSample:
    """A known production cost and the column of its prerequisite tech."""

    production_cost: float
    column: float
    label: str = ""  # For debugging


@dataclass(frozen=True)
class HurryModifierSource:
    """A gold purchase discount granted by a building or policy."""

    id: str
    name: str
    modifier: int  # Negative = discount, e.g., -15 = -15%
    scope: HurryScope
    description: str

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.name} ({self.modifier:+d}% {self.scope.value})"


@dataclass(frozen=True)
class ProductionToTechMapping:
    """Estimated tech position for a production cost."""

    production: float
    estimated_column: int
    estimated_tech_progress: int  # 0-100
    estimated_techs_researched: int
