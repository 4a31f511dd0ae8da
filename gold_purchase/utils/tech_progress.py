"""
Tech progress index.

Maps positions in the tech tree (columns, aka GridX) to how many techs a
player has typically researched by then. Column 0 is Agriculture; tech
progress at a column is ``cumulative techs / total techs * 100``.
"""

import logging
import threading
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from gold_purchase.models import EntityKind, ProductionToTechMapping, TechRecord

logger = logging.getLogger(__name__)


# Standard non-wonder building cost at each column (from the building cost sweeps)
BUILDING_COST_BY_COLUMN: dict[int, int] = {
    0: 65,
    1: 65,
    2: 110,
    3: 150,
    4: 200,
    5: 300,
    6: 350,
    7: 500,
    8: 600,
    9: 1000,
    10: 1250,
    11: 1800,
    12: 2000,
    13: 2250,
    14: 2250,
    15: 2500,
    16: 2750,
}

# Wonder cost at each column
WONDER_COST_BY_COLUMN: dict[int, int] = {
    1: 150,
    2: 185,
    3: 200,
    4: 250,
    5: 400,
    6: 500,
    7: 800,
    8: 900,
    9: 1000,
    10: 1250,
    11: 1600,
    12: 1700,
    13: 1900,
    14: 2150,
    15: 2300,
    16: 3000,
    17: 3250,
}


@dataclass(frozen=True)
class TechProgressData:
    """Lookup tables built from a technology catalog."""

    tech_to_column: dict[str, int]
    column_to_cumulative_count: dict[int, int]  # Techs at or before this column
    total_techs: int
    max_column: int
    column_to_tech_names: dict[int, list[str]] = field(default_factory=dict)


def compute_tech_progress_data(techs: Iterable[TechRecord]) -> TechProgressData:
    """
    Build tech progress tables from a technology catalog, without caching.

    Raises:
        ValueError: if the catalog is empty or a tech has a negative column.
    """
    tech_to_column: dict[str, int] = {}
    count_at_column: dict[int, int] = defaultdict(int)
    column_to_tech_names: dict[int, list[str]] = defaultdict(list)
    max_column = 0
    total_techs = 0

    # First pass: count techs at each column
    for tech in techs:
        if tech.column < 0:
            raise ValueError(f"Tech {tech.id} has negative column {tech.column}")
        tech_to_column[tech.id] = tech.column
        count_at_column[tech.column] += 1
        column_to_tech_names[tech.column].append(tech.name)
        max_column = max(max_column, tech.column)
        total_techs += 1

    if total_techs == 0:
        raise ValueError("Cannot build tech progress data from an empty catalog")

    # Second pass: dense cumulative counts, carried through empty columns
    column_to_cumulative_count: dict[int, int] = {}
    cumulative = 0
    for column in range(max_column + 1):
        cumulative += count_at_column.get(column, 0)
        column_to_cumulative_count[column] = cumulative

    logger.debug(
        "Built tech progress data: %d techs across %d columns",
        total_techs,
        max_column + 1,
    )

    return TechProgressData(
        tech_to_column=tech_to_column,
        column_to_cumulative_count=column_to_cumulative_count,
        total_techs=total_techs,
        max_column=max_column,
        column_to_tech_names=dict(column_to_tech_names),
    )


class TechProgressCache:
    """Lazily built, process-wide tech progress data."""

    def __init__(self) -> None:
        self._data: TechProgressData | None = None
        self._lock = threading.Lock()

    def get_or_build(self, techs: Iterable[TechRecord]) -> TechProgressData:
        """Return the cached data, building it from ``techs`` on first use."""
        data = self._data
        if data is not None:
            return data

        with self._lock:
            if self._data is None:
                self._data = compute_tech_progress_data(techs)
            else:
                logger.debug("Tech progress data built by another caller")
            return self._data

    def clear(self) -> None:
        """Drop the cached data so the next call rebuilds it."""
        with self._lock:
            self._data = None
        logger.debug("Tech progress cache cleared")

    @property
    def is_built(self) -> bool:
        return self._data is not None


_cache = TechProgressCache()


def build_tech_progress_data(techs: Iterable[TechRecord]) -> TechProgressData:
    """
    Build tech progress data, cached for subsequent calls.

    Later calls return the first result regardless of ``techs``; call
    ``clear_tech_progress_cache`` when the catalog changes.
    """
    return _cache.get_or_build(techs)


def clear_tech_progress_cache() -> None:
    """Clear the cached tech progress data."""
    _cache.clear()


def get_column_for_tech(data: TechProgressData, tech_id: str | None) -> int:
    """Get the column of a tech, or 0 if it is unknown or missing."""
    if not tech_id:
        return 0
    return data.tech_to_column.get(tech_id, 0)


def get_estimated_techs_at_column(data: TechProgressData, column: int) -> int:
    """
    Estimate the number of techs researched when reaching a column.

    Out-of-range columns are clamped to [0, max_column].
    """
    clamped = max(0, min(column, data.max_column))
    return data.column_to_cumulative_count.get(clamped, 0)


def get_estimated_tech_progress_percent(data: TechProgressData, column: int) -> int:
    """Estimate tech progress (0-100) at a column."""
    techs = get_estimated_techs_at_column(data, column)
    return techs * 100 // data.total_techs


def _nearest_column(production_cost: float, table: dict[int, int]) -> int:
    # Ascending column order with a strict comparison: ties keep the lower column
    closest_column = min(table)
    closest_distance = float("inf")
    for column in sorted(table):
        distance = abs(production_cost - table[column])
        if distance < closest_distance:
            closest_distance = distance
            closest_column = column
    return closest_column


def estimate_column_from_building_cost(production_cost: float) -> int:
    """Estimate the column of a building from the standard building cost table."""
    return _nearest_column(production_cost, BUILDING_COST_BY_COLUMN)


def estimate_column_from_wonder_cost(production_cost: float) -> int:
    """Estimate the column of a wonder from the wonder cost table."""
    return _nearest_column(production_cost, WONDER_COST_BY_COLUMN)


def estimate_column_from_cost(production_cost: float, kind: EntityKind) -> int:
    """Estimate a column from a production cost. Units use the building table."""
    if kind == EntityKind.WONDER:
        return estimate_column_from_wonder_cost(production_cost)
    return estimate_column_from_building_cost(production_cost)


def get_production_to_tech_mapping(
    data: TechProgressData,
    production_cost: float,
    kind: EntityKind = EntityKind.BUILDING,
) -> ProductionToTechMapping:
    """Get column, tech count and tech progress for a production cost."""
    column = estimate_column_from_cost(production_cost, kind)
    return ProductionToTechMapping(
        production=production_cost,
        estimated_column=column,
        estimated_tech_progress=get_estimated_tech_progress_percent(data, column),
        estimated_techs_researched=get_estimated_techs_at_column(data, column),
    )


def format_tech_progress(techs_researched: int, total_techs: int) -> str:
    """Format tech progress, e.g. "45/82 techs (54%)"."""
    percent = techs_researched * 100 // total_techs
    return f"{techs_researched}/{total_techs} techs ({percent}%)"
