"""Production cost to tech column correlation."""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from gold_purchase.models import CatalogEntity, EntityKind, ProductionColumnSample
from gold_purchase.utils.tech_progress import (
    TechProgressData,
    estimate_column_from_cost,
    get_estimated_tech_progress_percent,
    get_estimated_techs_at_column,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductionColumnCorrelation:
    """Samples sorted by production cost, for one kind of entity."""

    samples: tuple[ProductionColumnSample, ...]
    entity_kind: EntityKind


def build_correlation(
    samples: Iterable[ProductionColumnSample], entity_kind: EntityKind
) -> ProductionColumnCorrelation:
    """Sort samples by production cost (stable) into a correlation."""
    sorted_samples = tuple(sorted(samples, key=lambda s: s.production_cost))
    logger.debug(
        "Built %s correlation from %d samples", entity_kind.value, len(sorted_samples)
    )
    return ProductionColumnCorrelation(samples=sorted_samples, entity_kind=entity_kind)


def column_from_correlation(
    correlation: ProductionColumnCorrelation, production_cost: float
) -> float:
    """
    Estimate the column for a production cost.

    Resolution order:
    1. No samples: nearest entry of the static cost table
    2. A sample at exactly this cost: its column
    3. Samples on both sides: linear interpolation between the closest two
    4. Samples on one side only: the closest sample's column (no extrapolation)
    """
    samples = correlation.samples

    if not samples:
        return estimate_column_from_cost(production_cost, correlation.entity_kind)

    lower: ProductionColumnSample | None = None
    upper: ProductionColumnSample | None = None
    for sample in samples:
        if sample.production_cost == production_cost:
            return sample.column
        if sample.production_cost < production_cost:
            if lower is None or sample.production_cost > lower.production_cost:
                lower = sample
        elif upper is None or sample.production_cost < upper.production_cost:
            upper = sample

    if lower is not None and upper is not None:
        t = (production_cost - lower.production_cost) / (
            upper.production_cost - lower.production_cost
        )
        return lower.column + t * (upper.column - lower.column)

    if lower is not None:
        return lower.column

    if upper is not None:
        return upper.column

    # Costs that compare neither below nor above any sample (NaN)
    return estimate_column_from_cost(production_cost, correlation.entity_kind)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def techs_from_correlation(
    data: TechProgressData,
    correlation: ProductionColumnCorrelation,
    production_cost: float,
) -> int:
    """Estimate the number of techs researched for a production cost."""
    column = column_from_correlation(correlation, production_cost)
    return get_estimated_techs_at_column(data, _round_half_up(column))


def tech_progress_from_correlation(
    data: TechProgressData,
    correlation: ProductionColumnCorrelation,
    production_cost: float,
) -> int:
    """Estimate tech progress (0-100) for a production cost."""
    column = column_from_correlation(correlation, production_cost)
    return get_estimated_tech_progress_percent(data, _round_half_up(column))


def samples_from_entities(
    entities: Iterable[CatalogEntity],
    data: TechProgressData,
    kind: EntityKind | None = None,
) -> list[ProductionColumnSample]:
    """
    Turn catalog entities into correlation samples.

    Entities without a positive production cost or a known prerequisite tech
    are skipped. When ``kind`` is given, other kinds are skipped too.
    """
    samples = []
    for entity in entities:
        if kind is not None and entity.kind != kind:
            continue
        if entity.production_cost <= 0:
            continue
        if not entity.prereq_tech or entity.prereq_tech not in data.tech_to_column:
            continue
        samples.append(
            ProductionColumnSample(
                production_cost=entity.production_cost,
                column=data.tech_to_column[entity.prereq_tech],
                label=entity.name,
            )
        )
    return samples
