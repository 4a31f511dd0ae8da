"""Catalog data loader."""

import json
import logging
from pathlib import Path
from typing import Any

from gold_purchase.models import Catalog, CatalogEntity, EntityKind, TechRecord

logger = logging.getLogger(__name__)

# Catalog section -> kind of the entities in it
ENTITY_SECTIONS: dict[str, EntityKind] = {
    "units": EntityKind.UNIT,
    "buildings": EntityKind.BUILDING,
    "wonders": EntityKind.WONDER,
}


def parse_tech_record(data: dict[str, Any]) -> TechRecord:
    """
    Parse a technology entry.

    Expected format:
        {"id": "TECH_POTTERY", "column": 1, "name": "Pottery"}
    """
    column = int(data["column"])
    if column < 0:
        raise ValueError(f"Negative column for {data['id']}: {column}")
    return TechRecord(id=data["id"], column=column, name=data.get("name", data["id"]))


def parse_entity(data: dict[str, Any], kind: EntityKind) -> CatalogEntity:
    """
    Parse a unit, building or wonder entry.

    Expected format:
        {"id": "BUILDING_MONUMENT", "name": "Monument", "cost": 65,
         "prereq_tech": null, "hurry_cost_modifier": -20, "help": "..."}
    """
    hurry_cost_modifier = data.get("hurry_cost_modifier")
    return CatalogEntity(
        id=data["id"],
        name=data.get("name", data["id"]),
        kind=kind,
        production_cost=int(data["cost"]),
        prereq_tech=data.get("prereq_tech"),
        hurry_cost_modifier=(
            int(hurry_cost_modifier) if hurry_cost_modifier is not None else None
        ),
        help_text=data.get("help") or "",
    )


def parse_catalog(data: dict[str, Any]) -> Catalog:
    """Parse catalog JSON data. Malformed entries are skipped with a warning."""
    catalog = Catalog()

    for entry in data.get("technologies", []):
        try:
            catalog.technologies.append(parse_tech_record(entry))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping technology entry %r: %s", entry, e)

    for section, kind in ENTITY_SECTIONS.items():
        for entry in data.get(section, []):
            try:
                catalog.entities.append(parse_entity(entry, kind))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping %s entry %r: %s", kind.value, entry, e)

    logger.debug(
        "Loaded %d technologies and %d entities",
        len(catalog.technologies),
        len(catalog.entities),
    )
    return catalog


def load_catalog(json_path: Path) -> Catalog:
    """Load technologies, units, buildings and wonders from a JSON file."""
    with open(json_path) as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Catalog {json_path} must contain a JSON object")

    return parse_catalog(data)
