import json
import logging

import pytest

from gold_purchase.models import EntityKind
from gold_purchase.models.game_context import (
    GOLD_PURCHASE_CONSTANTS_CP,
    GOLD_PURCHASE_CONSTANTS_VP,
    EraType,
    GameSpeedType,
    HandicapType,
)
from gold_purchase.utils.catalog_loader import load_catalog, parse_catalog
from gold_purchase.utils.config_loader import (
    load_config,
    parse_game_context,
    parse_gold_purchase_constants,
)

CATALOG = {
    "technologies": [
        {"id": "TECH_AGRICULTURE", "column": 0, "name": "Agriculture"},
        {"id": "TECH_POTTERY", "column": 1, "name": "Pottery"},
        {"id": "TECH_BROKEN", "column": -2, "name": "Broken"},
        {"name": "No Id"},
    ],
    "units": [
        {"id": "UNIT_WARRIOR", "name": "Warrior", "cost": 40, "prereq_tech": None},
        {"id": "UNIT_SETTLER", "name": "Settler", "hurry_cost_modifier": -1},
    ],
    "buildings": [
        {
            "id": "BUILDING_STOCK_EXCHANGE",
            "name": "Stock Exchange",
            "cost": 600,
            "prereq_tech": "TECH_POTTERY",
            "hurry_cost_modifier": -20,
            "help": "-20% [ICON_GOLD] Gold cost for Purchase or Investment.",
        }
    ],
    "wonders": [{"id": "BUILDING_PYRAMID", "name": "Pyramids", "cost": "185"}],
}


def test_load_catalog(tmp_path, caplog):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG))

    with caplog.at_level(logging.WARNING):
        catalog = load_catalog(path)

    assert [t.id for t in catalog.technologies] == ["TECH_AGRICULTURE", "TECH_POTTERY"]
    assert [e.id for e in catalog.entities] == [
        "UNIT_WARRIOR",
        "BUILDING_STOCK_EXCHANGE",
        "BUILDING_PYRAMID",
    ]
    assert len([r for r in caplog.records if "Skipping" in r.getMessage()]) == 3

    exchange = catalog.get_entity("BUILDING_STOCK_EXCHANGE")
    assert exchange is not None
    assert exchange.kind == EntityKind.BUILDING
    assert exchange.hurry_cost_modifier == -20
    assert "Gold cost" in exchange.help_text

    (pyramids,) = catalog.entities_of_kind(EntityKind.WONDER)
    assert pyramids.production_cost == 185
    assert pyramids.hurry_cost_modifier is None


def test_load_catalog_rejects_non_object(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text("[]")
    with pytest.raises(ValueError):
        load_catalog(path)


def test_parse_empty_catalog():
    catalog = parse_catalog({})
    assert catalog.technologies == []
    assert catalog.entities == []


def test_default_config():
    context, constants = load_config(None)
    assert context.game_speed.speed_type == GameSpeedType.STANDARD
    assert context.handicap.handicap_type == HandicapType.PRINCE
    assert constants == GOLD_PURCHASE_CONSTANTS_VP


def test_load_config(tmp_path):
    path = tmp_path / "session.json"
    path.write_text(
        json.dumps(
            {
                "game_speed": "epic",
                "start_era": "ERA_CLASSICAL",
                "handicap": "Deity",
                "constants": {"gold_purchase_visible_divisor": 5},
                "gold_purchase": "cp",
            }
        )
    )

    context, constants = load_config(path)

    assert context.game_speed.hurry_percent == 150
    assert context.start_era.era_type == EraType.CLASSICAL
    assert context.current_era.era_type == EraType.CLASSICAL
    assert context.handicap.ai_production_percent == 170
    assert context.constants.gold_purchase_visible_divisor == 5
    assert constants == GOLD_PURCHASE_CONSTANTS_CP


def test_gold_purchase_overrides():
    constants = parse_gold_purchase_constants({"preset": "cp", "visible_divisor": 25})
    assert constants.production_exponent == 0.75
    assert constants.visible_divisor == 25


@pytest.mark.parametrize(
    "config",
    [
        {"game_speed": "ludicrous"},
        {"handicap": "impossible"},
        {"constants": {"not_a_constant": 1}},
        {"constants": [1, 2]},
        {"game_speed": 3},
        {"start_era": None},
    ],
)
def test_invalid_game_context(config):
    with pytest.raises(ValueError):
        parse_game_context(config)


@pytest.mark.parametrize(
    "value",
    [
        "xp",
        3,
        {"visible_divisor": 0},
        {"production_exponent": 1.5},
        {"preset": "xp", "visible_divisor": 5},
        {"preset": 7},
    ],
)
def test_invalid_gold_purchase_constants(value):
    with pytest.raises(ValueError):
        parse_gold_purchase_constants(value)


def test_unknown_preset_in_config_file_is_a_value_error(tmp_path):
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"gold_purchase": {"preset": "xp"}}))
    with pytest.raises(ValueError):
        load_config(path)
