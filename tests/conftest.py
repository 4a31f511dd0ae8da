import pytest

from gold_purchase.models import CatalogEntity, EntityKind, TechRecord
from gold_purchase.models.game_context import create_default_game_context
from gold_purchase.utils.tech_progress import clear_tech_progress_cache


@pytest.fixture(autouse=True)
def reset_tech_progress_cache():
    clear_tech_progress_cache()
    yield
    clear_tech_progress_cache()


@pytest.fixture
def context():
    return create_default_game_context()


@pytest.fixture
def techs():
    # Column 3 is intentionally empty
    return [
        TechRecord("TECH_AGRICULTURE", 0, "Agriculture"),
        TechRecord("TECH_POTTERY", 1, "Pottery"),
        TechRecord("TECH_MINING", 1, "Mining"),
        TechRecord("TECH_WRITING", 2, "Writing"),
        TechRecord("TECH_BRONZE_WORKING", 2, "Bronze Working"),
        TechRecord("TECH_CURRENCY", 4, "Currency"),
        TechRecord("TECH_IRON_WORKING", 4, "Iron Working"),
        TechRecord("TECH_GUILDS", 5, "Guilds"),
        TechRecord("TECH_BANKING", 6, "Banking"),
        TechRecord("TECH_ECONOMICS", 6, "Economics"),
    ]


@pytest.fixture
def entities():
    return [
        CatalogEntity("UNIT_WARRIOR", "Warrior", EntityKind.UNIT, 40),
        CatalogEntity(
            "UNIT_SWORDSMAN",
            "Swordsman",
            EntityKind.UNIT,
            150,
            prereq_tech="TECH_IRON_WORKING",
        ),
        CatalogEntity(
            "BUILDING_MARKET",
            "Market",
            EntityKind.BUILDING,
            150,
            prereq_tech="TECH_CURRENCY",
            hurry_cost_modifier=-20,
            help_text="+2 [ICON_GOLD] Gold.",
        ),
        CatalogEntity(
            "BUILDING_STOCK_EXCHANGE",
            "Stock Exchange",
            EntityKind.BUILDING,
            600,
            prereq_tech="TECH_BANKING",
            hurry_cost_modifier=-20,
            help_text="-20% [ICON_GOLD] Gold cost for Purchase or Investment.",
        ),
        CatalogEntity(
            "BUILDING_RIALTO",
            "Rialto District",
            EntityKind.BUILDING,
            500,
            prereq_tech="TECH_GUILDS",
            help_text=(
                "-5% [ICON_GOLD] Gold cost for Purchase or Investment. "
                "-10% [ICON_GOLD] Gold cost for Purchase or Investment in all Cities."
            ),
        ),
        CatalogEntity(
            "BUILDING_FORBIDDEN_PALACE",
            "Forbidden Palace",
            EntityKind.WONDER,
            800,
            prereq_tech="TECH_BANKING",
            help_text="-15% [ICON_GOLD] Gold cost for Purchase or Investment in all Cities.",
        ),
    ]
