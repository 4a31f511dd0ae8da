from gold_purchase.models import CatalogEntity, EntityKind, HurryScope
from gold_purchase.utils.hurry_modifiers import (
    INDUSTRY_POLICY_MODIFIERS,
    extract_modifiers,
    index_sources,
    industry_policy_sources,
    parse_hurry_modifiers,
    total_modifier,
)


def test_local_modifier():
    modifiers = extract_modifiers(
        "-20% [ICON_GOLD] Gold cost for Purchase or Investment.",
        "BUILDING_STOCK_EXCHANGE",
        "Stock Exchange",
    )

    assert len(modifiers) == 1
    assert modifiers[0].modifier == -20
    assert modifiers[0].scope == HurryScope.LOCAL
    assert modifiers[0].id == "BUILDING_STOCK_EXCHANGE"
    assert "this city" in modifiers[0].description


def test_empire_modifier_is_not_counted_as_local():
    modifiers = extract_modifiers(
        "-15% [ICON_GOLD] Gold cost for Purchase or Investment in all Cities."
    )

    assert [(m.modifier, m.scope) for m in modifiers] == [(-15, HurryScope.EMPIRE)]


def test_both_scopes_in_one_text():
    modifiers = extract_modifiers(
        "-5% [ICON_GOLD] Gold cost for Purchase or Investment. "
        "-10% [ICON_GOLD] Gold cost for Purchase or Investment in all Cities."
    )

    assert [(m.modifier, m.scope) for m in modifiers] == [
        (-5, HurryScope.LOCAL),
        (-10, HurryScope.EMPIRE),
    ]


def test_case_insensitive_and_positive_values():
    modifiers = extract_modifiers(
        "10%[ICON_GOLD]gold cost for purchase or investment IN ALL CITIES"
    )

    assert [(m.modifier, m.scope) for m in modifiers] == [(10, HurryScope.EMPIRE)]


def test_no_match_yields_empty_list():
    assert extract_modifiers("+2 [ICON_GOLD] Gold.") == []
    assert extract_modifiers("") == []
    assert extract_modifiers(None) == []


def test_index_sources_skips_entities_without_modifiers(entities):
    index = index_sources(entities)

    assert set(index) == {
        "BUILDING_STOCK_EXCHANGE",
        "BUILDING_RIALTO",
        "BUILDING_FORBIDDEN_PALACE",
    }
    assert len(index["BUILDING_RIALTO"]) == 2


def test_parse_hurry_modifiers_uses_entity_identity():
    entity = CatalogEntity(
        "BUILDING_X",
        "X",
        EntityKind.BUILDING,
        100,
        help_text="-7% [ICON_GOLD] Gold cost for Purchase or Investment",
    )

    (modifier,) = parse_hurry_modifiers(entity)
    assert modifier.id == "BUILDING_X"
    assert modifier.name == "X"
    assert str(modifier) == "X (-7% local)"


def test_total_modifier_by_scope(entities):
    index = index_sources(entities)
    enabled = {"BUILDING_RIALTO", "BUILDING_FORBIDDEN_PALACE"}

    assert total_modifier(enabled, index) == -30
    assert total_modifier(enabled, index, HurryScope.LOCAL) == -5
    assert total_modifier(enabled, index, HurryScope.EMPIRE) == -25
    assert total_modifier(set(), index) == 0
    assert total_modifier({"BUILDING_UNKNOWN"}, index) == 0


def test_total_modifier_is_additive(entities):
    index = index_sources(entities)
    index.update(industry_policy_sources())
    first = {"BUILDING_STOCK_EXCHANGE", "POLICY_COMMERCE", "POLICY_CARAVANS"}
    second = {"BUILDING_RIALTO", "BUILDING_FORBIDDEN_PALACE", "POLICY_MERCANTILISM"}

    assert total_modifier(first | second, index) == (
        total_modifier(first, index) + total_modifier(second, index)
    )


def test_industry_policies():
    sources = industry_policy_sources()

    assert len(sources) == len(INDUSTRY_POLICY_MODIFIERS) == 7
    assert total_modifier(sources.keys(), sources) == -35
    assert all(s.scope == HurryScope.EMPIRE for s in INDUSTRY_POLICY_MODIFIERS)
