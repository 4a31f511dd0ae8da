"""
Hurry cost modifiers from buildings and policies.

Hurry modifiers reduce the gold cost of purchases and investments:
- Buildings (empire): Forbidden Palace (-15%)
- Buildings (local): Stock Exchange (-20%), Rialto District (-5% local, -10% empire)
- Policies: Industry branch (-5% each)

Enabled sources stack additively into one percentage before it is applied.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Literal

from gold_purchase.models import CatalogEntity, HurryModifierSource, HurryScope

# "-20% [ICON_GOLD] Gold cost for Purchase or Investment"
LOCAL_PATTERN = re.compile(
    r"(-?\d+)%\s*\[ICON_GOLD\]\s*Gold cost for Purchase or Investment"
    r"(?!\s+in all Cities)",
    re.IGNORECASE,
)

# "-15% [ICON_GOLD] Gold cost for Purchase or Investment in all Cities"
EMPIRE_PATTERN = re.compile(
    r"(-?\d+)%\s*\[ICON_GOLD\]\s*Gold cost for Purchase or Investment"
    r"\s+in all Cities",
    re.IGNORECASE,
)

_SCOPE_PATTERNS = (
    (HurryScope.LOCAL, LOCAL_PATTERN, "in this city"),
    (HurryScope.EMPIRE, EMPIRE_PATTERN, "in all cities"),
)


def extract_modifiers(
    text: str | None, source_id: str = "", name: str = ""
) -> list[HurryModifierSource]:
    """Find every local and empire-wide purchase discount in a help text."""
    modifiers: list[HurryModifierSource] = []
    if not text:
        return modifiers

    for scope, pattern, where in _SCOPE_PATTERNS:
        for match in pattern.finditer(text):
            modifier = int(match.group(1))
            modifiers.append(
                HurryModifierSource(
                    id=source_id,
                    name=name,
                    modifier=modifier,
                    scope=scope,
                    description=(
                        f"{modifier}% gold cost for purchases/investments {where}"
                    ),
                )
            )

    return modifiers


def parse_hurry_modifiers(entity: CatalogEntity) -> list[HurryModifierSource]:
    """Parse hurry modifiers from an entity's help text."""
    return extract_modifiers(entity.help_text, entity.id, entity.name)


def index_sources(
    entities: Iterable[CatalogEntity],
) -> dict[str, list[HurryModifierSource]]:
    """Map entity id to its hurry modifiers, for entities that have any."""
    index: dict[str, list[HurryModifierSource]] = {}
    for entity in entities:
        modifiers = parse_hurry_modifiers(entity)
        if modifiers:
            index[entity.id] = modifiers
    return index


def total_modifier(
    enabled_ids: Iterable[str],
    source_index: Mapping[str, list[HurryModifierSource]],
    scope: HurryScope | Literal["all"] = "all",
) -> int:
    """Sum the modifiers of enabled sources, optionally for one scope only."""
    enabled = set(enabled_ids)
    total = 0
    for source_id, modifiers in source_index.items():
        if source_id not in enabled:
            continue
        for modifier in modifiers:
            if scope == "all" or modifier.scope == scope:
                total += modifier.modifier
    return total


def _industry_policy(policy_id: str, name: str) -> HurryModifierSource:
    return HurryModifierSource(
        id=policy_id,
        name=name,
        modifier=-5,
        scope=HurryScope.EMPIRE,
        description="-5% gold cost for purchases/investments",
    )


# Each Industry policy gives -5%
INDUSTRY_POLICY_MODIFIERS: list[HurryModifierSource] = [
    _industry_policy("POLICY_COMMERCE", "Industry (Opener)"),
    _industry_policy("POLICY_CARAVANS", "Free Trade"),
    _industry_policy("POLICY_TRADE_UNIONS", "Division of Labor"),
    _industry_policy("POLICY_ENTREPRENEURSHIP", "Entrepreneurship"),
    _industry_policy("POLICY_MERCANTILISM", "Mercantilism"),
    _industry_policy("POLICY_PROTECTIONISM", "Protectionism"),
    _industry_policy("POLICY_COMMERCE_FINISHER", "Industry (Finisher)"),
]


def industry_policy_sources() -> dict[str, list[HurryModifierSource]]:
    """Get the Industry policy modifiers indexed by policy id."""
    return {policy.id: [policy] for policy in INDUSTRY_POLICY_MODIFIERS}
