"""
Gold purchase costs for units, buildings and projects.

Production cost is converted to gold with a power function, so expensive
items get a better gold per production ratio:

    cost = (production * gold_per_production) ^ production_exponent

The result then goes through a fixed sequence of percentage stages. Each
stage floors, so the order of the stages is part of the formula.
"""

import math
from dataclasses import dataclass

from gold_purchase.formulas.modifiers import apply_modifier, floor_to_divisor
from gold_purchase.models.game_context import (
    GOLD_PURCHASE_CONSTANTS_VP,
    GameContext,
    GoldPurchaseConstants,
)

# Returned when an entity cannot be bought with gold
CANNOT_PURCHASE = -1


def purchase_cost_from_production(
    production: float,
    context: GameContext,
    hurry_modifier: int = 0,
    constants: GoldPurchaseConstants = GOLD_PURCHASE_CONSTANTS_VP,
) -> int:
    """
    Convert a production cost to a base gold cost.

    Args:
        production: Production cost of the item
        context: Game context (for game speed)
        hurry_modifier: Stacked hurry modifier from policies/buildings, in percent
        constants: Conversion constants

    Returns:
        Gold cost before unit/building specific modifiers
    """
    if production <= 0:
        return 0

    purchase_cost_base = production * constants.gold_per_production
    cost = math.floor(purchase_cost_base**constants.production_exponent)

    # Hurry modifier (policies, buildings)
    if hurry_modifier != 0:
        cost = apply_modifier(cost, max(-100, hurry_modifier))

    # Game speed
    cost = math.floor(cost * context.game_speed.hurry_percent / 100)

    return max(0, cost)


def _finalize(cost: int, constants: GoldPurchaseConstants) -> int:
    cost = floor_to_divisor(cost, constants.visible_divisor)
    return max(constants.visible_divisor, cost)


@dataclass(frozen=True)
class UnitPurchaseOptions:
    """Modifiers and settings for a unit purchase."""

    hurry_cost_modifier: int = 0  # Unit's own modifier, -1 = cannot purchase
    player_unit_purchase_modifier: int = 0  # From policies/traits
    hurry_modifier: int = 0  # Stacked player/city-wide discounts
    tech_progress: int = 0  # 0-100
    enable_adjustments: bool = True  # Tech progress scaling and 20% discount
    constants: GoldPurchaseConstants = GOLD_PURCHASE_CONSTANTS_VP


def unit_purchase_cost(
    production: float,
    context: GameContext,
    options: UnitPurchaseOptions | None = None,
) -> int:
    """
    Gold cost of purchasing a unit, or -1 if it cannot be purchased.

    Stages:
    1. Base cost from production (with the stacked hurry modifier)
    2. Unit's own hurry cost modifier
    3. Player-wide unit purchase modifier
    4. Half the tech progress as a cost increase
    5. 20% discount
    6. Floor to the visible divisor, with the divisor as minimum

    Stages 4 and 5 only apply when adjustments are enabled. Units have no
    base -20% modifier; that one is building specific.
    """
    if options is None:
        options = UnitPurchaseOptions()
    constants = options.constants

    if options.hurry_cost_modifier == CANNOT_PURCHASE:
        return CANNOT_PURCHASE

    cost = purchase_cost_from_production(
        production, context, options.hurry_modifier, constants
    )

    if options.hurry_cost_modifier != 0:
        cost = apply_modifier(cost, max(-100, options.hurry_cost_modifier))

    if options.player_unit_purchase_modifier != 0:
        cost = apply_modifier(cost, max(-100, options.player_unit_purchase_modifier))

    if options.enable_adjustments:
        if options.tech_progress > 0:
            cost = apply_modifier(cost, options.tech_progress // 2)
        cost = cost * 8 // 10

    return _finalize(cost, constants)


@dataclass(frozen=True)
class BuildingPurchaseOptions:
    """Modifiers and settings for a building purchase or investment."""

    building_hurry_cost_modifier: int = -20  # -20 buildings, -5 wonders, -1 = cannot
    player_building_purchase_modifier: int = 0  # From policies
    hurry_modifier: int = 0  # Stacked local + empire discounts
    tech_progress: int = 0  # 0-100
    enable_tech_scaling: bool = True
    is_investment: bool = True  # Investment costs 60% of a full purchase
    constants: GoldPurchaseConstants = GOLD_PURCHASE_CONSTANTS_VP


def building_purchase_cost(
    production: float,
    context: GameContext,
    options: BuildingPurchaseOptions | None = None,
) -> int:
    """
    Gold cost of purchasing or investing in a building, or -1 if not allowed.

    A building sees two hurry modifiers, applied in separate stages:
    1. The stacked player/city-wide modifier goes into the base cost, so it is
       scaled by game speed along with it.
    2. The building's own modifier (-20% buildings, -5% wonders) is applied
       to the result afterwards.
    Then the player building purchase modifier, a third of the tech progress
    as a cost increase, the 40% investment discount and the visible divisor.
    """
    if options is None:
        options = BuildingPurchaseOptions()
    constants = options.constants

    if options.building_hurry_cost_modifier == CANNOT_PURCHASE:
        return CANNOT_PURCHASE

    cost = purchase_cost_from_production(
        production, context, options.hurry_modifier, constants
    )

    if options.building_hurry_cost_modifier != 0:
        cost = apply_modifier(cost, options.building_hurry_cost_modifier)

    if options.player_building_purchase_modifier != 0:
        cost = apply_modifier(cost, options.player_building_purchase_modifier)

    if options.enable_tech_scaling and options.tech_progress > 0:
        cost = apply_modifier(cost, options.tech_progress // 3)

    if options.is_investment:
        cost = cost * 6 // 10

    return _finalize(cost, constants)


def project_purchase_cost(
    production: float,
    context: GameContext,
    hurry_modifier: int = 0,
    constants: GoldPurchaseConstants = GOLD_PURCHASE_CONSTANTS_VP,
) -> int:
    """Gold cost of purchasing a project. Projects only get the base conversion."""
    cost = purchase_cost_from_production(production, context, hurry_modifier, constants)
    return _finalize(cost, constants)


def gold_to_production_ratio(
    production: float,
    context: GameContext,
    constants: GoldPurchaseConstants = GOLD_PURCHASE_CONSTANTS_VP,
) -> float:
    """Gold paid per point of production, before any item modifiers."""
    if production <= 0:
        return 0.0

    gold_cost = purchase_cost_from_production(production, context, 0, constants)
    return gold_cost / production


def break_even_production_cost(
    target_ratio: float,
    context: GameContext,
    constants: GoldPurchaseConstants = GOLD_PURCHASE_CONSTANTS_VP,
    max_production: int = 10000,
) -> int:
    """
    Smallest production cost whose gold per production ratio is at or below
    ``target_ratio``.

    Binary search over [1, max_production] finds a boundary where the ratio
    crosses the target. Flooring the base cost makes the ratio slightly
    non-monotonic (ratio(271) <= 1.68 < ratio(272) with VP constants), so the
    productions below the boundary are then checked for an earlier one.
    Returns ``max_production`` if even that is above the target.
    """
    low = 1
    if gold_to_production_ratio(low, context, constants) <= target_ratio:
        return low

    high = max_production
    if gold_to_production_ratio(high, context, constants) > target_ratio:
        return high

    # ratio(low) > target >= ratio(high)
    while high - low > 1:
        mid = (low + high) // 2
        if gold_to_production_ratio(mid, context, constants) > target_ratio:
            low = mid
        else:
            high = mid

    for production in range(2, high):
        if gold_to_production_ratio(production, context, constants) <= target_ratio:
            return production

    return high
