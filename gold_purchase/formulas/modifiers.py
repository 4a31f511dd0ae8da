"""
Integer percentage arithmetic shared by the purchase cost formulas.

Every helper floors its result, so ``apply_modifier(v, m)`` is the integer
``v *= (100 + m); v /= 100`` pattern. Floor rounds towards negative infinity,
which only differs from truncation for negative operands.
"""

import math
from collections.abc import Iterable


def apply_modifier(value: float, modifier: float) -> int:
    """Apply a percentage modifier: ``floor(value * (100 + modifier) / 100)``."""
    return math.floor(value * (100 + modifier) / 100)


def apply_percent(value: float, percent: float) -> int:
    """Apply a direct percentage: ``floor(value * percent / 100)``."""
    return math.floor(value * percent / 100)


def apply_percent_with_min(value: float, percent: float, minimum: int = 1) -> int:
    """Apply a percentage and keep the result at or above ``minimum``."""
    return max(minimum, apply_percent(value, percent))


def apply_modifier_chain(value: float, modifiers: Iterable[float]) -> float:
    """
    Apply several modifiers one after another, in the given order.

    Each stage floors, so the order matters:

        >>> apply_modifier_chain(1652, [-20, -20])
        1056
        >>> apply_modifier(1652, -40)
        991
    """
    result = value
    for modifier in modifiers:
        result = apply_modifier(result, modifier)
    return result


def _check_divisor(divisor: float) -> None:
    if divisor == 0:
        raise ValueError("divisor must be non-zero")


def floor_to_divisor(value: float, divisor: float) -> int:
    """Floor to a multiple of ``divisor``, e.g. 129 -> 120."""
    _check_divisor(divisor)
    return math.floor(value / divisor) * divisor


def round_to_visible_divisor(value: float, divisor: float) -> int:
    """Round to the nearest multiple of ``divisor``, e.g. 127 -> 130. Halves round up."""
    _check_divisor(divisor)
    return math.floor(value / divisor + 0.5) * divisor


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value to [minimum, maximum]."""
    return min(maximum, max(minimum, value))
