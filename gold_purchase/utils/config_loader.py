"""Session configuration loader."""

import dataclasses
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from gold_purchase.models.game_context import (
    ERA_DEFAULTS,
    GAME_SPEED_DEFAULTS,
    GOLD_PURCHASE_CONSTANTS_VP,
    GOLD_PURCHASE_PRESETS,
    HANDICAP_DEFAULTS,
    EraType,
    GameConstants,
    GameContext,
    GameSpeedType,
    GoldPurchaseConstants,
    HandicapType,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _parse_enum(enum_type: type[E], value: Any, prefix: str) -> E:
    """Accept "GAMESPEED_EPIC", "epic" or "EPIC"."""
    if not isinstance(value, str):
        raise ValueError(f"{enum_type.__name__} must be a name, got {value!r}")
    name = value.upper()
    if not name.startswith(prefix):
        name = prefix + name
    try:
        return enum_type(name)
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise ValueError(f"Unknown {enum_type.__name__} '{value}' ({choices})") from None


def _override_fields(defaults: Any, overrides: dict[str, Any]) -> Any:
    if not isinstance(overrides, dict):
        raise ValueError(
            f"{type(defaults).__name__} overrides must be an object, got {overrides!r}"
        )
    known = {f.name for f in dataclasses.fields(defaults)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(
            f"Unknown {type(defaults).__name__} fields: {', '.join(sorted(unknown))}"
        )
    return dataclasses.replace(defaults, **overrides)


def parse_game_context(config: dict[str, Any]) -> GameContext:
    """Build a game context from preset names and constant overrides."""
    speed = _parse_enum(
        GameSpeedType, config.get("game_speed", "standard"), "GAMESPEED_"
    )
    start_era = _parse_enum(EraType, config.get("start_era", "ancient"), "ERA_")
    # Current era defaults to the start era
    current_era = _parse_enum(
        EraType, config.get("current_era", start_era.value), "ERA_"
    )
    handicap = _parse_enum(HandicapType, config.get("handicap", "prince"), "HANDICAP_")

    return GameContext(
        game_speed=GAME_SPEED_DEFAULTS[speed],
        start_era=ERA_DEFAULTS[start_era],
        current_era=ERA_DEFAULTS[current_era],
        handicap=HANDICAP_DEFAULTS[handicap],
        constants=_override_fields(GameConstants(), config.get("constants", {})),
    )


def _gold_purchase_preset(name: Any) -> GoldPurchaseConstants:
    if not isinstance(name, str):
        raise ValueError(f"Gold purchase preset must be a name, got {name!r}")
    try:
        return GOLD_PURCHASE_PRESETS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown gold purchase preset '{name}' "
            f"({', '.join(GOLD_PURCHASE_PRESETS)})"
        ) from None


def parse_gold_purchase_constants(value: str | dict[str, Any]) -> GoldPurchaseConstants:
    """Resolve a preset name ("vp", "cp") or an object of constant overrides."""
    if not isinstance(value, dict):
        return _gold_purchase_preset(value)

    base = _gold_purchase_preset(value.get("preset", "vp"))
    overrides = {k: v for k, v in value.items() if k != "preset"}
    return _override_fields(base, overrides)


def load_config(
    config_path: Path | None = None,
) -> tuple[GameContext, GoldPurchaseConstants]:
    """
    Load the session configuration.

    Returns tuple of (game_context, gold_purchase_constants). Without a path,
    returns the defaults (Standard speed, Prince, Vox Populi constants).
    """
    if config_path is None:
        return GameContext(), GOLD_PURCHASE_CONSTANTS_VP

    with open(config_path) as f:
        config = json.load(f)

    if not isinstance(config, dict):
        raise ValueError(f"Config {config_path} must contain a JSON object")

    context = parse_game_context(config)
    constants = parse_gold_purchase_constants(config.get("gold_purchase", "vp"))

    logger.debug(
        "Loaded config from %s: %s, %s",
        config_path,
        context.game_speed.speed_type.value,
        constants,
    )
    return context, constants
