"""Game context models for purchase cost calculations."""

from dataclasses import dataclass, field
from enum import Enum


class GameSpeedType(Enum):
    """Game speed settings."""

    QUICK = "GAMESPEED_QUICK"
    STANDARD = "GAMESPEED_STANDARD"
    EPIC = "GAMESPEED_EPIC"
    MARATHON = "GAMESPEED_MARATHON"


class EraType(Enum):
    """Eras of the game."""

    ANCIENT = "ERA_ANCIENT"
    CLASSICAL = "ERA_CLASSICAL"
    MEDIEVAL = "ERA_MEDIEVAL"
    RENAISSANCE = "ERA_RENAISSANCE"
    INDUSTRIAL = "ERA_INDUSTRIAL"
    MODERN = "ERA_MODERN"
    ATOMIC = "ERA_ATOMIC"
    INFORMATION = "ERA_INFORMATION"


class HandicapType(Enum):
    """Difficulty levels."""

    SETTLER = "HANDICAP_SETTLER"
    CHIEFTAIN = "HANDICAP_CHIEFTAIN"
    WARLORD = "HANDICAP_WARLORD"
    PRINCE = "HANDICAP_PRINCE"
    KING = "HANDICAP_KING"
    EMPEROR = "HANDICAP_EMPEROR"
    IMMORTAL = "HANDICAP_IMMORTAL"
    DEITY = "HANDICAP_DEITY"


@dataclass(frozen=True)
class GameSpeedInfo:
    """Percent modifiers for a game speed (100 = Standard)."""

    speed_type: GameSpeedType
    growth_percent: int
    train_percent: int
    construct_percent: int
    create_percent: int
    research_percent: int
    gold_percent: int
    hurry_percent: int
    culture_percent: int
    faith_percent: int


@dataclass(frozen=True)
class EraInfo:
    """Percent modifiers for starting in an era."""

    id: int
    era_type: EraType
    name: str
    growth_percent: int = 100
    train_percent: int = 100
    construct_percent: int = 100
    research_percent: int = 100


@dataclass(frozen=True)
class HandicapInfo:
    """Difficulty level bonuses."""

    id: int
    handicap_type: HandicapType
    name: str
    ai_production_percent: int
    ai_research_percent: int
    ai_growth_percent: int
    player_research_percent: int
    player_happiness_default: int


@dataclass(frozen=True)
class GameConstants:
    """Tunable game constants (Vox Populi defaults)."""

    # Population growth
    base_city_growth_threshold: int = 15
    city_growth_multiplier: float = 12.0
    city_growth_exponent: float = 2.22

    # Production
    unit_production_percent: int = 100
    building_production_percent: int = 100

    # Gold purchase
    gold_purchase_visible_divisor: int = 10
    gold_purchase_multiplier: int = 250  # Percentage (2.5x)

    # Combat
    max_hit_points: int = 100
    combat_damage: int = 30


@dataclass(frozen=True)
class GoldPurchaseConstants:
    """Constants of the production-to-gold conversion."""

    gold_per_production: float = 30
    production_exponent: float = 0.68  # Lower = better scaling
    visible_divisor: int = 10  # Costs are floored to a multiple of this

    def __post_init__(self) -> None:
        """Reject constants the cost pipeline cannot work with."""
        if self.visible_divisor <= 0:
            raise ValueError(
                f"visible_divisor must be positive, got {self.visible_divisor}"
            )
        if not 0 < self.production_exponent < 1:
            raise ValueError(
                "production_exponent must be between 0 and 1, "
                f"got {self.production_exponent}"
            )


# Vox Populi
GOLD_PURCHASE_CONSTANTS_VP = GoldPurchaseConstants(
    gold_per_production=30, production_exponent=0.68, visible_divisor=10
)

# Community Patch
GOLD_PURCHASE_CONSTANTS_CP = GoldPurchaseConstants(
    gold_per_production=30, production_exponent=0.75, visible_divisor=10
)

GOLD_PURCHASE_PRESETS: dict[str, GoldPurchaseConstants] = {
    "vp": GOLD_PURCHASE_CONSTANTS_VP,
    "cp": GOLD_PURCHASE_CONSTANTS_CP,
}


def _uniform_speed(speed_type: GameSpeedType, percent: int) -> GameSpeedInfo:
    return GameSpeedInfo(
        speed_type=speed_type,
        growth_percent=percent,
        train_percent=percent,
        construct_percent=percent,
        create_percent=percent,
        research_percent=percent,
        gold_percent=percent,
        hurry_percent=percent,
        culture_percent=percent,
        faith_percent=percent,
    )


GAME_SPEED_DEFAULTS: dict[GameSpeedType, GameSpeedInfo] = {
    GameSpeedType.QUICK: _uniform_speed(GameSpeedType.QUICK, 67),
    GameSpeedType.STANDARD: _uniform_speed(GameSpeedType.STANDARD, 100),
    GameSpeedType.EPIC: _uniform_speed(GameSpeedType.EPIC, 150),
    GameSpeedType.MARATHON: _uniform_speed(GameSpeedType.MARATHON, 300),
}

ERA_DEFAULTS: dict[EraType, EraInfo] = {
    era_type: EraInfo(
        id=i,
        era_type=era_type,
        name=f"{era_type.value.removeprefix('ERA_').title()} Era",
    )
    for i, era_type in enumerate(EraType)
}

# (ai production, ai research, ai growth, player happiness)
_HANDICAP_BONUSES: dict[HandicapType, tuple[int, int, int, int]] = {
    HandicapType.SETTLER: (60, 60, 60, 15),
    HandicapType.CHIEFTAIN: (75, 75, 75, 12),
    HandicapType.WARLORD: (85, 85, 85, 12),
    HandicapType.PRINCE: (100, 100, 100, 9),
    HandicapType.KING: (115, 115, 115, 9),
    HandicapType.EMPEROR: (130, 130, 130, 9),
    HandicapType.IMMORTAL: (150, 150, 150, 9),
    HandicapType.DEITY: (170, 170, 170, 9),
}

HANDICAP_DEFAULTS: dict[HandicapType, HandicapInfo] = {
    handicap_type: HandicapInfo(
        id=i,
        handicap_type=handicap_type,
        name=handicap_type.value.removeprefix("HANDICAP_").title(),
        ai_production_percent=production,
        ai_research_percent=research,
        ai_growth_percent=growth,
        player_research_percent=100,
        player_happiness_default=happiness,
    )
    for i, (handicap_type, (production, research, growth, happiness)) in enumerate(
        _HANDICAP_BONUSES.items()
    )
}


@dataclass(frozen=True)
class GameContext:
    """Game settings that feed every formula. Built once per session."""

    game_speed: GameSpeedInfo = GAME_SPEED_DEFAULTS[GameSpeedType.STANDARD]
    start_era: EraInfo = ERA_DEFAULTS[EraType.ANCIENT]
    current_era: EraInfo = ERA_DEFAULTS[EraType.ANCIENT]
    handicap: HandicapInfo = HANDICAP_DEFAULTS[HandicapType.PRINCE]
    constants: GameConstants = field(default_factory=GameConstants)


def create_default_game_context() -> GameContext:
    """Standard speed, Ancient start, Prince difficulty."""
    return GameContext()
