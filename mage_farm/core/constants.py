"""
Mage Farm Helper - Core Constants
=================================
Single source of truth for all game constants, enums, and reference data.

Stat tables and skill id lists are taken from the server-side NPC stat
formulas (NpcStat / BaseStats).
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class ShotMode(Enum):
    """
    Consumable shot category used when casting.

    Each mode multiplies the magic attack fed into the damage formula and
    costs one shot per hit.
    """
    NONE = "none"
    STANDARD = "ss"      # Spiritshot
    BLESSED = "bss"      # Blessed Spiritshot

    @property
    def multiplier(self) -> int:
        return SHOT_MULTIPLIERS[self]

    @property
    def label(self) -> str:
        return SHOT_LABELS[self]


SHOT_MULTIPLIERS: Dict[ShotMode, int] = {
    ShotMode.NONE: 1,
    ShotMode.STANDARD: 2,
    ShotMode.BLESSED: 4,
}

SHOT_LABELS: Dict[ShotMode, str] = {
    ShotMode.NONE: "None",
    ShotMode.STANDARD: "Spiritshots",
    ShotMode.BLESSED: "Blessed spiritshots",
}


def shot_mode_from_string(value: str) -> ShotMode:
    """Parse a shot mode from its value or name. Defaults to NONE."""
    if isinstance(value, ShotMode):
        return value
    text = str(value or "").strip().lower()
    for mode in ShotMode:
        if text in (mode.value, mode.name.lower()):
            return mode
    return ShotMode.NONE


# =============================================================================
# STAT BONUS TABLES
# =============================================================================

MAX_STAT_VALUE = 100

# (base, shift) pairs: bonus[i] = base ** (i - shift), rounded to 2 decimals
STR_COMPUTE: Tuple[float, float] = (1.036, 34.845)
INT_COMPUTE: Tuple[float, float] = (1.02, 31.375)
DEX_COMPUTE: Tuple[float, float] = (1.009, 19.36)
WIT_COMPUTE: Tuple[float, float] = (1.05, 20.0)
CON_COMPUTE: Tuple[float, float] = (1.03, 27.632)
MEN_COMPUTE: Tuple[float, float] = (1.01, -0.06)

# levelMod = (100 - 11 + level) / 100
LEVEL_MOD_OFFSET = 89

MATK_SPEED_FACTOR = 333
CRITICAL_FACTOR = 10
EVASION_ACCURACY_FACTOR = 6.0


# =============================================================================
# REGENERATION
# =============================================================================

HP_REGENERATE_PERIOD = 3000  # ms
DOOR_REGENERATE_FACTOR = 100


# =============================================================================
# COMBAT
# =============================================================================

# Magic damage = MAGIC_DAMAGE_FACTOR * sqrt(matk * shot) * power / mdef
MAGIC_DAMAGE_FACTOR = 91.0


# =============================================================================
# SKILL CLASSIFICATION
# =============================================================================

HP_RATE_SKILL_IDS: FrozenSet[int] = frozenset({
    4303, 4304, 4305, 4306, 4307, 4308, 4309, 4310, 4311, 4408,
})

STRENGTH_SKILL_IDS: FrozenSet[int] = frozenset({
    4009, 4010, 4011, 4012, 4071, 4084, 4116, 4225, 4273, 4277, 4284, 4285, 4287,
    4333, 4337, 4379, 4388, 4389, 4424, 4425, 4426, 4427, 4428, 4429, 4430, 4431,
    4432, 4433, 4434, 4435, 4436, 4437, 4438, 4439, 4440, 4441, 4442, 4443, 4444,
    4445, 4446, 4447, 4448, 4449, 5479, 5598, 5599, 5601, 5663,
})

WEAKNESS_SKILL_IDS: FrozenSet[int] = frozenset({
    4274, 4275, 4276, 4279, 4280, 4281, 4282, 4336, 4450, 4451, 4452, 4453, 4454,
    4455, 4456, 4457, 4458, 4459, 4460, 4461, 4462, 4602, 4603, 4604, 5620, 5664,
    5918,
})

# HP regeneration multiplier by skill id (level independent)
HP_RATE_BY_SKILL: Dict[int, float] = {
    4311: 0.5,
    4303: 2,
    4304: 3,
    4305: 4,
    4306: 5,
    4307: 6,
    4308: 6,
    4309: 8,
    4310: 9,
}

# Skill 4408 scales with its level
HP_RATE_LEVELED_SKILL = 4408
HP_RATE_BY_LEVEL: Dict[int, float] = {
    8: 0.25,
    9: 0.5,
    10: 2,
    11: 3,
    12: 4,
    13: 5,
    14: 6,
    15: 7,
    16: 8,
    17: 9,
    18: 10,
    19: 11,
    20: 12,
}

HP_RATE_UNKNOWN = -1


# =============================================================================
# DROPS & ECONOMY
# =============================================================================

# Currency item: first item named CURRENCY_NAME, else CURRENCY_ITEM_ID
CURRENCY_ITEM_ID = "57"
CURRENCY_NAME = "Adena"

# Herb drops (used as the "with herbs" filter)
HERB_ITEM_ID_MIN = 8600
HERB_ITEM_ID_MAX = 8605

DEFAULT_DROP_QUANTITY = 1


# =============================================================================
# RANKING
# =============================================================================

MAX_SUGGESTED_MONSTERS = 32
SEARCH_RESULT_LIMIT = 50
