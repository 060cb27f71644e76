"""
Mage Farm Helper - Stat Formulas
================================
NPC stat formulas: attribute bonus tables, level modifier, and the derived
combat stats (attack, defense, speed, evasion, accuracy, experience).

Bonus values are looked up from precomputed tables by integer attribute
value, never computed per call, so results match the server's numeric tables.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .constants import (
    CON_COMPUTE,
    CRITICAL_FACTOR,
    DEX_COMPUTE,
    DOOR_REGENERATE_FACTOR,
    EVASION_ACCURACY_FACTOR,
    HP_RATE_BY_LEVEL,
    HP_RATE_BY_SKILL,
    HP_RATE_LEVELED_SKILL,
    HP_RATE_SKILL_IDS,
    HP_RATE_UNKNOWN,
    HP_REGENERATE_PERIOD,
    INT_COMPUTE,
    LEVEL_MOD_OFFSET,
    MATK_SPEED_FACTOR,
    MAX_STAT_VALUE,
    MEN_COMPUTE,
    STR_COMPUTE,
    STRENGTH_SKILL_IDS,
    WEAKNESS_SKILL_IDS,
    WIT_COMPUTE,
)
from .models import MonsterStatBlock, SkillRef, to_number


# =============================================================================
# BONUS TABLES
# =============================================================================

def build_bonus_table(compute: Tuple[float, float]) -> List[float]:
    """
    Precompute the bonus multiplier for every attribute value.

    Formula:
        bonus[i] = floor(base^(i - shift) * 100 + 0.5) / 100   for i in [0, 100)

    Args:
        compute: (base, shift) pair for the attribute

    Returns:
        List of MAX_STAT_VALUE bonus multipliers, rounded half-up to 2 decimals
    """
    base, shift = compute
    return [math.floor(base ** (i - shift) * 100 + 0.5) / 100 for i in range(MAX_STAT_VALUE)]


def build_evasion_accuracy_table() -> List[float]:
    """sqrt(i) * 6 for every attribute value."""
    return [math.sqrt(i) * EVASION_ACCURACY_FACTOR for i in range(MAX_STAT_VALUE)]


STR_BONUS = build_bonus_table(STR_COMPUTE)
INT_BONUS = build_bonus_table(INT_COMPUTE)
DEX_BONUS = build_bonus_table(DEX_COMPUTE)
WIT_BONUS = build_bonus_table(WIT_COMPUTE)
CON_BONUS = build_bonus_table(CON_COMPUTE)
MEN_BONUS = build_bonus_table(MEN_COMPUTE)

BASE_EVASION_ACCURACY = build_evasion_accuracy_table()

SQRT_MEN_BONUS = [math.sqrt(v) for v in MEN_BONUS]
SQRT_CON_BONUS = [math.sqrt(v) for v in CON_BONUS]


def lookup_bonus(table: Sequence[float], value) -> float:
    """
    Look up a table entry by attribute value.

    Out-of-range or non-integer values fall back to index 0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return table[0]
    if value != int(value):
        return table[0]
    index = int(value)
    if 0 <= index < len(table):
        return table[index]
    return table[0]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


# =============================================================================
# LEVEL MODIFIER & REGENERATION
# =============================================================================

def get_level_mod(level: float) -> float:
    """
    Level modifier applied to most NPC stats.

    Formula:
        levelMod = (89 + level) / 100
    """
    return (LEVEL_MOD_OFFSET + to_number(level)) / 100.0


def get_regenerate_period(is_door: bool = False) -> int:
    """HP regeneration period in ms. Doors regenerate 100x slower."""
    return HP_REGENERATE_PERIOD * DOOR_REGENERATE_FACTOR if is_door else HP_REGENERATE_PERIOD


def calc_hp_regen(con: int, level_mod: float) -> float:
    """HP regenerated per period: levelMod * CON bonus, at least 1."""
    regen = level_mod * lookup_bonus(CON_BONUS, con)
    return max(regen, 1.0)


def calc_mp_regen(init: float, men: int, level_mod: float) -> float:
    """MP regenerated per period: init * levelMod * MEN bonus, at least 1."""
    regen = init * level_mod * lookup_bonus(MEN_BONUS, men)
    return max(regen, 1.0)


# =============================================================================
# BASE FORMULAS
# =============================================================================

def calc_patk_base(str_: int, level_mod: float) -> float:
    return lookup_bonus(STR_BONUS, str_) * level_mod


def calc_pdef_base(level_mod: float) -> float:
    return level_mod


def calc_mdef_base(men: int, level_mod: float) -> float:
    return lookup_bonus(MEN_BONUS, men) * level_mod


def calc_matk_base(int_: int, level_mod: float) -> float:
    """(levelMod^2) * (INT bonus^2)"""
    int_bonus = lookup_bonus(INT_BONUS, int_)
    return (level_mod * level_mod) * (int_bonus * int_bonus)


def calc_patk_speed_base(dex: int) -> float:
    return lookup_bonus(DEX_BONUS, dex)


def calc_matk_speed_base(wit: int) -> float:
    return lookup_bonus(WIT_BONUS, wit)


def calc_patk_critical_base(dex: int) -> float:
    return lookup_bonus(DEX_BONUS, dex) * CRITICAL_FACTOR


def calc_move_speed_base(dex: int) -> float:
    return lookup_bonus(DEX_BONUS, dex)


def calc_evasion_base(dex: int, level: float) -> float:
    return lookup_bonus(BASE_EVASION_ACCURACY, dex) + level


def calc_hp_max_base(con: int) -> float:
    return lookup_bonus(CON_BONUS, con)


def calc_mp_max_base(men: int) -> float:
    return lookup_bonus(MEN_BONUS, men)


# =============================================================================
# MONSTER FORMULAS
# =============================================================================

def calc_patk(monster: MonsterStatBlock) -> int:
    """Physical attack = STR bonus * levelMod * base physical attack."""
    level_mod = get_level_mod(monster.level) * monster.base_physical_attack
    return round_half_up(calc_patk_base(monster.str_, level_mod))


def calc_pdef(monster: MonsterStatBlock) -> int:
    """Physical defense = levelMod * base defend."""
    level_mod = get_level_mod(monster.level) * monster.base_defend
    return round_half_up(calc_pdef_base(level_mod))


def calc_mdef(monster: MonsterStatBlock) -> int:
    """Magic defense = MEN bonus * levelMod * base magic defend."""
    level_mod = get_level_mod(monster.level)
    return round_half_up(calc_mdef_base(monster.men, level_mod) * monster.base_magic_defend)


def calc_matk(monster: MonsterStatBlock) -> int:
    """Magic attack = levelMod^2 * INT bonus^2 * base magic attack."""
    level_mod = get_level_mod(monster.level)
    return round_half_up(calc_matk_base(monster.int_, level_mod) * monster.base_magic_attack)


def calc_patk_speed(monster: MonsterStatBlock) -> int:
    return round_half_up(calc_patk_speed_base(monster.dex) * monster.base_attack_speed)


def calc_matk_speed(monster: MonsterStatBlock) -> int:
    return round_half_up(calc_matk_speed_base(monster.wit) * MATK_SPEED_FACTOR)


def calc_patk_critical(monster: MonsterStatBlock) -> int:
    return round_half_up(calc_patk_critical_base(monster.dex) * monster.base_critical)


def calc_evasion(monster: MonsterStatBlock) -> int:
    """
    Evasion = sqrt(dex) * 6 + levelMod.

    Note: the additive term is the level modifier, not the raw level
    (unlike calc_accuracy). Kept as the server computes it.
    """
    level_mod = get_level_mod(monster.level)
    return round_half_up(calc_evasion_base(monster.dex, level_mod))


def calc_accuracy(monster: MonsterStatBlock) -> int:
    """Accuracy = sqrt(dex) * 6 + level + physical hit modifier."""
    return round_half_up(
        math.sqrt(max(0, monster.dex)) * EVASION_ACCURACY_FACTOR
        + monster.level
        + monster.physical_hit_modify
    )


def _ground_speed(descriptor: str) -> float:
    """First ';'-delimited token of a ground speed descriptor ("80;0" -> 80.0)."""
    return to_number((descriptor or "").split(";")[0].strip())


def calc_walk_speed(monster: MonsterStatBlock) -> int:
    return round_half_up(calc_move_speed_base(monster.dex) * _ground_speed(monster.ground_low))


def calc_run_speed(monster: MonsterStatBlock) -> int:
    return round_half_up(calc_move_speed_base(monster.dex) * _ground_speed(monster.ground_high))


def get_monster_exp(monster: MonsterStatBlock) -> int:
    """Experience yield = acquireExpRate * level^2."""
    return round_half_up(monster.acquire_exp_rate * monster.level * monster.level)


# =============================================================================
# SKILL CLASSIFICATION
# =============================================================================

def get_monster_hp_rate_value(skill: SkillRef) -> float:
    """
    HP regeneration multiplier granted by an HP-rate skill.

    Returns:
        The multiplier, or HP_RATE_UNKNOWN (-1) for unmapped (skill, level) pairs
    """
    if skill.skill_id == HP_RATE_LEVELED_SKILL:
        return HP_RATE_BY_LEVEL.get(skill.level, HP_RATE_UNKNOWN)
    return HP_RATE_BY_SKILL.get(skill.skill_id, HP_RATE_UNKNOWN)


def get_monster_hp_rate(monster: MonsterStatBlock) -> Optional[SkillRef]:
    """The monster's HP-rate skill. Later entries override earlier ones."""
    found = None
    for skill in monster.skills:
        if skill.skill_id in HP_RATE_SKILL_IDS:
            found = skill
    return found


def get_monster_strengths(monster: MonsterStatBlock) -> List[SkillRef]:
    return [s for s in monster.skills if s.skill_id in STRENGTH_SKILL_IDS]


def get_monster_weaknesses(monster: MonsterStatBlock) -> List[SkillRef]:
    return [s for s in monster.skills if s.skill_id in WEAKNESS_SKILL_IDS]


# =============================================================================
# DERIVED STATS
# =============================================================================

@dataclass(frozen=True)
class TargetStats:
    """What the combat resolver needs to know about a target."""
    hp: float
    magic_defense: float
    exp: float


def derive_target_stats(monster: MonsterStatBlock) -> TargetStats:
    """
    Combat-relevant stats of a monster.

    Catalog values win; magic defense and experience fall back to the stat
    formulas when the catalog does not ship them.
    """
    magic_defense = monster.magic_defense
    if magic_defense is None:
        magic_defense = calc_mdef(monster)
    exp = monster.exp
    if exp is None:
        exp = get_monster_exp(monster)
    return TargetStats(hp=monster.hp, magic_defense=magic_defense, exp=exp)


@dataclass(frozen=True)
class MonsterProfile:
    """All formula-derived stats of a monster, for display."""
    physical_attack: int
    physical_defense: int
    magic_attack: int
    magic_defense: int
    attack_speed: int
    cast_speed: int
    critical: int
    evasion: int
    accuracy: int
    walk_speed: int
    run_speed: int
    exp: int
    hp_regen: float
    hp_rate: float
    # CON / MEN bonus multipliers applied to max HP and MP
    hp_max_bonus: float
    mp_max_bonus: float


def build_monster_profile(monster: MonsterStatBlock) -> MonsterProfile:
    hp_rate_skill = get_monster_hp_rate(monster)
    return MonsterProfile(
        physical_attack=calc_patk(monster),
        physical_defense=calc_pdef(monster),
        magic_attack=calc_matk(monster),
        magic_defense=calc_mdef(monster),
        attack_speed=calc_patk_speed(monster),
        cast_speed=calc_matk_speed(monster),
        critical=calc_patk_critical(monster),
        evasion=calc_evasion(monster),
        accuracy=calc_accuracy(monster),
        walk_speed=calc_walk_speed(monster),
        run_speed=calc_run_speed(monster),
        exp=get_monster_exp(monster),
        hp_regen=calc_hp_regen(monster.con, get_level_mod(monster.level)),
        hp_rate=get_monster_hp_rate_value(hp_rate_skill) if hp_rate_skill else HP_RATE_UNKNOWN,
        hp_max_bonus=calc_hp_max_base(monster.con),
        mp_max_bonus=calc_mp_max_base(monster.men),
    )
