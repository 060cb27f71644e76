"""
Mage Farm Helper - Combat Resolution
====================================
Magic damage per hit, hits-to-kill and shot cost for one attacker setup
against one target.

No RNG is modelled: no critical hits, misses or resists.
"""

import math
from dataclasses import dataclass

from .constants import MAGIC_DAMAGE_FACTOR
from .formulas import TargetStats
from .models import AttackerConfig


# Hits-to-kill fallbacks when the target cannot be killed (no damage or no HP).
# Ranking treats such a target as worst case; cost accumulation as no cost.
UNREACHABLE_FOR_RANKING = math.inf
UNREACHABLE_FOR_COST = 0


# =============================================================================
# RESULT DATACLASS
# =============================================================================

@dataclass(frozen=True)
class CombatResult:
    """Damage and hits-to-kill against a single target."""
    damage: float
    hits_to_kill: float
    hp: float
    magic_defense: float

    @property
    def killable(self) -> bool:
        return self.damage > 0 and self.hp > 0

    def breakdown(self) -> str:
        """Return formatted breakdown of the combat calculation."""
        return f"""
Combat Breakdown
================
Target HP:          {self.hp:,.0f}
Magic Defense:      {self.magic_defense:,.0f}
Damage per hit:     {self.damage:,.1f}
----------------------------
= Hits to kill:     {self.hits_to_kill}
"""


# =============================================================================
# DAMAGE
# =============================================================================

def calculate_damage(
    matk: float,
    skill_power: float,
    shot_multiplier: float,
    magic_defense: float,
) -> float:
    """
    Magic damage of one hit.

    Formula:
        Damage = 91 * sqrt(max(0, M.Atk) * Shot) * max(0, Power) / max(1, M.Def)

    Negative M.Atk / Power are treated as 0; M.Def is floored at 1.

    Args:
        matk: Attacker magic attack
        skill_power: Power of the skill being cast
        shot_multiplier: 1 (none), 2 (spiritshot) or 4 (blessed spiritshot)
        magic_defense: Target magic defense

    Returns:
        Damage per hit
    """
    return (
        MAGIC_DAMAGE_FACTOR
        * math.sqrt(max(0.0, matk) * shot_multiplier)
        * max(0.0, skill_power)
        / max(1.0, magic_defense)
    )


def calculate_hits_to_kill(hp: float, damage: float, unreachable: float = UNREACHABLE_FOR_RANKING) -> float:
    """
    Hits needed to kill a target.

    Formula:
        Hits = ceil(HP / Damage)     when Damage > 0 and HP > 0

    Args:
        hp: Target HP
        damage: Damage per hit
        unreachable: Value returned when the target cannot be killed
            (UNREACHABLE_FOR_RANKING or UNREACHABLE_FOR_COST)

    Returns:
        Positive integer hit count, or the unreachable value
    """
    if damage > 0 and hp > 0:
        return math.ceil(hp / damage)
    return unreachable


def resolve(attacker: AttackerConfig, target: TargetStats) -> CombatResult:
    """Damage and hits-to-kill (infinite when unkillable) against a target."""
    damage = calculate_damage(
        attacker.matk,
        attacker.skill_power,
        attacker.shot_multiplier,
        target.magic_defense,
    )
    return CombatResult(
        damage=damage,
        hits_to_kill=calculate_hits_to_kill(target.hp, damage),
        hp=target.hp,
        magic_defense=target.magic_defense,
    )


# =============================================================================
# SHOT COST
# =============================================================================

def calculate_shot_cost(hits: float, attacker: AttackerConfig) -> float:
    """
    Currency spent on shots for one kill.

    One shot is consumed per hit. Unkillable targets (infinite hits) cost
    nothing, matching the cost-side fallback.
    """
    price = attacker.shot_price
    if price == 0 or not math.isfinite(hits):
        return 0.0
    return hits * price
