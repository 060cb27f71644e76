"""
Mage Farm Helper - Aggregation
==============================
Combines combat and drop resolution across monsters:

- rank_candidates: suggested monsters sorted by experience per hit
- monster_detail: everything shown for a single selected monster
- aggregate_set: expected currency, shot cost and items for a weighted set

Active set rates are percentages divided by 100 on their own; they are never
renormalized against the set total, so a set summing to 200% doubles every
total. The UI warns about it, the engine does not enforce it.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Tuple

from .catalog import Catalog, require_catalog
from .constants import MAX_SUGGESTED_MONSTERS
from .damage import (
    UNREACHABLE_FOR_COST,
    CombatResult,
    calculate_damage,
    calculate_hits_to_kill,
    calculate_shot_cost,
    resolve,
)
from .drops import has_herb_drop, resolve_drops
from .formulas import (
    MonsterProfile,
    build_monster_profile,
    derive_target_stats,
    get_monster_strengths,
    get_monster_weaknesses,
)
from .models import ActiveSetEntry, AttackerConfig, MonsterStatBlock, ResolvedDrop, SkillRef

logger = logging.getLogger(__name__)


# =============================================================================
# RANKING
# =============================================================================

@dataclass(frozen=True)
class RankingFilter:
    """Which monsters are eligible as suggestions."""
    min_level: float = 1
    max_level: float = 80
    max_hits: float = 1
    herbs_only: bool = True


@dataclass(frozen=True)
class RankedMonster:
    """A suggested monster with its efficiency."""
    monster: MonsterStatBlock
    damage: float
    hits: float
    hp: float
    magic_defense: float
    exp: float
    exp_per_hit: float


def rank_candidates(
    catalog: Optional[Catalog],
    attacker: AttackerConfig,
    ranking_filter: RankingFilter = RankingFilter(),
    limit: int = MAX_SUGGESTED_MONSTERS,
) -> List[RankedMonster]:
    """
    Rank monsters by experience per hit.

    Steps:
        1. Keep monsters with min_level <= level <= max_level
        2. Hits = ceil(HP / Damage), infinite when unkillable
        3. Keep hits <= max_hits
        4. With herbs_only, keep monsters that can drop a herb (8600-8605)
        5. Sort by exp / hits descending (ties keep catalog order)
        6. Truncate to ``limit``

    Raises:
        CatalogNotLoadedError: catalog is None
    """
    catalog = require_catalog(catalog)

    results = []
    for monster in catalog.monsters:
        if monster.level < ranking_filter.min_level or monster.level > ranking_filter.max_level:
            continue

        target = derive_target_stats(monster)
        combat = resolve(attacker, target)
        if combat.hits_to_kill > ranking_filter.max_hits:
            continue

        if ranking_filter.herbs_only and not has_herb_drop(monster):
            continue

        results.append(RankedMonster(
            monster=monster,
            damage=combat.damage,
            hits=combat.hits_to_kill,
            hp=combat.hp,
            magic_defense=combat.magic_defense,
            exp=target.exp,
            exp_per_hit=target.exp / combat.hits_to_kill,
        ))

    # sorted() is stable, reverse=True included
    results = sorted(results, key=lambda r: r.exp_per_hit, reverse=True)
    return results[:limit]


# =============================================================================
# SINGLE MONSTER DETAIL
# =============================================================================

@dataclass(frozen=True)
class MonsterDetail:
    """Combat, drops and derived stats for one monster."""
    monster: MonsterStatBlock
    combat: CombatResult
    exp: float
    drops: List[ResolvedDrop]
    shot_cost_per_kill: float
    profile: MonsterProfile
    strengths: List[SkillRef]
    weaknesses: List[SkillRef]
    hp_rate: float


def monster_detail(
    catalog: Optional[Catalog],
    monster: MonsterStatBlock,
    attacker: AttackerConfig,
) -> MonsterDetail:
    """
    Everything the detail view shows for a selected monster.

    The per-kill shot cost uses the cost-side fallback: an unkillable
    monster costs nothing.
    """
    catalog = require_catalog(catalog)
    target = derive_target_stats(monster)
    combat = resolve(attacker, target)
    profile = build_monster_profile(monster)

    return MonsterDetail(
        monster=monster,
        combat=combat,
        exp=target.exp,
        drops=resolve_drops(monster, catalog.items_by_id),
        shot_cost_per_kill=calculate_shot_cost(combat.hits_to_kill, attacker),
        profile=profile,
        strengths=get_monster_strengths(monster),
        weaknesses=get_monster_weaknesses(monster),
        hp_rate=profile.hp_rate,
    )


# =============================================================================
# ACTIVE SET AGGREGATION
# =============================================================================

@dataclass(frozen=True)
class ItemYield:
    """Expected quantity of one item for the active set."""
    item_id: str
    name: str
    percent: float
    qty_per_kill: float
    qty_for_set: float


@dataclass(frozen=True)
class SessionSummary:
    """Session totals extrapolated from per-kill expectations."""
    currency_per_kill: float
    gross_currency_for_set: float
    shot_cost_per_kill: float
    shot_cost_for_set: float
    net_currency_per_kill: float
    net_currency_for_set: float
    items: List[ItemYield] = field(default_factory=list)
    total_rate: float = 0
    skipped_monster_ids: Tuple[str, ...] = ()


def aggregate_set(
    entries: Iterable[ActiveSetEntry],
    catalog: Optional[Catalog],
    attacker: AttackerConfig,
    session_size: float,
) -> SessionSummary:
    """
    Aggregate expected yield for a weighted set of monsters.

    For each entry (weight = rate / 100):
        shot_cost_per_kill += weight * hits * shot_price     (hits = 0 if unkillable)
        expected[item]     += weight * p_group * p_item * (min + max) / 2

    Currency per kill is expected[currency_id]. The item list excludes the
    currency, is sorted by expected quantity, and carries each item's share
    of the non-currency total.

    Entries referring to unknown monsters are skipped and reported in
    ``skipped_monster_ids``.

    Args:
        entries: Active set entries
        catalog: Loaded catalog
        attacker: Magic setup
        session_size: Number of kills in the session (floored at 0)

    Returns:
        SessionSummary

    Raises:
        CatalogNotLoadedError: catalog is None
    """
    catalog = require_catalog(catalog)
    currency_id = catalog.currency_id
    price = attacker.shot_price

    shot_cost_per_kill = 0.0
    expected_per_kill: Dict[str, float] = {}
    names: Dict[str, str] = {}
    total_rate = 0.0
    skipped = []

    for entry in entries:
        total_rate += entry.rate
        monster = catalog.get_monster(entry.monster_id)
        if monster is None:
            logger.debug(f"aggregate_set: skipping unknown monster id {entry.monster_id!r}")
            skipped.append(str(entry.monster_id))
            continue

        weight = entry.rate / 100
        target = derive_target_stats(monster)
        damage = calculate_damage(attacker.matk, attacker.skill_power, attacker.shot_multiplier,
                                  target.magic_defense)
        hits = calculate_hits_to_kill(target.hp, damage, unreachable=UNREACHABLE_FOR_COST)
        shot_cost_per_kill += weight * hits * price

        for drop in resolve_drops(monster, catalog.items_by_id):
            expected_per_kill[drop.item_id] = (
                expected_per_kill.get(drop.item_id, 0.0) + drop.expected_quantity * weight
            )
            names.setdefault(drop.item_id, drop.name)

    currency_per_kill = expected_per_kill.get(currency_id, 0.0)
    kills = max(0, session_size)

    others = [(item_id, qty) for item_id, qty in expected_per_kill.items() if item_id != currency_id]
    total_other = sum(qty for _, qty in others) or 1
    others.sort(key=lambda pair: pair[1], reverse=True)

    items = [
        ItemYield(
            item_id=item_id,
            name=names[item_id],
            percent=qty / total_other * 100,
            qty_per_kill=qty,
            qty_for_set=qty * kills,
        )
        for item_id, qty in others
    ]

    net_per_kill = currency_per_kill - shot_cost_per_kill
    return SessionSummary(
        currency_per_kill=currency_per_kill,
        gross_currency_for_set=currency_per_kill * kills,
        shot_cost_per_kill=shot_cost_per_kill,
        shot_cost_for_set=shot_cost_per_kill * kills,
        net_currency_per_kill=net_per_kill,
        net_currency_for_set=net_per_kill * kills,
        items=items,
        total_rate=total_rate,
        skipped_monster_ids=tuple(skipped),
    )


# =============================================================================
# ACTIVE SET EDITING
# =============================================================================

def total_active_rate(entries: Iterable[ActiveSetEntry]) -> float:
    return sum(e.rate for e in entries)


def add_to_active_set(
    entries: Iterable[ActiveSetEntry],
    monster: MonsterStatBlock,
) -> Tuple[ActiveSetEntry, ...]:
    """
    Add a monster to the set with the rate still unassigned (100 - total, min 0).

    Adding a monster that is already in the set changes nothing.
    """
    entries = tuple(entries)
    if any(e.monster_id == monster.id for e in entries):
        return entries
    remaining = max(0, 100 - total_active_rate(entries))
    return entries + (ActiveSetEntry(monster_id=monster.id, name=monster.name, rate=remaining),)


def update_active_rate(
    entries: Iterable[ActiveSetEntry],
    monster_id: str,
    rate: float,
) -> Tuple[ActiveSetEntry, ...]:
    """Set a monster's rate, clamped to [0, 100]."""
    rate = max(0, min(100, rate))
    return tuple(replace(e, rate=rate) if e.monster_id == monster_id else e for e in entries)


def remove_from_active_set(
    entries: Iterable[ActiveSetEntry],
    monster_id: str,
) -> Tuple[ActiveSetEntry, ...]:
    return tuple(e for e in entries if e.monster_id != monster_id)
