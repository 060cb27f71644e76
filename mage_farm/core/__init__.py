"""
Mage Farm Helper - Core Math Module
===================================
Single source of truth for stat formulas, combat resolution, drop resolution
and set aggregation.

All other modules should import from here rather than implementing their own formulas.
"""

from .constants import (
    # Enums
    ShotMode,
    shot_mode_from_string,
    # Economy
    CURRENCY_ITEM_ID,
    CURRENCY_NAME,
    HERB_ITEM_ID_MIN,
    HERB_ITEM_ID_MAX,
    # Ranking
    MAX_SUGGESTED_MONSTERS,
    SEARCH_RESULT_LIMIT,
)

from .errors import (
    MageFarmError,
    CatalogNotLoadedError,
    CatalogLoadError,
)

from .models import (
    MonsterStatBlock,
    SkillRef,
    LocationRef,
    DropGroup,
    DropEntry,
    ItemRecord,
    AttackerConfig,
    ActiveSetEntry,
    ResolvedDrop,
    to_number,
    as_list,
    records_as_list,
)

from .formulas import (
    # Tables
    STR_BONUS,
    INT_BONUS,
    DEX_BONUS,
    WIT_BONUS,
    CON_BONUS,
    MEN_BONUS,
    build_bonus_table,
    lookup_bonus,
    get_level_mod,
    # Monster formulas
    calc_patk,
    calc_pdef,
    calc_mdef,
    calc_matk,
    calc_patk_speed,
    calc_matk_speed,
    calc_patk_critical,
    calc_evasion,
    calc_accuracy,
    calc_walk_speed,
    calc_run_speed,
    get_monster_exp,
    # Skills
    get_monster_hp_rate,
    get_monster_hp_rate_value,
    get_monster_strengths,
    get_monster_weaknesses,
    # Derived
    TargetStats,
    MonsterProfile,
    derive_target_stats,
    build_monster_profile,
)

from .damage import (
    CombatResult,
    calculate_damage,
    calculate_hits_to_kill,
    calculate_shot_cost,
    resolve,
    UNREACHABLE_FOR_RANKING,
    UNREACHABLE_FOR_COST,
)

from .drops import (
    resolve_drops,
    drops_contain_item_in_range,
    has_herb_drop,
)

from .catalog import (
    Catalog,
    require_catalog,
)

from .aggregation import (
    RankingFilter,
    RankedMonster,
    rank_candidates,
    MonsterDetail,
    monster_detail,
    ItemYield,
    SessionSummary,
    aggregate_set,
    total_active_rate,
    add_to_active_set,
    update_active_rate,
    remove_from_active_set,
)

__all__ = [
    # Constants
    'ShotMode',
    'shot_mode_from_string',
    'CURRENCY_ITEM_ID',
    'CURRENCY_NAME',
    'HERB_ITEM_ID_MIN',
    'HERB_ITEM_ID_MAX',
    'MAX_SUGGESTED_MONSTERS',
    'SEARCH_RESULT_LIMIT',
    # Errors
    'MageFarmError',
    'CatalogNotLoadedError',
    'CatalogLoadError',
    # Models
    'MonsterStatBlock',
    'SkillRef',
    'LocationRef',
    'DropGroup',
    'DropEntry',
    'ItemRecord',
    'AttackerConfig',
    'ActiveSetEntry',
    'ResolvedDrop',
    'to_number',
    'as_list',
    'records_as_list',
    # Formulas
    'STR_BONUS',
    'INT_BONUS',
    'DEX_BONUS',
    'WIT_BONUS',
    'CON_BONUS',
    'MEN_BONUS',
    'build_bonus_table',
    'lookup_bonus',
    'get_level_mod',
    'calc_patk',
    'calc_pdef',
    'calc_mdef',
    'calc_matk',
    'calc_patk_speed',
    'calc_matk_speed',
    'calc_patk_critical',
    'calc_evasion',
    'calc_accuracy',
    'calc_walk_speed',
    'calc_run_speed',
    'get_monster_exp',
    'get_monster_hp_rate',
    'get_monster_hp_rate_value',
    'get_monster_strengths',
    'get_monster_weaknesses',
    'TargetStats',
    'MonsterProfile',
    'derive_target_stats',
    'build_monster_profile',
    # Combat
    'CombatResult',
    'calculate_damage',
    'calculate_hits_to_kill',
    'calculate_shot_cost',
    'resolve',
    'UNREACHABLE_FOR_RANKING',
    'UNREACHABLE_FOR_COST',
    # Drops
    'resolve_drops',
    'drops_contain_item_in_range',
    'has_herb_drop',
    # Catalog
    'Catalog',
    'require_catalog',
    # Aggregation
    'RankingFilter',
    'RankedMonster',
    'rank_candidates',
    'MonsterDetail',
    'monster_detail',
    'ItemYield',
    'SessionSummary',
    'aggregate_set',
    'total_active_rate',
    'add_to_active_set',
    'update_active_rate',
    'remove_from_active_set',
]
