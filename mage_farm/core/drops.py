"""
Mage Farm Helper - Drop Resolution
==================================
Flattens a monster's drop groups into independent (item, chance, quantity)
entries.

Each item drops when its group roll AND its own item roll succeed, so the
effective chance is p_group * p_item. Results are recomputed on every call:
item names come from a catalog that may be supplied later than the monster.
"""

from typing import Callable, List, Mapping, Optional, Union

from .constants import HERB_ITEM_ID_MAX, HERB_ITEM_ID_MIN
from .models import ItemRecord, MonsterStatBlock, ResolvedDrop, to_number


ItemNames = Union[Mapping[str, ItemRecord], Callable[[str], Optional[str]], None]


def _lookup_name(item_names: ItemNames, item_id: str) -> str:
    name = None
    if callable(item_names):
        name = item_names(item_id)
    elif item_names is not None:
        item = item_names.get(item_id)
        name = item.name if item is not None else None
    return name or f"#{item_id}"


def resolve_drops(monster: MonsterStatBlock, item_names: ItemNames = None) -> List[ResolvedDrop]:
    """
    Resolve a monster's drop tree into a flat list.

    Entries without an item id and entries whose effective chance is not
    positive are skipped. Order follows the catalog (groups, then items).

    Args:
        monster: Monster to resolve
        item_names: Item id -> ItemRecord mapping, or a callable returning a
            name; unknown ids are shown as "#<id>"

    Returns:
        List of ResolvedDrop with probabilities as fractions (0-1)
    """
    resolved = []
    for group in monster.drop_groups:
        p_group = group.chance / 100
        for entry in group.items:
            p_item = entry.chance / 100
            if not entry.item_id:
                continue
            if p_group * p_item <= 0:
                continue
            resolved.append(ResolvedDrop(
                item_id=entry.item_id,
                name=_lookup_name(item_names, entry.item_id),
                min=entry.min,
                max=entry.max,
                p_group=p_group,
                p_item=p_item,
            ))
    return resolved


def drops_contain_item_in_range(drops: List[ResolvedDrop], low: int, high: int) -> bool:
    """True when any resolved drop has a numeric item id within [low, high]."""
    for drop in drops:
        item_id = to_number(drop.item_id, fallback=float('nan'))
        if low <= item_id <= high:
            return True
    return False


def has_herb_drop(monster: MonsterStatBlock) -> bool:
    """True when the monster can drop a herb (item ids 8600-8605)."""
    return drops_contain_item_in_range(resolve_drops(monster), HERB_ITEM_ID_MIN, HERB_ITEM_ID_MAX)
