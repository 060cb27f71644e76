"""
Mage Farm Helper - Catalog Snapshot
===================================
Read-only view of the monster and item catalogs shared by every engine query.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import CURRENCY_ITEM_ID, CURRENCY_NAME, SEARCH_RESULT_LIMIT
from .errors import CatalogNotLoadedError
from .models import ItemRecord, MonsterStatBlock, records_as_list


@dataclass(frozen=True)
class Catalog:
    """Fully materialized monster and item catalogs."""
    monsters: Tuple[MonsterStatBlock, ...]
    items: Tuple[ItemRecord, ...]
    items_by_id: Dict[str, ItemRecord] = field(default_factory=dict, compare=False)
    monsters_by_id: Dict[str, MonsterStatBlock] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not self.items_by_id:
            object.__setattr__(self, 'items_by_id', {it.id: it for it in self.items})
        if not self.monsters_by_id:
            object.__setattr__(self, 'monsters_by_id', {m.id: m for m in self.monsters})

    @classmethod
    def from_raw(cls, npcs_data: Any, items_data: Any) -> 'Catalog':
        """
        Build a catalog from decoded JSON documents.

        Each document may be an array of records or an id-keyed object.
        """
        monsters = tuple(MonsterStatBlock.from_record(r) for r in records_as_list(npcs_data))
        items = tuple(ItemRecord.from_record(r) for r in records_as_list(items_data))
        return cls(monsters=monsters, items=items)

    @property
    def currency_id(self) -> str:
        """Id of the currency item: the first item named Adena, else "57"."""
        for item in self.items:
            if item.name.lower() == CURRENCY_NAME.lower():
                return item.id
        return CURRENCY_ITEM_ID

    def item_name(self, item_id: str) -> Optional[str]:
        item = self.items_by_id.get(str(item_id))
        return item.name if item is not None else None

    def get_monster(self, monster_id: str) -> Optional[MonsterStatBlock]:
        return self.monsters_by_id.get(str(monster_id))

    def search(self, query: str, limit: int = SEARCH_RESULT_LIMIT) -> List[MonsterStatBlock]:
        """
        Case-insensitive substring search on monster names.

        A blank query returns the first ``limit`` monsters.
        """
        q = (query or "").strip().lower()
        if not q:
            return list(self.monsters[:limit])
        return [m for m in self.monsters if q in m.name.lower()][:limit]


def require_catalog(catalog: Optional[Catalog]) -> Catalog:
    """Raise CatalogNotLoadedError when the catalog is not available yet."""
    if catalog is None:
        raise CatalogNotLoadedError("Monster and item catalogs must be loaded before querying")
    return catalog
