"""
Mage Farm Helper - Data Model
=============================
Immutable records for monsters, items, attacker setup and the active set.

Catalog JSON is loosely structured: numbers may arrive as strings, nested
structures may be a single object instead of a list, and fields may be
missing. Everything is normalized here, once, on the way in.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    DEFAULT_DROP_QUANTITY,
    ShotMode,
    shot_mode_from_string,
)


# =============================================================================
# NORMALIZERS
# =============================================================================

def to_number(value: Any, fallback: float = 0.0) -> float:
    """
    Coerce a loosely typed catalog value to float.

    Strings may contain thousands separators ("1,250"). None, non-numeric and
    non-finite values (including integers too large for a float) return the
    fallback.
    """
    if value is None:
        return fallback
    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            number = float(value)
        else:
            number = float(str(value).replace(",", ""))
    except (ValueError, OverflowError):
        return fallback
    return number if math.isfinite(number) else fallback


def to_int(value: Any, fallback: int = 0) -> int:
    """to_number() truncated to int."""
    return int(to_number(value, fallback))


def as_list(value: Any) -> List[Any]:
    """
    Normalize a "one or many" field to a list.

    None -> [], list/tuple -> list, anything else -> [value].
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def records_as_list(data: Any) -> List[Any]:
    """Normalize a catalog document (array or id-keyed object) to a list of records."""
    if data is None:
        return []
    if isinstance(data, dict):
        return list(data.values())
    return as_list(data)


def get_path(record: Any, path: str, default: Any = None) -> Any:
    """Read a dotted path ("stats.vitals.hp") from nested dicts."""
    current = record
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def _first_present(record: Dict, *paths: str) -> Any:
    for path in paths:
        value = get_path(record, path)
        if value is not None:
            return value
    return None


# =============================================================================
# CATALOG RECORDS
# =============================================================================

@dataclass(frozen=True)
class SkillRef:
    """A skill attached to a monster."""
    skill_id: int
    level: int

    @classmethod
    def from_record(cls, record: Any) -> 'SkillRef':
        if not isinstance(record, dict):
            return cls(skill_id=to_int(record), level=0)
        return cls(
            skill_id=to_int(_first_present(record, "skill_id", "id")),
            level=to_int(record.get("level")),
        )


@dataclass(frozen=True)
class LocationRef:
    """A spawn location reference."""
    id: str
    name: str

    @classmethod
    def from_record(cls, record: Any) -> 'LocationRef':
        if not isinstance(record, dict):
            return cls(id=str(record), name=str(record))
        return cls(id=str(record.get("id", "")), name=str(record.get("name", "")))


@dataclass(frozen=True)
class DropEntry:
    """One item inside a drop group. Chance is a percentage (0-100)."""
    item_id: str
    chance: float
    min: float = DEFAULT_DROP_QUANTITY
    max: float = DEFAULT_DROP_QUANTITY

    @classmethod
    def from_record(cls, record: Any) -> 'DropEntry':
        if not isinstance(record, dict):
            record = {}
        raw_id = _first_present(record, "id", "item_id")
        return cls(
            item_id="" if raw_id is None else str(raw_id),
            chance=to_number(record.get("chance")),
            # Missing quantities default to 1 so they never zero the expected yield
            min=to_number(record.get("min"), DEFAULT_DROP_QUANTITY),
            max=to_number(record.get("max"), DEFAULT_DROP_QUANTITY),
        )


@dataclass(frozen=True)
class DropGroup:
    """An independent group roll gating its items. Chance is a percentage."""
    chance: float
    items: Tuple[DropEntry, ...] = ()

    @classmethod
    def from_record(cls, record: Any) -> 'DropGroup':
        if not isinstance(record, dict):
            record = {}
        return cls(
            chance=to_number(record.get("chance")),
            items=tuple(DropEntry.from_record(it) for it in as_list(record.get("item"))),
        )


@dataclass(frozen=True)
class ItemRecord:
    """An entry of the item catalog."""
    id: str
    name: str
    type: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> 'ItemRecord':
        if not isinstance(record, dict):
            record = {}
        raw_id = _first_present(record, "id", "item_id")
        item_type = record.get("type")
        return cls(
            id="" if raw_id is None else str(raw_id),
            name=str(record.get("name") or ""),
            type=None if item_type is None else str(item_type),
        )


@dataclass(frozen=True)
class MonsterStatBlock:
    """
    A monster as consumed by the engine.

    Attributes str/int are stored as ``str_``/``int_`` to avoid shadowing
    builtins. ``hp``, ``magic_defense`` and ``exp`` hold the catalog's own
    combat values when it ships them; ``magic_defense`` and ``exp`` are None
    when the catalog leaves them to the stat formulas.
    """
    id: str
    name: str
    level: int = 0

    # Core attributes
    str_: int = 0
    int_: int = 0
    dex: int = 0
    wit: int = 0
    con: int = 0
    men: int = 0

    # Base multipliers
    base_physical_attack: float = 0
    base_defend: float = 0
    base_magic_attack: float = 0
    base_magic_defend: float = 0
    base_attack_speed: float = 0
    base_critical: float = 0
    physical_hit_modify: float = 0

    # Ground speed descriptors, e.g. "80;0"
    ground_low: str = ""
    ground_high: str = ""

    acquire_exp_rate: float = 0

    skills: Tuple[SkillRef, ...] = ()
    locations: Tuple[LocationRef, ...] = ()
    drop_groups: Tuple[DropGroup, ...] = ()

    # Catalog-provided combat values
    hp: float = 0
    magic_defense: Optional[float] = None
    exp: Optional[float] = None

    @classmethod
    def from_record(cls, record: Any) -> 'MonsterStatBlock':
        """
        Build a stat block from a catalog record.

        Accepts the nested catalog shape (``stats.vitals.hp``,
        ``stats.defence.magical``, ``acquire.exp``, ``dropLists.drop.group``)
        and the flat shape (``npc_id``, ``str``, ``int``, ..., ``items``).
        A flat ``items`` list is read as a single group that always rolls.
        """
        if not isinstance(record, dict):
            record = {}

        raw_id = _first_present(record, "id", "npc_id")
        groups = [DropGroup.from_record(g)
                  for g in as_list(get_path(record, "dropLists.drop.group"))]
        if not groups and record.get("items") is not None:
            groups = [DropGroup.from_record({"chance": 100, "item": record.get("items")})]

        magic_defense = _first_present(record, "stats.defence.magical", "magic_defense")
        exp = _first_present(record, "acquire.exp", "exp")

        return cls(
            id="" if raw_id is None else str(raw_id),
            name=str(record.get("name") or ""),
            level=to_int(record.get("level")),
            str_=to_int(_first_present(record, "str", "stats.attributes.str")),
            int_=to_int(_first_present(record, "int", "stats.attributes.int")),
            dex=to_int(_first_present(record, "dex", "stats.attributes.dex")),
            wit=to_int(_first_present(record, "wit", "stats.attributes.wit")),
            con=to_int(_first_present(record, "con", "stats.attributes.con")),
            men=to_int(_first_present(record, "men", "stats.attributes.men")),
            base_physical_attack=to_number(record.get("base_physical_attack")),
            base_defend=to_number(record.get("base_defend")),
            base_magic_attack=to_number(record.get("base_magic_attack")),
            base_magic_defend=to_number(record.get("base_magic_defend")),
            base_attack_speed=to_number(record.get("base_attack_speed")),
            base_critical=to_number(record.get("base_critical")),
            physical_hit_modify=to_number(record.get("physical_hit_modify")),
            ground_low=str(record.get("ground_low") or ""),
            ground_high=str(record.get("ground_high") or ""),
            acquire_exp_rate=to_number(record.get("acquire_exp_rate")),
            skills=tuple(SkillRef.from_record(s) for s in as_list(record.get("skills"))),
            locations=tuple(LocationRef.from_record(loc) for loc in as_list(record.get("locations"))),
            drop_groups=tuple(groups),
            hp=to_number(_first_present(record, "stats.vitals.hp", "hp")),
            magic_defense=None if magic_defense is None else to_number(magic_defense),
            exp=None if exp is None else to_number(exp),
        )


# =============================================================================
# ATTACKER & ACTIVE SET
# =============================================================================

@dataclass(frozen=True)
class AttackerConfig:
    """The player's magic setup."""
    matk: float = 1000
    skill_power: float = 100
    shot: ShotMode = ShotMode.NONE
    ss_price: float = 0
    bss_price: float = 0

    def __post_init__(self):
        if not isinstance(self.shot, ShotMode):
            object.__setattr__(self, 'shot', shot_mode_from_string(self.shot))

    @property
    def shot_multiplier(self) -> int:
        return self.shot.multiplier

    @property
    def shot_price(self) -> float:
        """Unit price of the active shot mode (0 when not using shots)."""
        if self.shot == ShotMode.STANDARD:
            return self.ss_price
        if self.shot == ShotMode.BLESSED:
            return self.bss_price
        return 0.0


@dataclass(frozen=True)
class ActiveSetEntry:
    """
    A monster in the active set with its share of kills (percent).

    Rates are not required to sum to 100.
    """
    monster_id: str
    name: str = ""
    rate: float = 0


@dataclass(frozen=True)
class ResolvedDrop:
    """A flattened drop: one item with its group and item probabilities (0-1)."""
    item_id: str
    name: str
    min: float
    max: float
    p_group: float
    p_item: float

    @property
    def effective_chance(self) -> float:
        return self.p_group * self.p_item

    @property
    def average_quantity(self) -> float:
        """Uniform quantity over [min, max]."""
        return (self.min + self.max) / 2

    @property
    def expected_quantity(self) -> float:
        """Expected quantity of this item per kill."""
        return self.effective_chance * self.average_quantity
