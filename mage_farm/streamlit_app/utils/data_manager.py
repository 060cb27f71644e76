"""
Data manager for loading and saving farm settings to CSV files.
Each user has a single CSV file with their magic setup, suggestion filters
and active set.
"""
import os
import io
import csv
import logging
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field

from mage_farm.catalog_loader import DATA_DIR
from mage_farm.core import (
    ActiveSetEntry,
    AttackerConfig,
    RankingFilter,
    ShotMode,
    shot_mode_from_string,
)

logger = logging.getLogger(__name__)

# Path to user settings directory
USERS_DATA_DIR = os.path.join(DATA_DIR, "users")

CSV_HEADER = ['section', 'key', 'subkey', 'value']


@dataclass
class FarmSettings:
    """Complete saved state of the calculator for one user."""
    username: str = ""

    # Magic setup
    matk: float = 1000
    skill_power: float = 100
    shot: str = ShotMode.NONE.value  # "none", "ss" or "bss"
    ss_price: float = 0
    bss_price: float = 0

    # Suggested monsters filters
    min_level: int = 1
    max_level: int = 80
    max_hits: int = 1
    herbs_only: bool = True

    # Active set (monster_id -> {name, rate}), kept in insertion order
    active_set: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    session_size: int = 100

    # Last monster opened in the search page
    selected_monster_id: str = ""

    def get_attacker(self) -> AttackerConfig:
        """Build the engine's AttackerConfig from the saved magic setup."""
        return AttackerConfig(
            matk=float(self.matk),
            skill_power=float(self.skill_power),
            shot=shot_mode_from_string(self.shot),
            ss_price=float(self.ss_price),
            bss_price=float(self.bss_price),
        )

    def get_ranking_filter(self) -> RankingFilter:
        return RankingFilter(
            min_level=self.min_level,
            max_level=self.max_level,
            max_hits=self.max_hits,
            herbs_only=self.herbs_only,
        )

    def get_active_entries(self) -> Tuple[ActiveSetEntry, ...]:
        """Active set as engine entries."""
        return tuple(
            ActiveSetEntry(
                monster_id=monster_id,
                name=str(entry.get('name', '')),
                rate=float(entry.get('rate', 0)),
            )
            for monster_id, entry in self.active_set.items()
        )

    def set_active_entries(self, entries) -> None:
        """Replace the active set with engine entries."""
        self.active_set = {
            e.monster_id: {'name': e.name, 'rate': e.rate}
            for e in entries
        }


def _get_user_file(username: str) -> str:
    """Get path to user's settings file."""
    os.makedirs(USERS_DATA_DIR, exist_ok=True)
    return os.path.join(USERS_DATA_DIR, f"{username.lower()}_farm.csv")


def user_has_data(username: str) -> bool:
    """Check if user has saved settings."""
    return os.path.exists(_get_user_file(username))


def _settings_rows(data: FarmSettings) -> List[List[str]]:
    """
    Flatten settings to CSV rows.
    Format: section,key,subkey,value
    """
    rows = []

    # Magic setup
    rows.append(['magic', 'matk', '', str(data.matk)])
    rows.append(['magic', 'skill_power', '', str(data.skill_power)])
    rows.append(['magic', 'shot', '', data.shot])
    rows.append(['magic', 'ss_price', '', str(data.ss_price)])
    rows.append(['magic', 'bss_price', '', str(data.bss_price)])

    # Suggestion filters
    rows.append(['suggest', 'min_level', '', str(data.min_level)])
    rows.append(['suggest', 'max_level', '', str(data.max_level)])
    rows.append(['suggest', 'max_hits', '', str(data.max_hits)])
    rows.append(['suggest', 'herbs_only', '', str(data.herbs_only)])

    # Session
    rows.append(['session', 'size', '', str(data.session_size)])
    if data.selected_monster_id:
        rows.append(['session', 'selected_monster', '', data.selected_monster_id])

    # Active set
    for monster_id, entry in data.active_set.items():
        for key, value in entry.items():
            rows.append(['active_set', monster_id, key, str(value)])

    return rows


def _apply_row(data: FarmSettings, section: str, key: str, subkey: str, value: str) -> None:
    """Apply one CSV row to settings. Unknown sections are ignored."""
    if section == 'magic':
        if key == 'shot':
            data.shot = shot_mode_from_string(value).value
        elif key in ('matk', 'skill_power', 'ss_price', 'bss_price'):
            setattr(data, key, float(value))

    elif section == 'suggest':
        if key == 'herbs_only':
            data.herbs_only = _parse_value(value) is True
        elif key in ('min_level', 'max_level', 'max_hits'):
            setattr(data, key, int(float(value)))

    elif section == 'session':
        if key == 'size':
            data.session_size = int(float(value))
        elif key == 'selected_monster':
            data.selected_monster_id = value

    elif section == 'active_set':
        if key not in data.active_set:
            data.active_set[key] = {}
        data.active_set[key][subkey] = value if subkey == 'name' else _parse_value(value)


def save_user_data(username: str, data: FarmSettings) -> bool:
    """Save settings to CSV."""
    filepath = _get_user_file(username)

    try:
        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            writer.writerows(_settings_rows(data))
        return True
    except OSError as e:
        logger.error(f"Error saving farm settings for {username}: {e}")
        return False


def load_user_data(username: str) -> FarmSettings:
    """
    Load settings from CSV.
    Returns default FarmSettings if file doesn't exist or can't be read.
    """
    filepath = _get_user_file(username)

    if not os.path.exists(filepath):
        return FarmSettings(username=username)

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return _read_settings(f, username)
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Error loading farm settings for {username}: {e}")
        return FarmSettings(username=username)


def _read_settings(stream, username: str) -> FarmSettings:
    data = FarmSettings(username=username)
    reader = csv.DictReader(stream)
    for row in reader:
        section = row.get('section', '')
        key = row.get('key', '')
        if not section or not key:
            continue
        _apply_row(data, section, key, row.get('subkey', '') or '', row.get('value', '') or '')
    return data


def _parse_value(value: str) -> Any:
    """Parse a string value to appropriate type."""
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


def delete_user_data(username: str) -> bool:
    """Delete a user's settings file."""
    filepath = _get_user_file(username)
    if os.path.exists(filepath):
        os.remove(filepath)
        return True
    return False


def export_user_data_csv(data: FarmSettings) -> str:
    """
    Export settings to CSV string for download.
    Returns the CSV content as a string.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)
    writer.writerows(_settings_rows(data))
    return output.getvalue()


def import_user_data_csv(csv_content: str, username: str) -> Optional[FarmSettings]:
    """
    Import settings from CSV string.
    Returns FarmSettings object if successful, None if failed.
    """
    try:
        return _read_settings(io.StringIO(csv_content), username)
    except (ValueError, KeyError, csv.Error) as e:
        logger.error(f"Error importing farm settings: {e}")
        return None
