"""
Catalog loader for the NPC and item databases.

Reads ``npcs.json`` and ``items.json`` and hands the engine a fully built,
read-only Catalog. Large files are read in chunks so callers can show a
progress bar while loading.
"""
import os
import json
import logging
from typing import Any, Callable, Optional

from mage_farm.core import Catalog, CatalogLoadError

logger = logging.getLogger(__name__)

# Path to catalog files (override with MAGE_FARM_DATA_DIR)
DATA_DIR = os.environ.get(
    "MAGE_FARM_DATA_DIR",
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data"),
)
NPCS_FILE = "npcs.json"
ITEMS_FILE = "items.json"

CHUNK_SIZE = 1 << 20

# progress(label, percent) with percent in [0, 100]
ProgressCallback = Callable[[str, float], None]


def _report(progress: Optional[ProgressCallback], label: str, percent: float) -> None:
    logger.info(f"{label} ({percent:.0f}%)")
    if progress is not None:
        progress(label, percent)


def _read_json(path: str, progress: Optional[ProgressCallback], base: float, span: float) -> Any:
    """
    Read and decode one JSON file, reporting progress within [base, base + span].

    Raises:
        CatalogLoadError: file missing, unreadable or not valid JSON
    """
    _report(progress, f"Fetching {os.path.basename(path)}...", base)
    try:
        total = os.path.getsize(path)
        chunks = []
        received = 0
        with open(path, 'r', encoding='utf-8') as f:
            while True:
                chunk = f.read(CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
                received += len(chunk)
                if total > 0 and progress is not None:
                    progress(f"Fetching {os.path.basename(path)}...",
                             base + min(1.0, received / total) * span * 0.7)
    except OSError as e:
        raise CatalogLoadError(f"Cannot read {path}: {e}") from e

    _report(progress, "Parsing JSON...", base + span * 0.7)
    try:
        data = json.loads("".join(chunks))
    except ValueError as e:
        raise CatalogLoadError(f"Invalid JSON in {path}: {e}") from e

    _report(progress, "Parsing JSON...", base + span * 0.98)
    return data


def load_catalog(
    npcs_path: Optional[str] = None,
    items_path: Optional[str] = None,
    progress: Optional[ProgressCallback] = None,
) -> Catalog:
    """
    Load both catalogs from disk.

    Args:
        npcs_path: Path to the NPC database (default DATA_DIR/npcs.json)
        items_path: Path to the item database (default DATA_DIR/items.json)
        progress: Optional callback receiving (stage label, percent)

    Returns:
        Catalog snapshot

    Raises:
        CatalogLoadError: a file is missing or malformed
    """
    npcs_path = npcs_path or os.path.join(DATA_DIR, NPCS_FILE)
    items_path = items_path or os.path.join(DATA_DIR, ITEMS_FILE)

    _report(progress, "Initializing...", 2)
    npcs_data = _read_json(npcs_path, progress, 2, 48)
    items_data = _read_json(items_path, progress, 52, 46)

    _report(progress, "Indexing items...", 99)
    catalog = Catalog.from_raw(npcs_data, items_data)
    _report(progress, "Ready", 100)

    logger.info(f"Loaded {len(catalog.monsters)} monsters and {len(catalog.items)} items")
    return catalog


def load_catalog_from_strings(npcs_json: str, items_json: str) -> Catalog:
    """
    Build a catalog from JSON text (e.g. uploaded files).

    Raises:
        CatalogLoadError: either document is not valid JSON
    """
    try:
        npcs_data = json.loads(npcs_json)
        items_data = json.loads(items_json)
    except ValueError as e:
        raise CatalogLoadError(f"Invalid catalog JSON: {e}") from e
    return Catalog.from_raw(npcs_data, items_data)
