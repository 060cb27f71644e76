"""
Tests for core/catalog.py and catalog_loader.py.
"""
import json

import pytest
from mage_farm.catalog_loader import load_catalog, load_catalog_from_strings
from mage_farm.core.catalog import Catalog, require_catalog
from mage_farm.core.errors import CatalogLoadError, CatalogNotLoadedError
from mage_farm.core.models import to_number


NPCS = [
    {"id": 20001, "name": "Gremlin", "level": 1},
    {"id": 20002, "name": "Orc Archer", "level": 12, "stats": {"vitals": {"hp": "1,250"}}},
    {"id": 20003, "name": "Orc Fighter", "level": 14},
]
ITEMS = [{"id": 57, "name": "Adena"}, {"id": 1864, "name": "Stem"}]


class TestCatalog:
    """Tests for Catalog construction and queries."""

    def test_from_array(self):
        catalog = Catalog.from_raw(NPCS, ITEMS)
        assert len(catalog.monsters) == 3
        assert catalog.get_monster("20002").hp == 1250
        assert catalog.get_monster(20003).name == "Orc Fighter"
        assert catalog.item_name("1864") == "Stem"
        assert catalog.item_name("404") is None

    def test_from_id_keyed_object(self):
        catalog = Catalog.from_raw({str(n["id"]): n for n in NPCS}, {"57": ITEMS[0]})
        assert [m.id for m in catalog.monsters] == ["20001", "20002", "20003"]
        assert catalog.currency_id == "57"

    def test_currency_defaults_to_57(self):
        catalog = Catalog.from_raw(NPCS, [{"id": 1, "name": "Gold"}])
        assert catalog.currency_id == "57"

    def test_search_is_case_insensitive_substring(self):
        catalog = Catalog.from_raw(NPCS, ITEMS)
        assert [m.name for m in catalog.search("orc")] == ["Orc Archer", "Orc Fighter"]
        assert [m.name for m in catalog.search("  ARCH ")] == ["Orc Archer"]
        assert catalog.search("dragon") == []

    def test_blank_search_returns_first_results(self):
        catalog = Catalog.from_raw([{"id": i, "name": f"Mob {i}"} for i in range(60)], ITEMS)
        assert len(catalog.search("")) == 50
        assert len(catalog.search("", limit=5)) == 5

    def test_oversized_numbers_fall_back_to_zero(self):
        """JSON integers too large for a float read as 0 instead of failing the build."""
        huge = json.loads("1" + "0" * 400)
        assert to_number(huge) == 0
        assert to_number(huge, fallback=1) == 1

        catalog = Catalog.from_raw([{"id": "1", "name": "Giant", "stats": {"vitals": {"hp": huge}}}], ITEMS)
        assert catalog.get_monster("1").hp == 0

    def test_require_catalog(self):
        catalog = Catalog.from_raw(NPCS, ITEMS)
        assert require_catalog(catalog) is catalog
        with pytest.raises(CatalogNotLoadedError):
            require_catalog(None)


class TestCatalogLoader:
    """Tests for loading catalogs from disk."""

    def write_files(self, tmp_path, npcs=NPCS, items=ITEMS):
        npcs_path = tmp_path / "npcs.json"
        items_path = tmp_path / "items.json"
        npcs_path.write_text(json.dumps(npcs), encoding="utf-8")
        items_path.write_text(json.dumps(items), encoding="utf-8")
        return str(npcs_path), str(items_path)

    def test_load_catalog(self, tmp_path):
        npcs_path, items_path = self.write_files(tmp_path)
        catalog = load_catalog(npcs_path, items_path)
        assert len(catalog.monsters) == 3
        assert len(catalog.items) == 2

    def test_progress_reported(self, tmp_path):
        npcs_path, items_path = self.write_files(tmp_path)
        stages = []
        load_catalog(npcs_path, items_path, progress=lambda label, pct: stages.append((label, pct)))

        labels = [label for label, _ in stages]
        percents = [pct for _, pct in stages]
        assert labels[0] == "Initializing..."
        assert "Fetching npcs.json..." in labels
        assert "Indexing items..." in labels
        assert stages[-1] == ("Ready", 100)
        assert percents == sorted(percents)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError):
            load_catalog(str(tmp_path / "nope.json"), str(tmp_path / "nope2.json"))

    def test_invalid_json(self, tmp_path):
        npcs_path, items_path = self.write_files(tmp_path)
        (tmp_path / "npcs.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogLoadError):
            load_catalog(npcs_path, items_path)

    def test_load_from_strings(self):
        catalog = load_catalog_from_strings(json.dumps(NPCS), json.dumps(ITEMS))
        assert catalog.get_monster("20001").name == "Gremlin"
        with pytest.raises(CatalogLoadError):
            load_catalog_from_strings("[", "[]")

    def test_load_from_uploaded_bytes(self):
        """Uploaded files arrive as UTF-8 bytes, often as id-keyed objects."""
        npcs = {"20001": {"id": 20001, "name": "Gremlin Königin"}}
        uploaded = json.dumps(npcs, ensure_ascii=False).encode("utf-8")
        catalog = load_catalog_from_strings(uploaded.decode("utf-8"), json.dumps({"57": ITEMS[0]}))
        assert catalog.get_monster("20001").name == "Gremlin Königin"
        assert catalog.currency_id == "57"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
