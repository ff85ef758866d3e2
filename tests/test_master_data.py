"""
Tests for the master data snapshot.
"""

from cellarbook.master_data import MasterDataCache


class TestLoad:
    """Test loading the snapshot."""

    def test_loads_all_lists_sorted(self, cache):
        """Every list is loaded and sorted by name."""
        assert cache.loaded
        assert [c.name for c in cache.countries] == ["France", "Italy"]
        assert [g.name for g in cache.grape_varieties] == [
            "Cabernet Franc", "Cabernet Sauvignon", "Chardonnay", "Merlot",
        ]

    def test_failure_gives_empty_cache(self, sb):
        """Any failed list empties the whole snapshot."""
        sb.fail_on("grape_varieties", "select")
        cache = MasterDataCache.load(sb)
        assert not cache.loaded
        assert cache.load_error == "Failed to load master data"
        assert cache.countries == [] and cache.regions == []

    def test_reload_sees_new_rows(self, sb, cache):
        """Each dialog open refetches."""
        sb.seed("countries", {"id": "es", "name": "Spain"})
        assert cache.country("es") is None
        assert MasterDataCache.load(sb).country("es").name == "Spain"


class TestLookups:
    """Test id lookups and child lists."""

    def test_by_id(self, cache):
        """Rows are found by id and None gives None."""
        assert cache.region("bordeaux").country_id == "fr"
        assert cache.appellation("chianti").region_id == "tuscany"
        assert cache.grape_variety("chardonnay").type == "white"
        assert cache.country(None) is None

    def test_children(self, cache):
        """Children are filtered by parent id."""
        assert [r.id for r in cache.regions_for_country("it")] == ["tuscany"]
        assert cache.appellations_for_region("burgundy") == []


class TestOrphans:
    """Test orphan detection."""

    def test_clean_data_has_no_orphans(self, cache):
        """Consistent data reports nothing."""
        assert cache.find_orphans() == {"regions": [], "appellations": []}

    def test_reports_missing_parents(self, sb):
        """Rows whose parent is missing are reported by name."""
        sb.seed("regions", {"id": "rioja", "name": "Rioja", "country_id": "es"})
        sb.seed("appellations", {"id": "x", "name": "Lost AOC", "region_id": "gone"})
        orphans = MasterDataCache.load(sb).find_orphans()
        assert orphans == {"regions": ["Rioja"], "appellations": ["Lost AOC"]}
