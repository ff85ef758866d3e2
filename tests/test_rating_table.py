"""
Tests for the rating table projection and column visibility.
"""

from datetime import date

import pytest

from cellarbook.rating_table import (
    COLUMN_LABELS,
    DEFAULT_VISIBLE,
    ColumnVisibility,
    RatingQuery,
    RatingRow,
    SortKey,
    distinct_values,
    load_visibility,
    project,
    save_visibility,
    to_frame,
)


def row(id, name, producer="", vintage=None, type="red", country=None, region=None,
        appellation=None, rating=None, tasted=None):
    return RatingRow(id=id, name=name, producer=producer, vintage=vintage, type=type,
                     country=country, region=region, appellation=appellation,
                     rating=rating, tasted_date=tasted)


ROWS = [
    row("1", "Château Margaux", "Château Margaux", 2015, "red", "France", "Bordeaux", "Margaux", 97, date(2024, 3, 1)),
    row("2", "Pavillon Blanc", "Château Margaux", 2019, "white", "France", "Bordeaux", None, 91, date(2024, 5, 2)),
    row("3", "Tignanello", "Antinori", 2019, "red", "Italy", "Tuscany", None, 93, date(2023, 12, 24)),
    row("4", "Brane-Cantenac", "Lurton", 2016, "red", "France", "Margaux Hills", None, 90, None),
    row("5", "Sancerre", "Vacheron", None, "white", "France", "Loire", None, 88, date(2024, 1, 10)),
]


def ids(rows):
    return [r.id for r in rows]


class TestSearch:
    """Test free-text search."""

    def test_matches_name_producer_region_country(self):
        """Search looks at name, producer, region and country."""
        result = project(ROWS, RatingQuery(search="margaux", sort_key=SortKey.NAME, descending=False))
        assert ids(result) == ["4", "1", "2"]

    def test_search_is_case_insensitive(self):
        """Search ignores case."""
        assert ids(project(ROWS, RatingQuery(search="ITALY"))) == ["3"]

    def test_search_with_type_filter_is_intersection(self):
        """Search and filters both apply."""
        query = RatingQuery(search="margaux", filters={"type": "red"}, sort_key=SortKey.NAME, descending=False)
        assert ids(project(ROWS, query)) == ["4", "1"]

    def test_appellation_not_searched(self):
        """Appellations are not searched."""
        only_appellation = [row("9", "X", appellation="Margaux")]
        assert project(only_appellation, RatingQuery(search="margaux")) == []


class TestFilters:
    """Test column filters."""

    def test_empty_filter_is_wildcard(self):
        """Empty filters match everything."""
        query = RatingQuery(filters={"type": "", "country": None})
        assert len(project(ROWS, query)) == len(ROWS)

    def test_filters_and_together(self):
        """All filters must match."""
        query = RatingQuery(filters={"vintage": "2019", "type": "red"})
        assert ids(project(ROWS, query)) == ["3"]

    def test_filter_is_exact_match(self):
        """Filters match whole values only."""
        assert project(ROWS, RatingQuery(filters={"region": "Margaux"})) == []

    def test_missing_value_never_matches(self):
        """Rows without a value never match a filter."""
        assert ids(project(ROWS, RatingQuery(filters={"appellation": "Margaux"}))) == ["1"]


class TestSort:
    """Test sorting."""

    def test_rating_descending(self):
        """Ratings sort highest first."""
        result = project(ROWS, RatingQuery(sort_key=SortKey.RATING, descending=True))
        assert ids(result) == ["1", "3", "2", "4", "5"]

    def test_tasted_date_missing_sorts_as_zero(self):
        """Rows without a tasting date sort first ascending."""
        result = project(ROWS, RatingQuery(sort_key=SortKey.TASTED_DATE, descending=False))
        assert ids(result) == ["4", "3", "5", "1", "2"]

    def test_vintage_numeric(self):
        """Vintages sort as numbers."""
        result = project(ROWS, RatingQuery(sort_key=SortKey.VINTAGE, descending=False))
        assert ids(result)[0] == "5"
        assert ids(result)[-2:] in (["2", "3"], ["3", "2"])

    def test_ties_keep_input_order(self):
        """The sort is stable."""
        result = project(ROWS, RatingQuery(sort_key=SortKey.VINTAGE, descending=True))
        assert ids(result)[:2] == ["2", "3"]
        result = project(ROWS, RatingQuery(sort_key=SortKey.PRODUCER, descending=False))
        assert ids(result)[1:3] == ["1", "2"]

    def test_strings_are_case_sensitive(self):
        """Uppercase sorts before lowercase."""
        rows = [row("a", "alpha"), row("b", "Beta")]
        result = project(rows, RatingQuery(sort_key=SortKey.NAME, descending=False))
        assert ids(result) == ["b", "a"]

    def test_deterministic_and_input_untouched(self):
        """Projection is repeatable and leaves the input alone."""
        query = RatingQuery(search="a", sort_key=SortKey.RATING)
        snapshot = list(ROWS)
        assert project(ROWS, query) == project(ROWS, query)
        assert ROWS == snapshot


class TestFromRecord:
    """Test building rows from rating records."""

    def test_flattens_nested_wine(self):
        """Nested wine and location names are flattened."""
        record = {
            "id": "r1",
            "rating": 95,
            "tasting_date": "2024-06-01",
            "tasting_notes": "cassis",
            "wine_database": {
                "name": "Margaux", "vintage": 2010, "wine_type": "red",
                "producers": {"name": "Château Margaux"},
                "countries": {"name": "France"},
                "regions": {"name": "Bordeaux"},
                "appellations": None,
            },
        }
        r = RatingRow.from_record(record)
        assert (r.name, r.producer, r.country, r.region, r.appellation) == (
            "Margaux", "Château Margaux", "France", "Bordeaux", None)
        assert r.tasted_date == date(2024, 6, 1)
        assert r.band == "Outstanding"

    def test_missing_wine(self):
        """A rating without a wine still gets a row."""
        r = RatingRow.from_record({"id": "r2", "rating": 70, "wine_database": None})
        assert r.name == "" and r.tasted_date is None
        assert r.band == "Average"


class TestColumns:
    """Test column visibility."""

    def test_toggle_and_reset(self):
        """Columns toggle off and on, and reset restores the defaults."""
        visibility = ColumnVisibility().toggle("vintage").toggle("notes")
        assert not visibility.is_visible("vintage")
        assert visibility.visible[-1] == "notes"
        assert visibility.reset().visible == DEFAULT_VISIBLE

    def test_toggle_on_keeps_column_order(self):
        """A re-shown column returns to its place."""
        visibility = ColumnVisibility(visible=("rating",)).toggle("name")
        assert visibility.visible == ("name", "rating")

    def test_unknown_column(self):
        """Unknown columns raise KeyError."""
        with pytest.raises(KeyError):
            ColumnVisibility().toggle("price")

    def test_visibility_does_not_filter_rows(self):
        """Hiding columns keeps every row."""
        hidden = ColumnVisibility(visible=("name",))
        frame = to_frame(ROWS, hidden)
        assert list(frame.columns) == ["Wine"]
        assert len(frame) == len(ROWS)

    def test_frame_labels_and_values(self):
        """The frame uses display labels."""
        frame = to_frame(ROWS[:1], ColumnVisibility(visible=("name", "type", "rating", "band")))
        assert list(frame.columns) == [COLUMN_LABELS[c] for c in ("name", "type", "rating", "band")]
        assert frame.iloc[0].tolist() == ["Château Margaux", "Red", 97, "Extraordinary"]

    def test_session_persistence(self):
        """Visibility is kept per table in the session."""
        session = {}
        assert load_visibility(session, "ratings") == ColumnVisibility()
        save_visibility(session, "ratings", ColumnVisibility(visible=("name",)))
        assert load_visibility(session, "ratings").visible == ("name",)
        assert load_visibility(session, "friends") == ColumnVisibility()


def test_distinct_values_feed_filters():
    """Filter choices are the sorted distinct values."""
    assert distinct_values(ROWS, "country") == ["France", "Italy"]
    assert distinct_values(ROWS, "vintage") == ["2015", "2016", "2019"]
