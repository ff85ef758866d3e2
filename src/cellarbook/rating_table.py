"""
Rating table view model.

`project` turns fetched rating rows into the displayed list: free-text search,
exact-match filters, then a stable sort. It holds no state of its own, so the
same inputs always give the same output. Column visibility is tracked
separately and never affects which rows appear.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, MutableMapping, Optional, Tuple

import pandas as pd

from cellarbook.constants import RatingBand, WineType


class SortKey(str, Enum):
    NAME = "name"
    PRODUCER = "producer"
    VINTAGE = "vintage"
    TYPE = "type"
    RATING = "rating"
    TASTED_DATE = "tasted_date"


NUMERIC_SORT_KEYS = {SortKey.VINTAGE, SortKey.RATING, SortKey.TASTED_DATE}

FILTER_FIELDS = ("vintage", "type", "country", "region", "appellation", "producer")

COLUMN_LABELS: Dict[str, str] = {
    "name": "Wine",
    "producer": "Producer",
    "vintage": "Vintage",
    "type": "Type",
    "country": "Country",
    "region": "Region",
    "appellation": "Appellation",
    "rating": "Rating",
    "band": "Score",
    "tasted_date": "Tasted",
    "notes": "Notes",
}

DEFAULT_VISIBLE: Tuple[str, ...] = (
    "name", "producer", "vintage", "type", "region", "rating", "tasted_date",
)


@dataclass(frozen=True)
class RatingRow:
    id: str
    name: str
    producer: str = ""
    vintage: Optional[int] = None
    type: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    appellation: Optional[str] = None
    rating: Optional[int] = None
    tasted_date: Optional[date] = None
    notes: Optional[str] = None

    @property
    def band(self) -> str:
        return RatingBand.from_score(self.rating).display if self.rating is not None else ""

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'RatingRow':
        """Flatten a `wine_ratings` row with its nested `wine_database` expansion."""
        wine = record.get("wine_database") or {}

        def name_of(relation: str) -> Optional[str]:
            value = wine.get(relation)
            if isinstance(value, list):
                value = value[0] if value else None
            return value.get("name") if isinstance(value, dict) else None

        tasted = record.get("tasting_date")
        if isinstance(tasted, str) and tasted:
            tasted = date.fromisoformat(tasted[:10])

        return cls(
            id=record["id"],
            name=wine.get("name") or "",
            producer=name_of("producers") or "",
            vintage=wine.get("vintage"),
            type=wine.get("wine_type"),
            country=name_of("countries"),
            region=name_of("regions"),
            appellation=name_of("appellations"),
            rating=record.get("rating"),
            tasted_date=tasted or None,
            notes=record.get("tasting_notes"),
        )


@dataclass(frozen=True)
class RatingQuery:
    search: str = ""
    filters: Dict[str, str] = field(default_factory=dict)
    sort_key: SortKey = SortKey.TASTED_DATE
    descending: bool = True


def _epoch(value: Optional[date]) -> float:
    if value is None:
        return 0
    return datetime.combine(value, time.min, tzinfo=timezone.utc).timestamp()


def _sort_value(row: RatingRow, key: SortKey):
    if key is SortKey.TASTED_DATE:
        return _epoch(row.tasted_date)
    value = getattr(row, key.value)
    if key in NUMERIC_SORT_KEYS:
        return value or 0
    return value or ""


def _matches_search(row: RatingRow, term: str) -> bool:
    haystack = (row.name, row.producer, row.region, row.country)
    return any(term in (value or "").lower() for value in haystack)


def _matches_filters(row: RatingRow, filters: Dict[str, str]) -> bool:
    for field_name, wanted in filters.items():
        if wanted in (None, ""):
            continue
        value = getattr(row, field_name)
        if value is None or str(value) != str(wanted):
            return False
    return True


def project(rows: Iterable[RatingRow], query: RatingQuery) -> List[RatingRow]:
    term = query.search.strip().lower()
    selected = [
        row for row in rows
        if (not term or _matches_search(row, term)) and _matches_filters(row, query.filters)
    ]
    # sorted() is stable, and reverse=True keeps equal rows in input order too
    return sorted(
        selected,
        key=lambda row: _sort_value(row, query.sort_key),
        reverse=query.descending,
    )


def distinct_values(rows: Iterable[RatingRow], field_name: str) -> List[str]:
    """Options for a filter dropdown."""
    values = {str(getattr(row, field_name)) for row in rows if getattr(row, field_name) not in (None, "")}
    return sorted(values)


@dataclass(frozen=True)
class ColumnVisibility:
    visible: Tuple[str, ...] = DEFAULT_VISIBLE

    def is_visible(self, column: str) -> bool:
        return column in self.visible

    def toggle(self, column: str) -> 'ColumnVisibility':
        if column not in COLUMN_LABELS:
            raise KeyError(column)
        if column in self.visible:
            return replace(self, visible=tuple(c for c in self.visible if c != column))
        # Keep display order stable regardless of toggle order
        shown = set(self.visible) | {column}
        return replace(self, visible=tuple(c for c in COLUMN_LABELS if c in shown))

    def reset(self) -> 'ColumnVisibility':
        return ColumnVisibility()


def load_visibility(session: MutableMapping, table_key: str) -> ColumnVisibility:
    """Column visibility for one table, kept in the user's session state."""
    return session.get(f"columns_{table_key}") or ColumnVisibility()


def save_visibility(session: MutableMapping, table_key: str, visibility: ColumnVisibility) -> None:
    session[f"columns_{table_key}"] = visibility


def _display_value(row: RatingRow, column: str):
    value = getattr(row, column)
    if column == "type" and value:
        try:
            return WineType(value).label
        except ValueError:
            return value
    return value


def to_frame(rows: Iterable[RatingRow], visibility: ColumnVisibility) -> pd.DataFrame:
    """Render the visible columns only, labelled for display."""
    columns = [c for c in visibility.visible if c in COLUMN_LABELS]
    records = [{COLUMN_LABELS[c]: _display_value(row, c) for c in columns} for row in rows]
    return pd.DataFrame(records, columns=[COLUMN_LABELS[c] for c in columns])
