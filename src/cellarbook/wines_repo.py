"""Supabase repository helpers for canonical wines, producers and master data."""

from typing import Any, Optional

import pandas as pd
from supabase import Client

from cellarbook.config import PRODUCER_PAGE_SIZE
from cellarbook.constants import WINE_RELATIONS, Tables
from cellarbook.schema import CompositionRow, WineInsert, WineUpdate
from cellarbook.utils import escape_like, first_row


# =======================
# MASTER DATA
# =======================

def repo_list_countries(sb: Client) -> list[dict[str, Any]]:
    res = sb.table(Tables.COUNTRIES).select("id, name, code").order("name").execute()
    return res.data or []


def repo_list_regions(sb: Client) -> list[dict[str, Any]]:
    res = sb.table(Tables.REGIONS).select("id, name, country_id").order("name").execute()
    return res.data or []


def repo_list_appellations(sb: Client) -> list[dict[str, Any]]:
    res = sb.table(Tables.APPELLATIONS).select("id, name, region_id").order("name").execute()
    return res.data or []


def repo_list_grape_varieties(sb: Client) -> list[dict[str, Any]]:
    res = sb.table(Tables.GRAPE_VARIETIES).select("id, name, type").order("name").execute()
    return res.data or []


# =======================
# PRODUCERS
# =======================

def repo_find_producer(sb: Client, name: str) -> Optional[dict[str, Any]]:
    """Case-insensitive exact match on producer name."""
    res = (
        sb.table(Tables.PRODUCERS)
        .select("id, name")
        .ilike("name", escape_like(name))
        .limit(1)
        .execute()
    )
    return first_row(res) or None


def repo_create_producer(sb: Client, name: str) -> dict[str, Any]:
    return first_row(sb.table(Tables.PRODUCERS).insert({"name": name}).execute())


def repo_search_producers(sb: Client, term: str = "", page: int = 0) -> tuple[list[dict[str, Any]], int]:
    """Return one page of producers matching `term`, plus the total match count."""
    query = sb.table(Tables.PRODUCERS).select("id, name", count="exact")
    if term.strip():
        query = query.ilike("name", f"%{escape_like(term.strip())}%")
    start = page * PRODUCER_PAGE_SIZE
    res = query.order("name").range(start, start + PRODUCER_PAGE_SIZE - 1).execute()
    return res.data or [], res.count or 0


# =======================
# CANONICAL WINES
# =======================

def repo_insert_wine(sb: Client, payload: WineInsert) -> dict[str, Any]:
    return first_row(sb.table(Tables.WINES).insert(payload.to_row()).execute())


def repo_update_wine(sb: Client, wine_id: str, payload: WineUpdate) -> dict[str, Any]:
    return first_row(sb.table(Tables.WINES).update(payload.to_row()).eq("id", wine_id).execute())


def repo_get_wine(sb: Client, wine_id: str) -> Optional[dict[str, Any]]:
    res = sb.table(Tables.WINES).select(WINE_RELATIONS).eq("id", wine_id).limit(1).execute()
    return first_row(res) or None


def repo_list_wines(sb: Client, order_by: str = "name", descending: bool = False) -> pd.DataFrame:
    """Return all canonical wines with their producer and location names."""
    res = (
        sb.table(Tables.WINES)
        .select(WINE_RELATIONS)
        .order(order_by, desc=descending)
        .execute()
    )
    return pd.DataFrame(res.data or [])


def repo_delete_wine(sb: Client, wine_id: str) -> None:
    sb.table(Tables.WINE_COMPOSITION).delete().eq("wine_id", wine_id).execute()
    sb.table(Tables.WINES).delete().eq("id", wine_id).execute()


# =======================
# GRAPE COMPOSITION
# =======================

def repo_get_composition(sb: Client, wine_id: str) -> list[dict[str, Any]]:
    res = (
        sb.table(Tables.WINE_COMPOSITION)
        .select("grape_variety_id, percentage")
        .eq("wine_id", wine_id)
        .execute()
    )
    return res.data or []


def repo_insert_composition(sb: Client, rows: list[CompositionRow]) -> None:
    if rows:
        sb.table(Tables.WINE_COMPOSITION).insert([row.to_row() for row in rows]).execute()


def repo_replace_composition(sb: Client, wine_id: str, rows: list[CompositionRow]) -> None:
    sb.table(Tables.WINE_COMPOSITION).delete().eq("wine_id", wine_id).execute()
    repo_insert_composition(sb, rows)


# =======================
# ADMINISTRATION
# =======================

def repo_list_table(sb: Client, table: str, order_by: str = "name", descending: bool = False) -> list[dict[str, Any]]:
    res = sb.table(table).select("*").order(order_by, desc=descending).execute()
    return res.data or []


def repo_insert_row(sb: Client, table: str, row: dict[str, Any]) -> dict[str, Any]:
    return first_row(sb.table(table).insert(row).execute())


def repo_update_row(sb: Client, table: str, row_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    return first_row(sb.table(table).update(changes).eq("id", row_id).execute())


def repo_delete_row(sb: Client, table: str, row_id: str) -> None:
    sb.table(table).delete().eq("id", row_id).execute()


def repo_rows_referencing(sb: Client, table: str, column: str, value: str,
                          columns: str = "id") -> list[dict[str, Any]]:
    """Rows of `table` whose `column` points at `value`."""
    res = sb.table(table).select(columns).eq(column, value).execute()
    return res.data or []
