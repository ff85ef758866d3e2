"""Supabase repository helpers for cellar line items and consumption history."""

from typing import Any, Optional

from supabase import Client

from cellarbook.constants import WINE_RELATIONS, Tables
from cellarbook.schema import CellarItemInsert, CellarItemUpdate, ConsumptionInsert
from cellarbook.utils import first_row

CELLAR_SELECT = f"*, wine_database ( {WINE_RELATIONS} )"


def repo_list_cellar(sb: Client, user_id: str) -> list[dict[str, Any]]:
    """Return a user's cellar line items, newest first, with wine details."""
    res = (
        sb.table(Tables.CELLAR)
        .select(CELLAR_SELECT)
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return res.data or []


def repo_find_cellar_item(sb: Client, user_id: str, wine_id: str) -> Optional[dict[str, Any]]:
    res = (
        sb.table(Tables.CELLAR)
        .select("id, quantity")
        .eq("user_id", user_id)
        .eq("wine_id", wine_id)
        .limit(1)
        .execute()
    )
    return first_row(res) or None


def repo_insert_cellar_item(sb: Client, payload: CellarItemInsert) -> dict[str, Any]:
    return first_row(sb.table(Tables.CELLAR).insert(payload.to_row()).execute())


def repo_update_cellar_item(sb: Client, item_id: str, payload: CellarItemUpdate) -> dict[str, Any]:
    return first_row(sb.table(Tables.CELLAR).update(payload.to_row()).eq("id", item_id).execute())


def repo_delete_cellar_item(sb: Client, item_id: str) -> None:
    sb.table(Tables.CELLAR).delete().eq("id", item_id).execute()


def repo_list_consumptions(sb: Client, user_id: str) -> list[dict[str, Any]]:
    res = (
        sb.table(Tables.CONSUMPTIONS)
        .select(CELLAR_SELECT)
        .eq("user_id", user_id)
        .order("consumed_at", desc=True)
        .execute()
    )
    return res.data or []


def repo_insert_consumption(sb: Client, payload: ConsumptionInsert) -> dict[str, Any]:
    return first_row(sb.table(Tables.CONSUMPTIONS).insert(payload.to_row()).execute())


def repo_delete_consumption(sb: Client, record_id: str) -> None:
    sb.table(Tables.CONSUMPTIONS).delete().eq("id", record_id).execute()
