"""Supabase repository helpers for tasting ratings."""

from typing import Any

from supabase import Client

from cellarbook.config import FRIEND_RATINGS_LIMIT
from cellarbook.constants import WINE_RELATIONS, Tables
from cellarbook.schema import RatingInsert, RatingUpdate
from cellarbook.utils import first_row

RATING_SELECT = f"*, wine_database ( {WINE_RELATIONS} )"


def repo_list_ratings(sb: Client, user_id: str) -> list[dict[str, Any]]:
    res = (
        sb.table(Tables.RATINGS)
        .select(RATING_SELECT)
        .eq("user_id", user_id)
        .order("tasting_date", desc=True)
        .execute()
    )
    return res.data or []


def repo_insert_rating(sb: Client, payload: RatingInsert) -> dict[str, Any]:
    return first_row(sb.table(Tables.RATINGS).insert(payload.to_row()).execute())


def repo_update_rating(sb: Client, rating_id: str, payload: RatingUpdate) -> dict[str, Any]:
    return first_row(sb.table(Tables.RATINGS).update(payload.to_row()).eq("id", rating_id).execute())


def repo_delete_rating(sb: Client, rating_id: str) -> None:
    sb.table(Tables.RATINGS).delete().eq("id", rating_id).execute()


def repo_list_friend_ratings(sb: Client, user_id: str) -> list[dict[str, Any]]:
    """Latest ratings visible to the user that are not their own.

    Row-level security limits visibility to accepted friends.
    """
    res = (
        sb.table(Tables.RATINGS)
        .select(RATING_SELECT)
        .neq("user_id", user_id)
        .order("created_at", desc=True)
        .limit(FRIEND_RATINGS_LIMIT)
        .execute()
    )
    return res.data or []
