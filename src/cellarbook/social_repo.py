"""Supabase repository helpers for profiles, friendships and roles."""

import re
from typing import Any, Optional

from supabase import Client

from cellarbook.config import USER_SEARCH_LIMIT
from cellarbook.constants import FriendshipStatus, Tables
from cellarbook.schema import ProfileUpsert
from cellarbook.utils import escape_like, first_row

PROFILE_COLUMNS = "user_id, username, display_name, bio, location, avatar_url, birth_year"


# =======================
# PROFILES
# =======================

def repo_get_profile(sb: Client, user_id: str) -> Optional[dict[str, Any]]:
    res = sb.table(Tables.PROFILES).select(PROFILE_COLUMNS).eq("user_id", user_id).limit(1).execute()
    return first_row(res) or None


def repo_upsert_profile(sb: Client, payload: ProfileUpsert) -> dict[str, Any]:
    return first_row(
        sb.table(Tables.PROFILES).upsert(payload.to_row(), on_conflict="user_id").execute()
    )


def repo_profiles_by_ids(sb: Client, user_ids: list[str]) -> list[dict[str, Any]]:
    if not user_ids:
        return []
    res = sb.table(Tables.PROFILES).select(PROFILE_COLUMNS).in_("user_id", user_ids).execute()
    return res.data or []


def repo_search_profiles(sb: Client, term: str, exclude_user_id: str) -> list[dict[str, Any]]:
    """Profiles whose username or display name contains `term`."""
    # Commas and parentheses are filter syntax inside or_()
    pattern = escape_like(re.sub(r"[,()]", " ", term).strip())
    res = (
        sb.table(Tables.PROFILES)
        .select(PROFILE_COLUMNS)
        .or_(f"username.ilike.%{pattern}%,display_name.ilike.%{pattern}%")
        .neq("user_id", exclude_user_id)
        .limit(USER_SEARCH_LIMIT)
        .execute()
    )
    return res.data or []


# =======================
# FRIENDSHIPS
# =======================

def repo_list_friendships(sb: Client, user_id: str) -> list[dict[str, Any]]:
    res = (
        sb.table(Tables.FRIENDSHIPS)
        .select("*")
        .or_(f"requester_id.eq.{user_id},addressee_id.eq.{user_id}")
        .execute()
    )
    return res.data or []


def repo_insert_friendship(sb: Client, requester_id: str, addressee_id: str) -> dict[str, Any]:
    row = {
        "requester_id": requester_id,
        "addressee_id": addressee_id,
        "status": FriendshipStatus.PENDING.value,
    }
    return first_row(sb.table(Tables.FRIENDSHIPS).insert(row).execute())


def repo_update_friendship_status(sb: Client, friendship_id: str, status: FriendshipStatus) -> None:
    sb.table(Tables.FRIENDSHIPS).update({"status": status.value}).eq("id", friendship_id).execute()


def repo_delete_friendship(sb: Client, friendship_id: str) -> None:
    sb.table(Tables.FRIENDSHIPS).delete().eq("id", friendship_id).execute()


# =======================
# ROLES
# =======================

def repo_list_roles(sb: Client, user_id: str) -> list[str]:
    res = sb.table(Tables.USER_ROLES).select("role").eq("user_id", user_id).execute()
    return [row["role"] for row in (res.data or [])]
