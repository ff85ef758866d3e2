"""Shared fixtures: an in-memory Supabase client seeded with master data."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fake_supabase import FakeSupabase  # noqa: E402

from cellarbook.master_data import MasterDataCache  # noqa: E402

USER_ID = "user-1"


def seed_master_data(sb: FakeSupabase) -> None:
    sb.seed(
        "countries",
        {"id": "fr", "name": "France", "code": "FR"},
        {"id": "it", "name": "Italy", "code": "IT"},
    )
    sb.seed(
        "regions",
        {"id": "bordeaux", "name": "Bordeaux", "country_id": "fr"},
        {"id": "burgundy", "name": "Burgundy", "country_id": "fr"},
        {"id": "tuscany", "name": "Tuscany", "country_id": "it"},
    )
    sb.seed(
        "appellations",
        {"id": "margaux", "name": "Margaux", "region_id": "bordeaux"},
        {"id": "pauillac", "name": "Pauillac", "region_id": "bordeaux"},
        {"id": "chianti", "name": "Chianti Classico", "region_id": "tuscany"},
    )
    sb.seed(
        "grape_varieties",
        {"id": "cab", "name": "Cabernet Sauvignon", "type": "red"},
        {"id": "merlot", "name": "Merlot", "type": "red"},
        {"id": "cab-franc", "name": "Cabernet Franc", "type": "red"},
        {"id": "chardonnay", "name": "Chardonnay", "type": "white"},
    )


@pytest.fixture
def sb():
    """Fake client signed in as USER_ID with master data loaded."""
    client = FakeSupabase(user_id=USER_ID)
    seed_master_data(client)
    return client


@pytest.fixture
def cache(sb):
    return MasterDataCache.load(sb)


@pytest.fixture
def wine_row(sb):
    """A canonical wine with producer and full location."""
    sb.seed("producers", {"id": "p-margaux", "name": "Château Margaux"})
    sb.seed("wine_database", {
        "id": "w-margaux",
        "name": "Château Margaux",
        "producer_id": "p-margaux",
        "wine_type": "red",
        "vintage": 2015,
        "country_id": "fr",
        "region_id": "bordeaux",
        "appellation_id": "margaux",
    })
    return sb.rows("wine_database")[-1]
