"""Cellar summary statistics."""

import math
from dataclasses import dataclass, field
from typing import Iterable, List

import pandas as pd

from cellarbook.config import BOTTLE_VOLUME_LITERS
from cellarbook.schema import CellarItem


@dataclass
class TypeShare:
    wine_type: str
    count: int
    percentage: int


@dataclass
class CellarStats:
    total_bottles: int = 0
    total_value: float = 0.0
    total_liters: float = 0.0
    by_type: List[TypeShare] = field(default_factory=list)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def cellar_frame(items: Iterable[CellarItem]) -> pd.DataFrame:
    rows = [
        {
            "wine_type": item.wine.wine_type if item.wine and item.wine.wine_type else "unknown",
            "quantity": item.quantity,
            "purchase_price": item.purchase_price or 0.0,
        }
        for item in items
    ]
    return pd.DataFrame(rows, columns=["wine_type", "quantity", "purchase_price"])


def compute_stats(items: Iterable[CellarItem]) -> CellarStats:
    """Bottle count, value (price x quantity), volume and share per wine type."""
    df = cellar_frame(items)
    if df.empty:
        return CellarStats()

    total_bottles = int(df["quantity"].sum())
    total_value = float((df["purchase_price"] * df["quantity"]).sum())

    by_type = []
    if total_bottles > 0:
        counts = df.groupby("wine_type", sort=False)["quantity"].sum()
        by_type = [
            TypeShare(wine_type, int(count), _round_half_up(count / total_bottles * 100))
            for wine_type, count in counts.items()
        ]

    return CellarStats(
        total_bottles=total_bottles,
        total_value=total_value,
        total_liters=total_bottles * BOTTLE_VOLUME_LITERS,
        by_type=by_type,
    )
