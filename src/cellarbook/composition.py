"""
Grape composition editor.

Adding or removing a variety resets every entry to an even floor(100 / n)
split, so a three-grape blend starts at 33/33/33. Manual edits change one
entry only and are never normalized; the total is for display.
"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Tuple

from cellarbook.error_handling import FormValidationError
from cellarbook.master_data import MasterDataCache
from cellarbook.schema import CompositionRow


@dataclass(frozen=True)
class CompositionEntry:
    grape_variety_id: str
    percentage: int


Composition = Tuple[CompositionEntry, ...]


def _rebalance(entries: List[CompositionEntry]) -> Composition:
    if not entries:
        return ()
    share = 100 // len(entries)
    return tuple(replace(e, percentage=share) for e in entries)


def add(state: Composition, cache: MasterDataCache, variety_id: str) -> Composition:
    """Append a variety and rebalance; unknown or duplicate ids are ignored."""
    if cache.grape_variety(variety_id) is None:
        return state
    if any(e.grape_variety_id == variety_id for e in state):
        return state
    return _rebalance(list(state) + [CompositionEntry(variety_id, 0)])


def remove(state: Composition, variety_id: str) -> Composition:
    remaining = [e for e in state if e.grape_variety_id != variety_id]
    if len(remaining) == len(state):
        return state
    return _rebalance(remaining)


def set_percentage(state: Composition, variety_id: str, value: int) -> Composition:
    if not 0 <= value <= 100:
        raise FormValidationError("Percentage must be between 0 and 100", fields=["percentage"])
    return tuple(
        replace(e, percentage=value) if e.grape_variety_id == variety_id else e
        for e in state
    )


def total(state: Composition) -> int:
    return sum(e.percentage for e in state)


def from_variety_ids(variety_ids: Iterable[str], cache: MasterDataCache) -> Composition:
    """Seed an editor from stored variety ids with an even split."""
    state: Composition = ()
    for variety_id in variety_ids:
        state = add(state, cache, variety_id)
    return state


def to_rows(state: Composition, wine_id: str) -> List[CompositionRow]:
    return [
        CompositionRow(wine_id=wine_id, grape_variety_id=e.grape_variety_id, percentage=e.percentage)
        for e in state
    ]
