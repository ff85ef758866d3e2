"""
Cascading country → region → appellation selection.

The selection is an immutable value; each `select_*` function returns a new
one. Choosing a deeper level pulls its ancestors into agreement, choosing a
shallower level drops descendants that no longer belong, and choosing None
clears that level and everything below it.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional

from cellarbook.error_handling import FormValidationError
from cellarbook.master_data import MasterDataCache
from cellarbook.schema import Appellation, Country, Region

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationConfig:
    """Per-dialog differences in the location picker."""
    country_required: bool = True
    appellation_enabled: bool = True


# The rating dialog only asks for country and region
WINE_DIALOG = LocationConfig()
RATING_DIALOG = LocationConfig(appellation_enabled=False)


@dataclass(frozen=True)
class LocationSelection:
    country_id: Optional[str] = None
    region_id: Optional[str] = None
    appellation_id: Optional[str] = None

    @classmethod
    def from_ids(cls, cache: MasterDataCache, country_id=None, region_id=None,
                 appellation_id=None) -> 'LocationSelection':
        """Rebuild a selection for an existing wine, deepest level winning."""
        state = cls()
        if appellation_id and cache.appellation(appellation_id):
            return select_appellation(state, cache, appellation_id)
        if region_id and cache.region(region_id):
            return select_region(state, cache, region_id)
        return select_country(state, cache, country_id)


def select_country(state: LocationSelection, cache: MasterDataCache,
                   country_id: Optional[str]) -> LocationSelection:
    if country_id is None:
        return LocationSelection()

    region_id = state.region_id
    region = cache.region(region_id)
    if region is None or region.country_id != country_id:
        region_id = None

    appellation_id = state.appellation_id
    appellation = cache.appellation(appellation_id)
    if region_id is None or appellation is None or appellation.region_id != region_id:
        appellation_id = None

    return LocationSelection(country_id, region_id, appellation_id)


def select_region(state: LocationSelection, cache: MasterDataCache,
                  region_id: Optional[str]) -> LocationSelection:
    if region_id is None:
        return replace(state, region_id=None, appellation_id=None)

    region = cache.region(region_id)
    if region is None:
        logger.warning(f"Unknown region id {region_id}, selection unchanged")
        return state

    appellation_id = state.appellation_id
    appellation = cache.appellation(appellation_id)
    if appellation is None or appellation.region_id != region_id:
        appellation_id = None

    return LocationSelection(region.country_id, region_id, appellation_id)


def select_appellation(state: LocationSelection, cache: MasterDataCache,
                       appellation_id: Optional[str]) -> LocationSelection:
    if appellation_id is None:
        return replace(state, appellation_id=None)

    appellation = cache.appellation(appellation_id)
    region = cache.region(appellation.region_id) if appellation else None
    if appellation is None or region is None:
        logger.warning(f"Unknown appellation id {appellation_id}, selection unchanged")
        return state

    return LocationSelection(region.country_id, region.id, appellation.id)


# Option lists

def country_options(cache: MasterDataCache) -> List[Country]:
    return list(cache.countries)


def region_options(state: LocationSelection, cache: MasterDataCache) -> List[Region]:
    return cache.regions_for_country(state.country_id)


def appellation_options(state: LocationSelection, cache: MasterDataCache,
                        config: LocationConfig = WINE_DIALOG) -> List[Appellation]:
    if not config.appellation_enabled:
        return []
    return cache.appellations_for_region(state.region_id)


def validate(state: LocationSelection, config: LocationConfig = WINE_DIALOG) -> LocationSelection:
    """Check the selection can be saved; returns it with disabled levels cleared."""
    if config.country_required and not state.country_id:
        raise FormValidationError("Country is required", fields=["country"])
    if not config.appellation_enabled:
        return replace(state, appellation_id=None)
    return state
