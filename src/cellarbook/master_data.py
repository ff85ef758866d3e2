"""
Read-only snapshot of the location hierarchy and grape varieties.

A cache is loaded when a dialog opens and dropped when it closes; there is
no cross-dialog sharing and no automatic retry. A failed load leaves every
list empty and records the error so the dialog can still render.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from supabase import Client

from cellarbook import wines_repo
from cellarbook.schema import Appellation, Country, GrapeVariety, Region

logger = logging.getLogger(__name__)


@dataclass
class MasterDataCache:
    countries: List[Country] = field(default_factory=list)
    regions: List[Region] = field(default_factory=list)
    appellations: List[Appellation] = field(default_factory=list)
    grape_varieties: List[GrapeVariety] = field(default_factory=list)
    load_error: Optional[str] = None

    def __post_init__(self):
        self._countries_by_id: Dict[str, Country] = {c.id: c for c in self.countries}
        self._regions_by_id: Dict[str, Region] = {r.id: r for r in self.regions}
        self._appellations_by_id: Dict[str, Appellation] = {a.id: a for a in self.appellations}
        self._varieties_by_id: Dict[str, GrapeVariety] = {g.id: g for g in self.grape_varieties}

    @classmethod
    def load(cls, sb: Client) -> 'MasterDataCache':
        """Fetch all four lists; on any failure return an empty cache."""
        try:
            return cls(
                countries=[Country.model_validate(r) for r in wines_repo.repo_list_countries(sb)],
                regions=[Region.model_validate(r) for r in wines_repo.repo_list_regions(sb)],
                appellations=[Appellation.model_validate(r) for r in wines_repo.repo_list_appellations(sb)],
                grape_varieties=[GrapeVariety.model_validate(r) for r in wines_repo.repo_list_grape_varieties(sb)],
            )
        except Exception as e:
            logger.error(f"Failed to load master data: {type(e).__name__} - {e}")
            return cls(load_error="Failed to load master data")

    @property
    def loaded(self) -> bool:
        return self.load_error is None

    # Lookups

    def country(self, country_id: Optional[str]) -> Optional[Country]:
        return self._countries_by_id.get(country_id) if country_id else None

    def region(self, region_id: Optional[str]) -> Optional[Region]:
        return self._regions_by_id.get(region_id) if region_id else None

    def appellation(self, appellation_id: Optional[str]) -> Optional[Appellation]:
        return self._appellations_by_id.get(appellation_id) if appellation_id else None

    def grape_variety(self, variety_id: Optional[str]) -> Optional[GrapeVariety]:
        return self._varieties_by_id.get(variety_id) if variety_id else None

    def regions_for_country(self, country_id: Optional[str]) -> List[Region]:
        if not country_id:
            return []
        return [r for r in self.regions if r.country_id == country_id]

    def appellations_for_region(self, region_id: Optional[str]) -> List[Appellation]:
        if not region_id:
            return []
        return [a for a in self.appellations if a.region_id == region_id]

    def find_orphans(self) -> Dict[str, List[str]]:
        """Names of regions and appellations whose parent row is missing."""
        return {
            "regions": [r.name for r in self.regions if r.country_id not in self._countries_by_id],
            "appellations": [a.name for a in self.appellations if a.region_id not in self._regions_by_id],
        }
