"""Cellarbook - a personal wine cellar, tasting journal and friends' cellars on Supabase."""

from cellarbook.composition import CompositionEntry
from cellarbook.identity import WineIdentityResolver
from cellarbook.ledger import CellarLedger, ConsumptionPrompt
from cellarbook.location import LocationConfig, LocationSelection
from cellarbook.master_data import MasterDataCache

__version__ = "0.1.0"

__all__ = [
    'CellarLedger',
    'CompositionEntry',
    'ConsumptionPrompt',
    'LocationConfig',
    'LocationSelection',
    'MasterDataCache',
    'WineIdentityResolver',
    '__version__',
]
