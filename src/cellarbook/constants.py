"""
Cellarbook Constants and Enums

Centralized constants, enums, and magic values to eliminate string duplication
and improve type safety.
"""

from enum import Enum
from typing import List


# =======================
# WINE ATTRIBUTE ENUMS
# =======================

class WineType(str, Enum):
    """Wine type categories (database enum `wine_type`)."""
    RED = "red"
    WHITE = "white"
    ROSE = "rose"
    SPARKLING = "sparkling"
    DESSERT = "dessert"
    FORTIFIED = "fortified"

    @property
    def label(self) -> str:
        return "Rosé" if self is WineType.ROSE else self.value.title()


class WineColor(str, Enum):
    """Color intensity (database enum `wine_color`)."""
    LIGHT = "light"
    MEDIUM = "medium"
    DEEP = "deep"


class WineBody(str, Enum):
    """Body weight (database enum `wine_body`)."""
    LIGHT = "light"
    MEDIUM = "medium"
    FULL = "full"


class Sweetness(str, Enum):
    """Sweetness levels (database enum `wine_sweetness`)."""
    BONE_DRY = "bone_dry"
    DRY = "dry"
    OFF_DRY = "off_dry"
    MEDIUM_SWEET = "medium_sweet"
    SWEET = "sweet"


class GrapeType(str, Enum):
    """Grape variety skin colour."""
    RED = "red"
    WHITE = "white"


class AppRole(str, Enum):
    """Application roles (database enum `app_role`)."""
    OWNER = "owner"
    ADMIN = "admin"
    USER = "user"


class FriendshipStatus(str, Enum):
    """Friend request lifecycle."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class RatingBand(Enum):
    """Robert Parker 100-point bands with labels and lower bounds."""
    EXTRAORDINARY = ("Extraordinary", 96)
    OUTSTANDING = ("Outstanding", 94)
    EXCELLENT = ("Excellent", 90)
    VERY_GOOD = ("Very Good", 85)
    GOOD = ("Good", 80)
    AVERAGE = ("Average", 70)
    BELOW_AVERAGE = ("Below Average", 0)

    def __init__(self, display: str, threshold: int):
        self.display = display
        self.threshold = threshold

    @classmethod
    def from_score(cls, rating: int) -> 'RatingBand':
        """Get the band a rating falls into."""
        for band in cls:
            if rating >= band.threshold:
                return band
        return cls.BELOW_AVERAGE


# =======================
# TABLE NAME CONSTANTS
# =======================

class Tables:
    """Supabase table names to avoid string hardcoding."""

    COUNTRIES = "countries"
    REGIONS = "regions"
    APPELLATIONS = "appellations"
    GRAPE_VARIETIES = "grape_varieties"
    PRODUCERS = "producers"
    WINES = "wine_database"
    WINE_COMPOSITION = "wine_grape_composition"
    CELLAR = "wine_cellar"
    CONSUMPTIONS = "wine_consumptions"
    RATINGS = "wine_ratings"
    PROFILES = "profiles"
    FRIENDSHIPS = "user_friendships"
    USER_ROLES = "user_roles"


# Canonical wine columns plus relation names, for display and edit prefill
WINE_RELATIONS = (
    "id, name, vintage, wine_type, image_url, producer_id, "
    "alcohol_content, bottle_size, cellar_tracker_id, "
    "country_id, region_id, appellation_id, "
    "producers ( name ), countries ( name ), regions ( name ), appellations ( name )"
)


# =======================
# RATING FIELD CONSTANTS
# =======================

class TastingFields:
    """Structured tasting-note columns on `wine_ratings`."""

    APPEARANCE = [
        "appearance_clarity",
        "appearance_intensity",
        "appearance_color",
        "appearance_viscosity",
        "appearance_comments",
    ]
    AROMA = [
        "aroma_condition",
        "aroma_intensity",
        "aroma_primary",
        "aroma_secondary",
        "aroma_tertiary",
        "aroma_comments",
    ]
    PALATE = [
        "palate_sweetness",
        "palate_acidity",
        "palate_tannin",
        "palate_body",
        "palate_flavor_primary",
        "palate_flavor_secondary",
        "palate_flavor_tertiary",
        "palate_finish",
        "palate_complexity",
        "palate_balance",
        "palate_comments",
    ]

    @classmethod
    def all(cls) -> List[str]:
        return cls.APPEARANCE + cls.AROMA + cls.PALATE


class RatingRange:
    """Valid range for a 100-point rating."""

    MIN = 50
    MAX = 100


class VintageRange:
    """Accepted vintage years."""

    MIN = 1800
    MAX = 2030
