"""Pydantic schemas for Cellarbook data validation.

Row models mirror what Supabase returns. Write payloads come in two
variants: insert payloads send every column (absent optionals become NULL),
update payloads send only the fields that were explicitly set.
"""

from datetime import date as DateType, datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from cellarbook.constants import (
    FriendshipStatus,
    GrapeType,
    RatingRange,
    Sweetness,
    VintageRange,
    WineBody,
    WineColor,
    WineType,
)


class InsertPayload(BaseModel):
    """Payload for a table insert."""

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class UpdatePayload(BaseModel):
    """Payload for a table update; unset fields are left untouched."""

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


# =======================
# MASTER DATA
# =======================

class Country(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    code: Optional[str] = None


class Region(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    country_id: str


class Appellation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    region_id: str


class GrapeVariety(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    type: str = Field(..., description="red or white")


class Producer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str


class CountryWrite(InsertPayload):
    name: str = Field(..., min_length=1)
    code: Optional[str] = Field(None, max_length=3)


class RegionWrite(InsertPayload):
    name: str = Field(..., min_length=1)
    country_id: str = Field(..., min_length=1)


class AppellationWrite(InsertPayload):
    name: str = Field(..., min_length=1)
    region_id: str = Field(..., min_length=1)


class GrapeVarietyWrite(InsertPayload):
    name: str = Field(..., min_length=1)
    type: GrapeType


# =======================
# CANONICAL WINES
# =======================

class WineInsert(InsertPayload):
    """New canonical wine row."""

    name: str = Field(..., min_length=1)
    producer_id: str
    wine_type: WineType
    vintage: Optional[int] = Field(None, ge=VintageRange.MIN, le=VintageRange.MAX)
    country_id: Optional[str] = None
    region_id: Optional[str] = None
    appellation_id: Optional[str] = None
    image_url: Optional[str] = None
    alcohol_content: Optional[float] = Field(None, ge=0, le=50)
    bottle_size: Optional[str] = None
    cellar_tracker_id: Optional[str] = None


class WineUpdate(UpdatePayload):
    """Partial update of a canonical wine row."""

    name: Optional[str] = Field(None, min_length=1)
    producer_id: Optional[str] = None
    wine_type: Optional[WineType] = None
    vintage: Optional[int] = Field(None, ge=VintageRange.MIN, le=VintageRange.MAX)
    country_id: Optional[str] = None
    region_id: Optional[str] = None
    appellation_id: Optional[str] = None
    image_url: Optional[str] = None
    alcohol_content: Optional[float] = Field(None, ge=0, le=50)
    bottle_size: Optional[str] = None
    cellar_tracker_id: Optional[str] = None


class CompositionRow(InsertPayload):
    wine_id: str
    grape_variety_id: str
    percentage: int = Field(..., ge=0, le=100)


def _relation_name(record: Dict[str, Any], relation: str) -> Optional[str]:
    """Read `name` from a nested PostgREST relation (dict, list or None)."""
    value = record.get(relation)
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        return value.get("name")
    return None


class WineSummary(BaseModel):
    """Canonical wine flattened from a nested `wine_database(...)` expansion."""

    id: str
    name: str
    wine_type: Optional[str] = None
    vintage: Optional[int] = None
    producer: str = ""
    country: Optional[str] = None
    region: Optional[str] = None
    appellation: Optional[str] = None
    image_url: Optional[str] = None
    country_id: Optional[str] = None
    region_id: Optional[str] = None
    appellation_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'WineSummary':
        return cls(
            id=record["id"],
            name=record.get("name") or "",
            wine_type=record.get("wine_type"),
            vintage=record.get("vintage"),
            producer=_relation_name(record, "producers") or "",
            country=_relation_name(record, "countries"),
            region=_relation_name(record, "regions"),
            appellation=_relation_name(record, "appellations"),
            image_url=record.get("image_url"),
            country_id=record.get("country_id"),
            region_id=record.get("region_id"),
            appellation_id=record.get("appellation_id"),
        )


# =======================
# CELLAR & CONSUMPTION
# =======================

class CellarItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    wine_id: str
    quantity: int = Field(..., ge=0)
    purchase_date: Optional[DateType] = None
    purchase_price: Optional[float] = None
    storage_location: Optional[str] = None
    notes: Optional[str] = None
    wine: Optional[WineSummary] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'CellarItem':
        nested = record.get("wine_database")
        wine = WineSummary.from_record(nested) if isinstance(nested, dict) else None
        return cls.model_validate({**record, "wine": wine})


class CellarItemInsert(InsertPayload):
    user_id: str
    wine_id: str
    quantity: int = Field(1, ge=1)
    purchase_date: Optional[DateType] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    storage_location: Optional[str] = None
    notes: Optional[str] = None


class CellarItemUpdate(UpdatePayload):
    quantity: Optional[int] = Field(None, ge=0)
    purchase_date: Optional[DateType] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    storage_location: Optional[str] = None
    notes: Optional[str] = None


class ConsumptionRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    wine_id: str
    quantity: int
    notes: Optional[str] = None
    rating_id: Optional[str] = None
    consumed_at: Optional[datetime] = None
    wine: Optional[WineSummary] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'ConsumptionRecord':
        nested = record.get("wine_database")
        wine = WineSummary.from_record(nested) if isinstance(nested, dict) else None
        return cls.model_validate({**record, "wine": wine})


class ConsumptionInsert(InsertPayload):
    user_id: str
    wine_id: str
    quantity: int = Field(..., ge=1)
    notes: Optional[str] = None
    rating_id: Optional[str] = None
    consumed_at: Optional[datetime] = None

    def to_row(self) -> Dict[str, Any]:
        row = super().to_row()
        # Let the database default fill consumed_at
        if row["consumed_at"] is None:
            del row["consumed_at"]
        return row


# =======================
# RATINGS
# =======================

class TastingNoteFields(BaseModel):
    """Structured tasting descriptors (appearance / aroma / palate)."""

    appearance_clarity: Optional[str] = None
    appearance_intensity: Optional[str] = None
    appearance_color: Optional[str] = None
    appearance_viscosity: Optional[str] = None
    appearance_comments: Optional[str] = None
    aroma_condition: Optional[str] = None
    aroma_intensity: Optional[str] = None
    aroma_primary: Optional[str] = None
    aroma_secondary: Optional[str] = None
    aroma_tertiary: Optional[str] = None
    aroma_comments: Optional[str] = None
    palate_sweetness: Optional[str] = None
    palate_acidity: Optional[str] = None
    palate_tannin: Optional[str] = None
    palate_body: Optional[str] = None
    palate_flavor_primary: Optional[str] = None
    palate_flavor_secondary: Optional[str] = None
    palate_flavor_tertiary: Optional[str] = None
    palate_finish: Optional[str] = None
    palate_complexity: Optional[str] = None
    palate_balance: Optional[str] = None
    palate_comments: Optional[str] = None

    color: Optional[WineColor] = None
    body: Optional[WineBody] = None
    sweetness: Optional[Sweetness] = None
    serving_temp_min: Optional[int] = Field(None, ge=0, le=25)
    serving_temp_max: Optional[int] = Field(None, ge=0, le=25)
    food_pairing: Optional[str] = None
    tasting_notes: Optional[str] = None


class RatingInsert(TastingNoteFields, InsertPayload):
    user_id: str
    wine_id: str
    rating: int = Field(..., ge=RatingRange.MIN, le=RatingRange.MAX)
    tasting_date: Optional[DateType] = None


class RatingUpdate(TastingNoteFields, UpdatePayload):
    rating: Optional[int] = Field(None, ge=RatingRange.MIN, le=RatingRange.MAX)
    tasting_date: Optional[DateType] = None


class Rating(TastingNoteFields):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    wine_id: str
    rating: int
    tasting_date: Optional[DateType] = None
    created_at: Optional[datetime] = None
    wine: Optional[WineSummary] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Rating':
        nested = record.get("wine_database")
        wine = WineSummary.from_record(nested) if isinstance(nested, dict) else None
        return cls.model_validate({**record, "wine": wine})


# =======================
# SOCIAL
# =======================

class Profile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user_id: str
    username: str = ""
    display_name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    birth_year: Optional[int] = None


class ProfileUpsert(InsertPayload):
    user_id: str
    username: str = Field(..., min_length=1)
    display_name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    birth_year: Optional[int] = Field(None, ge=1900, le=2010)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Friendship(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    requester_id: str
    addressee_id: str
    status: FriendshipStatus
    created_at: Optional[datetime] = None
    profile: Optional[Profile] = None

    def other_party(self, user_id: str) -> str:
        return self.addressee_id if self.requester_id == user_id else self.requester_id
