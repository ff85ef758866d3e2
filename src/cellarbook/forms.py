"""
Per-dialog form state.

Each form is an immutable value; the UI replaces it with `dataclasses.replace`
or the location/composition reducers as the user types. `validate_*`
functions run before any network call and raise FormValidationError naming
every offending field.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Any, Dict, Optional

from pydantic import ValidationError

from cellarbook.composition import Composition
from cellarbook.constants import RatingRange, Sweetness, TastingFields, WineBody, WineColor, WineType
from cellarbook.error_handling import FormValidationError
from cellarbook.location import WINE_DIALOG, LocationConfig, LocationSelection, validate as validate_location
from cellarbook.schema import (
    CellarItem,
    CellarItemInsert,
    CellarItemUpdate,
    RatingInsert,
    RatingUpdate,
    WineUpdate,
)
from cellarbook.utils import blank_to_none, sanitize_text_input

logger = logging.getLogger(__name__)


def _invalid(message: str, fields) -> FormValidationError:
    logger.warning(f"{message}: {list(fields)}")
    return FormValidationError(message, fields=fields)


def _pydantic_fields(error: ValidationError):
    return [str(err["loc"][0]) for err in error.errors() if err.get("loc")]


# =======================
# WINE
# =======================

@dataclass(frozen=True)
class WineForm:
    name: str = ""
    producer: str = ""
    wine_type: str = ""
    vintage: Optional[int] = None
    alcohol_content: Optional[float] = None
    bottle_size: str = ""
    cellar_tracker_id: str = ""
    image_url: Optional[str] = None
    location: LocationSelection = LocationSelection()
    composition: Composition = ()
    existing_canonical_id: Optional[str] = None

    @classmethod
    def from_wine(cls, wine: Dict[str, Any], location: LocationSelection,
                  composition: Composition = ()) -> 'WineForm':
        """Prefill from a `wine_database` row expanded with WINE_RELATIONS."""
        producer = wine.get("producers") or {}
        return cls(
            name=wine.get("name") or "",
            producer=producer.get("name", "") if isinstance(producer, dict) else "",
            wine_type=wine.get("wine_type") or "",
            vintage=wine.get("vintage"),
            alcohol_content=wine.get("alcohol_content"),
            bottle_size=wine.get("bottle_size") or "",
            cellar_tracker_id=wine.get("cellar_tracker_id") or "",
            image_url=wine.get("image_url"),
            location=location,
            composition=composition,
            existing_canonical_id=wine.get("id"),
        )


def validate_wine(form: WineForm, config: LocationConfig = WINE_DIALOG) -> WineForm:
    """Check required fields; returns the form with a cleaned location."""
    if form.existing_canonical_id:
        return form

    missing = []
    if not form.name.strip():
        missing.append("name")
    if not form.producer.strip():
        missing.append("producer")
    if config.country_required and not form.location.country_id:
        missing.append("country")
    if form.wine_type not in {t.value for t in WineType}:
        missing.append("wine_type")
    if missing:
        raise _invalid("Please fill in all required fields", missing)

    return replace(form, location=validate_location(form.location, config))


def wine_extra(form: WineForm) -> Dict[str, Any]:
    """Optional canonical wine columns passed through the identity resolver."""
    return {
        "vintage": form.vintage,
        "alcohol_content": form.alcohol_content,
        "bottle_size": blank_to_none(form.bottle_size),
        "cellar_tracker_id": blank_to_none(form.cellar_tracker_id),
        "image_url": form.image_url,
    }


def wine_update(form: WineForm, producer_id: str) -> WineUpdate:
    try:
        return WineUpdate(
            name=form.name.strip(),
            producer_id=producer_id,
            wine_type=form.wine_type,
            country_id=form.location.country_id,
            region_id=form.location.region_id,
            appellation_id=form.location.appellation_id,
            **wine_extra(form),
        )
    except ValidationError as e:
        raise _invalid("Invalid wine details", _pydantic_fields(e)) from e


# =======================
# CELLAR ENTRY
# =======================

@dataclass(frozen=True)
class CellarEntryForm:
    quantity: int = 1
    purchase_date: Optional[date] = None
    purchase_price: Optional[float] = None
    storage_location: str = ""
    notes: str = ""

    @classmethod
    def from_item(cls, item: CellarItem) -> 'CellarEntryForm':
        return cls(
            quantity=item.quantity,
            purchase_date=item.purchase_date,
            purchase_price=item.purchase_price,
            storage_location=item.storage_location or "",
            notes=item.notes or "",
        )


def validate_cellar_entry(form: CellarEntryForm) -> CellarEntryForm:
    invalid = []
    if form.quantity is None or form.quantity < 1:
        invalid.append("quantity")
    if form.purchase_price is not None and form.purchase_price < 0:
        invalid.append("purchase_price")
    if invalid:
        raise _invalid("Please check the cellar details", invalid)
    return form


def cellar_insert(form: CellarEntryForm, user_id: str, wine_id: str) -> CellarItemInsert:
    return CellarItemInsert(
        user_id=user_id,
        wine_id=wine_id,
        quantity=form.quantity,
        purchase_date=form.purchase_date,
        purchase_price=form.purchase_price,
        storage_location=blank_to_none(form.storage_location),
        notes=blank_to_none(sanitize_text_input(form.notes)),
    )


def cellar_update(form: CellarEntryForm) -> CellarItemUpdate:
    return CellarItemUpdate(
        quantity=form.quantity,
        purchase_date=form.purchase_date,
        purchase_price=form.purchase_price,
        storage_location=blank_to_none(form.storage_location),
        notes=blank_to_none(sanitize_text_input(form.notes)),
    )


# =======================
# RATING
# =======================

@dataclass(frozen=True)
class RatingForm:
    rating: Optional[int] = None
    tasting_date: Optional[date] = field(default_factory=date.today)
    tasting_notes: str = ""
    food_pairing: str = ""
    color: Optional[str] = None
    body: Optional[str] = None
    sweetness: Optional[str] = None
    serving_temp_min: Optional[int] = None
    serving_temp_max: Optional[int] = None
    tasting: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_rating(cls, record: Dict[str, Any]) -> 'RatingForm':
        tasted = record.get("tasting_date")
        if isinstance(tasted, str) and tasted:
            tasted = date.fromisoformat(tasted[:10])
        return cls(
            rating=record.get("rating"),
            tasting_date=tasted or None,
            tasting_notes=record.get("tasting_notes") or "",
            food_pairing=record.get("food_pairing") or "",
            color=record.get("color"),
            body=record.get("body"),
            sweetness=record.get("sweetness"),
            serving_temp_min=record.get("serving_temp_min"),
            serving_temp_max=record.get("serving_temp_max"),
            tasting={f: record[f] for f in TastingFields.all() if record.get(f)},
        )


def validate_rating(form: RatingForm) -> RatingForm:
    invalid = []
    if form.rating is None or not RatingRange.MIN <= form.rating <= RatingRange.MAX:
        invalid.append("rating")
    for name, enum in (("color", WineColor), ("body", WineBody), ("sweetness", Sweetness)):
        value = getattr(form, name)
        if value and value not in {member.value for member in enum}:
            invalid.append(name)
    if (form.serving_temp_min is not None and form.serving_temp_max is not None
            and form.serving_temp_min > form.serving_temp_max):
        invalid.append("serving_temp_max")
    if invalid:
        raise _invalid("Please check the rating details", invalid)
    return form


def _rating_values(form: RatingForm) -> Dict[str, Any]:
    values = {
        "rating": form.rating,
        "tasting_date": form.tasting_date,
        "tasting_notes": blank_to_none(sanitize_text_input(form.tasting_notes)),
        "food_pairing": blank_to_none(form.food_pairing),
        "color": form.color or None,
        "body": form.body or None,
        "sweetness": form.sweetness or None,
        "serving_temp_min": form.serving_temp_min,
        "serving_temp_max": form.serving_temp_max,
    }
    values.update({k: blank_to_none(v) for k, v in form.tasting.items()})
    return values


def rating_insert(form: RatingForm, user_id: str, wine_id: str) -> RatingInsert:
    try:
        return RatingInsert(user_id=user_id, wine_id=wine_id, **_rating_values(form))
    except ValidationError as e:
        raise _invalid("Invalid rating details", _pydantic_fields(e)) from e


def rating_update(form: RatingForm) -> RatingUpdate:
    try:
        return RatingUpdate(**_rating_values(form))
    except ValidationError as e:
        raise _invalid("Invalid rating details", _pydantic_fields(e)) from e


def consumed_at(form: RatingForm) -> Optional[datetime]:
    """Consumption timestamp for a wine rated outside the cellar."""
    if form.tasting_date is None:
        return None
    return datetime.combine(form.tasting_date, time.min)
