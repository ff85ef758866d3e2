"""
Tests for dialog form validation and payload building.
"""

from dataclasses import replace
from datetime import date, datetime

import pytest

from cellarbook.error_handling import FormValidationError
from cellarbook.forms import (
    CellarEntryForm,
    RatingForm,
    WineForm,
    cellar_insert,
    cellar_update,
    consumed_at,
    rating_insert,
    rating_update,
    validate_cellar_entry,
    validate_rating,
    validate_wine,
    wine_extra,
)
from cellarbook.location import RATING_DIALOG, LocationSelection

VALID_WINE = WineForm(
    name="Tignanello",
    producer="Antinori",
    wine_type="red",
    location=LocationSelection("it", "tuscany", "chianti"),
)


class TestWineForm:
    """Test wine form validation."""

    def test_all_required_fields_reported(self):
        """Every missing required field is listed."""
        with pytest.raises(FormValidationError) as exc_info:
            validate_wine(WineForm())
        assert exc_info.value.fields == ["name", "producer", "country", "wine_type"]

    def test_valid_form_passes(self):
        """A complete form comes back unchanged."""
        assert validate_wine(VALID_WINE) == VALID_WINE

    def test_rating_dialog_drops_appellation(self):
        """The rating dialog has no appellation."""
        cleaned = validate_wine(VALID_WINE, RATING_DIALOG)
        assert cleaned.location == LocationSelection("it", "tuscany")

    def test_existing_wine_skips_checks(self):
        """A picked wine needs no other fields."""
        picked = WineForm(existing_canonical_id="w1")
        assert validate_wine(picked) is picked

    def test_extra_blanks_become_null(self):
        """Blank optional wine fields are sent as NULL."""
        extra = wine_extra(replace(VALID_WINE, vintage=2019, bottle_size=" "))
        assert extra == {
            "vintage": 2019,
            "alcohol_content": None,
            "bottle_size": None,
            "cellar_tracker_id": None,
            "image_url": None,
        }

    def test_from_wine_prefills(self):
        """A stored wine prefills the edit form."""
        wine = {"id": "w1", "name": "Solaia", "wine_type": "red", "vintage": 2018,
                "producers": {"name": "Antinori"}}
        form = WineForm.from_wine(wine, LocationSelection("it"))
        assert (form.name, form.producer, form.vintage, form.existing_canonical_id) == (
            "Solaia", "Antinori", 2018, "w1")


class TestCellarEntryForm:
    """Test cellar entry validation and payloads."""

    def test_quantity_must_be_positive(self):
        """Zero bottles and negative prices are rejected."""
        with pytest.raises(FormValidationError) as exc_info:
            validate_cellar_entry(CellarEntryForm(quantity=0, purchase_price=-1))
        assert exc_info.value.fields == ["quantity", "purchase_price"]

    def test_insert_payload(self):
        """Blank strings become NULL in the insert."""
        form = CellarEntryForm(quantity=3, purchase_date=date(2024, 2, 1), storage_location="", notes="gift")
        row = cellar_insert(form, "u1", "w1").to_row()
        assert row == {
            "user_id": "u1",
            "wine_id": "w1",
            "quantity": 3,
            "purchase_date": "2024-02-01",
            "purchase_price": None,
            "storage_location": None,
            "notes": "gift",
        }

    def test_update_payload(self):
        """Update payloads carry the fields set on the form."""
        row = cellar_update(CellarEntryForm(quantity=2)).to_row()
        assert row["quantity"] == 2
        assert "user_id" not in row


class TestRatingForm:
    """Test rating form validation and payloads."""

    def test_rating_required(self):
        """A rating needs a score."""
        with pytest.raises(FormValidationError) as exc_info:
            validate_rating(RatingForm())
        assert exc_info.value.fields == ["rating"]

    @pytest.mark.parametrize("score", [49, 101])
    def test_rating_range(self, score):
        """Scores outside 50 to 100 are rejected."""
        with pytest.raises(FormValidationError):
            validate_rating(RatingForm(rating=score))

    def test_enum_and_temperature_checks(self):
        """Unknown colors and inverted temperature ranges are rejected."""
        form = RatingForm(rating=90, color="purple", serving_temp_min=18, serving_temp_max=14)
        with pytest.raises(FormValidationError) as exc_info:
            validate_rating(form)
        assert exc_info.value.fields == ["color", "serving_temp_max"]

    def test_insert_payload_with_tasting_fields(self):
        """Tasting fields are trimmed and blanks sent as NULL."""
        form = RatingForm(
            rating=92,
            tasting_date=date(2024, 4, 5),
            tasting_notes="  blackcurrant  ",
            body="full",
            tasting={"aroma_primary": "cassis", "palate_finish": ""},
        )
        row = rating_insert(validate_rating(form), "u1", "w1").to_row()
        assert row["rating"] == 92
        assert row["tasting_date"] == "2024-04-05"
        assert row["tasting_notes"] == "blackcurrant"
        assert row["body"] == "full"
        assert row["aroma_primary"] == "cassis"
        assert row["palate_finish"] is None
        assert row["color"] is None

    def test_update_payload(self):
        """Update payloads carry the fields set on the form."""
        row = rating_update(RatingForm(rating=88, tasting_date=None)).to_row()
        assert row["rating"] == 88
        assert row["tasting_date"] is None

    def test_from_rating_round_trip_fields(self):
        """A stored rating prefills the edit form."""
        record = {"rating": 91, "tasting_date": "2024-01-02", "aroma_primary": "cherry", "body": "medium"}
        form = RatingForm.from_rating(record)
        assert form.tasting_date == date(2024, 1, 2)
        assert form.tasting == {"aroma_primary": "cherry"}

    def test_consumed_at(self):
        """The tasting date becomes a midnight timestamp."""
        assert consumed_at(RatingForm(tasting_date=date(2024, 4, 5))) == datetime(2024, 4, 5)
        assert consumed_at(RatingForm(tasting_date=None)) is None
