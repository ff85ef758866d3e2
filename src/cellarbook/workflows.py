"""
Dialog submit handlers.

Each workflow validates its forms first, then performs its writes in order.
Nothing is rolled back: a failure part-way leaves the earlier writes in place
and surfaces the BackendError of the step that failed.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, MutableMapping, Optional, Tuple, TypeVar

from supabase import Client

from cellarbook import cellar_repo, composition as grapes, ratings_repo, wines_repo
from cellarbook.error_handling import CellarError, backend_call
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
    wine_update,
)
from cellarbook.identity import WineIdentityResolver
from cellarbook.ledger import CellarLedger, ConsumptionPrompt
from cellarbook.location import RATING_DIALOG, WINE_DIALOG
from cellarbook.notifications import Notifier
from cellarbook.schema import CellarItem, ConsumptionInsert

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_action(notifier: Notifier, action: Callable[[], T], success_message: str) -> Optional[T]:
    """Run a submit handler, reporting the outcome through the notifier.

    Returns the handler's result, or None if it raised a CellarError.
    """
    try:
        result = action()
    except CellarError as e:
        notifier.error(str(e))
        return None
    notifier.success(success_message)
    return result


def run_decrement(notifier: Notifier, ledger: CellarLedger, item: CellarItem) -> Optional[ConsumptionPrompt]:
    """Remove one bottle. At the last bottle nothing is written and the prompt is returned."""
    try:
        result = ledger.decrement(item)
    except CellarError as e:
        notifier.error(str(e))
        return None
    if isinstance(result, ConsumptionPrompt):
        return result
    notifier.success("Quantity updated")
    return None


class CellarWorkflows:
    def __init__(self, sb: Client, user_id: str):
        self.sb = sb
        self.user_id = user_id
        self.resolver = WineIdentityResolver(sb)

    def _resolve(self, form: WineForm) -> str:
        wine_id = self.resolver.resolve(
            form.name,
            form.producer,
            form.wine_type,
            country_id=form.location.country_id,
            region_id=form.location.region_id,
            appellation_id=form.location.appellation_id,
            existing_canonical_id=form.existing_canonical_id,
            **wine_extra(form),
        )
        if not form.existing_canonical_id:
            self.resolver.save_composition(wine_id, form.composition)
        return wine_id

    def add_wine_to_cellar(self, wine_form: WineForm, entry: CellarEntryForm) -> Dict[str, Any]:
        """Resolve the wine, then add a cellar line item for it."""
        wine_form = validate_wine(wine_form, WINE_DIALOG)
        entry = validate_cellar_entry(entry)

        wine_id = self._resolve(wine_form)
        with backend_call("add wine"):
            row = cellar_repo.repo_insert_cellar_item(
                self.sb, cellar_insert(entry, self.user_id, wine_id)
            )
        logger.info(f"Added wine {wine_id} to cellar of {self.user_id}")
        return row

    def edit_cellar_wine(self, item: CellarItem, wine_form: WineForm, entry: CellarEntryForm) -> None:
        """Update the canonical wine, its composition and the cellar line item."""
        validate_wine(replace(wine_form, existing_canonical_id=None), WINE_DIALOG)
        entry = validate_cellar_entry(entry)
        payload = wine_update(wine_form, producer_id="")
        blend = grapes.to_rows(wine_form.composition, item.wine_id)
        changes = cellar_update(entry)

        with backend_call("update wine"):
            producer_id = self.resolver.resolve_producer(wine_form.producer.strip())
            wines_repo.repo_update_wine(
                self.sb, item.wine_id, payload.model_copy(update={"producer_id": producer_id})
            )
            wines_repo.repo_replace_composition(self.sb, item.wine_id, blend)
            cellar_repo.repo_update_cellar_item(self.sb, item.id, changes)
        logger.info(f"Updated cellar item {item.id}")

    def rate_cellar_wine(self, wine_id: str, form: RatingForm) -> Dict[str, Any]:
        form = validate_rating(form)
        with backend_call("add rating"):
            return ratings_repo.repo_insert_rating(self.sb, rating_insert(form, self.user_id, wine_id))

    def rate_new_wine(self, wine_form: WineForm, form: RatingForm) -> Dict[str, Any]:
        """
        Rate a wine that is not in the cellar.

        Creates (or reuses) the canonical wine, stores the rating, and records
        one bottle as consumed on the tasting date.
        """
        wine_form = validate_wine(wine_form, RATING_DIALOG)
        form = validate_rating(form)
        payload = rating_insert(form, self.user_id, wine_id="")

        wine_id = self._resolve(wine_form)
        payload = payload.model_copy(update={"wine_id": wine_id})
        with backend_call("add wine and rating"):
            rating = ratings_repo.repo_insert_rating(self.sb, payload)
            cellar_repo.repo_insert_consumption(self.sb, ConsumptionInsert(
                user_id=self.user_id,
                wine_id=wine_id,
                quantity=1,
                notes=payload.tasting_notes,
                rating_id=rating.get("id"),
                consumed_at=consumed_at(form),
            ))
        logger.info(f"Rated new wine {wine_id}")
        return rating

    def edit_rating(self, rating_id: str, form: RatingForm) -> None:
        form = validate_rating(form)
        with backend_call("update rating"):
            ratings_repo.repo_update_rating(self.sb, rating_id, rating_update(form))

    def delete_rating(self, rating_id: str) -> None:
        with backend_call("delete rating"):
            ratings_repo.repo_delete_rating(self.sb, rating_id)

    def load_wine_for_edit(self, wine_id: str, session: MutableMapping, key: str) -> Tuple[Dict[str, Any], List[str]]:
        """Wine row and its grape variety ids, fetched once per edit session under `key`."""
        if key not in session:
            with backend_call("load wine data"):
                wine = wines_repo.repo_get_wine(self.sb, wine_id) or {}
                rows = wines_repo.repo_get_composition(self.sb, wine_id)
            session[key] = (wine, [r["grape_variety_id"] for r in rows])
        return session[key]
