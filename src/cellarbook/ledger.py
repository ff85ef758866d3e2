"""
Cellar quantity and consumption ledger.

Quantities change one bottle at a time from the cellar list. Taking the last
bottle out is never a silent write: `decrement` hands back a ConsumptionPrompt
and the UI confirms through `consume`, which records the consumption first
and then updates or deletes the line item. The two writes are independent;
if the second fails the consumption stays recorded.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from supabase import Client

from cellarbook import cellar_repo
from cellarbook.error_handling import FormValidationError, backend_call
from cellarbook.schema import (
    CellarItem,
    CellarItemInsert,
    CellarItemUpdate,
    ConsumptionInsert,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConsumptionPrompt:
    """Ask the user how many bottles were consumed (1..max_quantity)."""
    item: CellarItem
    max_quantity: int


class CellarLedger:
    def __init__(self, sb: Client, user_id: str):
        self.sb = sb
        self.user_id = user_id

    def _set_quantity(self, item: CellarItem, quantity: int) -> CellarItem:
        with backend_call("update quantity"):
            cellar_repo.repo_update_cellar_item(
                self.sb, item.id, CellarItemUpdate(quantity=quantity)
            )
        return item.model_copy(update={"quantity": quantity})

    def increment(self, item: CellarItem) -> CellarItem:
        return self._set_quantity(item, item.quantity + 1)

    def decrement(self, item: CellarItem) -> Union[CellarItem, ConsumptionPrompt]:
        """Drop one bottle, or prompt for a consumption when none would remain."""
        new_quantity = item.quantity - 1
        if new_quantity > 0:
            return self._set_quantity(item, new_quantity)
        return ConsumptionPrompt(item=item, max_quantity=item.quantity)

    def consume(self, item: CellarItem, quantity: int, notes: Optional[str] = None,
                rating_id: Optional[str] = None) -> Optional[CellarItem]:
        """
        Record `quantity` bottles as consumed and shrink the line item.

        Returns:
            The updated item, or None when the line item was deleted
        """
        if not 1 <= quantity <= item.quantity:
            logger.warning(f"Rejected consumption of {quantity} from {item.quantity} bottles")
            raise FormValidationError(
                f"Quantity must be between 1 and {item.quantity}", fields=["quantity"]
            )

        with backend_call("record consumption"):
            cellar_repo.repo_insert_consumption(self.sb, ConsumptionInsert(
                user_id=self.user_id,
                wine_id=item.wine_id,
                quantity=quantity,
                notes=notes or None,
                rating_id=rating_id,
            ))

        remaining = item.quantity - quantity
        with backend_call("update cellar"):
            if remaining > 0:
                cellar_repo.repo_update_cellar_item(
                    self.sb, item.id, CellarItemUpdate(quantity=remaining)
                )
            else:
                cellar_repo.repo_delete_cellar_item(self.sb, item.id)

        logger.info(f"Consumed {quantity} of wine {item.wine_id}, {remaining} left")
        return item.model_copy(update={"quantity": remaining}) if remaining > 0 else None

    def add_to_cellar(self, wine_id: str, quantity: int = 1,
                      purchase_date: Optional[date] = None,
                      purchase_price: Optional[float] = None,
                      storage_location: Optional[str] = None,
                      notes: Optional[str] = None) -> dict:
        if quantity < 1:
            raise FormValidationError("Quantity must be at least 1", fields=["quantity"])
        payload = CellarItemInsert(
            user_id=self.user_id,
            wine_id=wine_id,
            quantity=quantity,
            purchase_date=purchase_date,
            purchase_price=purchase_price,
            storage_location=storage_location,
            notes=notes,
        )
        with backend_call("add wine to cellar"):
            row = cellar_repo.repo_insert_cellar_item(self.sb, payload)
        logger.info(f"Added {quantity} bottle(s) of wine {wine_id} to cellar")
        return row

    def restock(self, wine_id: str) -> int:
        """Put one bottle of a consumed wine back; returns the new quantity."""
        with backend_call("add wine back to cellar"):
            existing = cellar_repo.repo_find_cellar_item(self.sb, self.user_id, wine_id)
            if existing:
                quantity = existing["quantity"] + 1
                cellar_repo.repo_update_cellar_item(
                    self.sb, existing["id"], CellarItemUpdate(quantity=quantity)
                )
            else:
                quantity = 1
                cellar_repo.repo_insert_cellar_item(self.sb, CellarItemInsert(
                    user_id=self.user_id, wine_id=wine_id, quantity=1
                ))
        return quantity

    def delete_consumption(self, record_id: str) -> None:
        with backend_call("delete consumption record"):
            cellar_repo.repo_delete_consumption(self.sb, record_id)
