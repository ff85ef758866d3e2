"""
Resolve-or-create canonical producer and wine rows.

Producers are matched by case-insensitive exact name and created on a miss.
Wines are never deduplicated: unless the caller already holds a canonical id,
every call inserts a new `wine_database` row. Writes are not transactional;
a producer created just before a failed wine insert stays behind.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError
from supabase import Client

from cellarbook import composition as grapes
from cellarbook import wines_repo
from cellarbook.error_handling import FormValidationError, backend_call
from cellarbook.schema import WineInsert

logger = logging.getLogger(__name__)


def _build_wine_payload(wine_name: str, wine_type: str, country_id, region_id,
                        appellation_id, extra: dict[str, Any]) -> WineInsert:
    try:
        return WineInsert(
            name=wine_name,
            producer_id="",
            wine_type=wine_type,
            country_id=country_id,
            region_id=region_id,
            appellation_id=appellation_id,
            **extra,
        )
    except ValidationError as e:
        fields = [str(err["loc"][0]) for err in e.errors() if err.get("loc")]
        logger.warning(f"Invalid wine payload: {fields}")
        raise FormValidationError("Invalid wine details", fields=fields) from e


class WineIdentityResolver:
    """Turns free-text wine details into a canonical wine id."""

    def __init__(self, sb: Client):
        self.sb = sb

    def resolve_producer(self, producer_name: str) -> str:
        existing = wines_repo.repo_find_producer(self.sb, producer_name)
        if existing:
            return existing["id"]
        created = wines_repo.repo_create_producer(self.sb, producer_name)
        logger.info(f"Created producer '{producer_name}'")
        return created["id"]

    def resolve(
        self,
        wine_name: str,
        producer_name: str,
        wine_type: str,
        country_id: Optional[str] = None,
        region_id: Optional[str] = None,
        appellation_id: Optional[str] = None,
        existing_canonical_id: Optional[str] = None,
        **extra: Any,
    ) -> str:
        """
        Return the canonical wine id for these details.

        Args:
            existing_canonical_id: Returned unchanged, with no writes
            **extra: Optional wine columns (vintage, image_url, alcohol_content, ...)

        Raises:
            FormValidationError: Blank name/producer or invalid column values
            BackendError: Any producer or wine write failed
        """
        if existing_canonical_id:
            return existing_canonical_id

        wine_name = (wine_name or "").strip()
        producer_name = (producer_name or "").strip()
        missing = [f for f, v in (("name", wine_name), ("producer", producer_name)) if not v]
        if missing:
            raise FormValidationError("Wine name and producer are required", fields=missing)

        payload = _build_wine_payload(wine_name, wine_type, country_id, region_id,
                                      appellation_id, extra)

        with backend_call("save wine"):
            producer_id = self.resolve_producer(producer_name)
            row = wines_repo.repo_insert_wine(
                self.sb, payload.model_copy(update={"producer_id": producer_id})
            )
            wine_id = row["id"]

        logger.info(f"Created canonical wine '{wine_name}' ({wine_id})")
        return wine_id

    def save_composition(self, wine_id: str, composition: grapes.Composition) -> None:
        """Write one composition row per grape; nothing to do for an empty blend."""
        if not composition:
            return
        with backend_call("save grape composition"):
            wines_repo.repo_insert_composition(self.sb, grapes.to_rows(composition, wine_id))
