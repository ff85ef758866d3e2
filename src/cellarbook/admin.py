"""
Master data administration for admins and owners.

Deletes are checked for dependants first and refused with a reason the user
can act on. Appellations have no dependants and are always deletable. If the
check itself fails the delete is refused rather than attempted.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError
from supabase import Client

from cellarbook import wines_repo
from cellarbook.constants import Tables
from cellarbook.error_handling import (
    DeleteRefusedError,
    FormValidationError,
    PermissionDeniedError,
    backend_call,
)
from cellarbook.schema import (
    AppellationWrite,
    CountryWrite,
    GrapeVarietyWrite,
    RegionWrite,
    WineUpdate,
)
from cellarbook.social import UserRoles

logger = logging.getLogger(__name__)

MAX_NAMED_DEPENDANTS = 3


class AdminEntity(str, Enum):
    COUNTRIES = "countries"
    REGIONS = "regions"
    APPELLATIONS = "appellations"
    GRAPES = "grapes"
    WINES = "wines"

    @property
    def table(self) -> str:
        return {
            AdminEntity.COUNTRIES: Tables.COUNTRIES,
            AdminEntity.REGIONS: Tables.REGIONS,
            AdminEntity.APPELLATIONS: Tables.APPELLATIONS,
            AdminEntity.GRAPES: Tables.GRAPE_VARIETIES,
            AdminEntity.WINES: Tables.WINES,
        }[self]


WRITE_MODELS: Dict[AdminEntity, Type[BaseModel]] = {
    AdminEntity.COUNTRIES: CountryWrite,
    AdminEntity.REGIONS: RegionWrite,
    AdminEntity.APPELLATIONS: AppellationWrite,
    AdminEntity.GRAPES: GrapeVarietyWrite,
    AdminEntity.WINES: WineUpdate,
}


def _named_list(rows: List[Dict[str, Any]]) -> str:
    names = ", ".join(r.get("name", "") for r in rows[:MAX_NAMED_DEPENDANTS])
    extra = len(rows) - MAX_NAMED_DEPENDANTS
    return f"{names} and {extra} more" if extra > 0 else names


class MasterDataAdmin:
    def __init__(self, sb: Client, roles: UserRoles):
        self.sb = sb
        self.roles = roles

    def _require_admin(self) -> None:
        if not self.roles.is_admin_or_owner:
            raise PermissionDeniedError("Only admins can manage master data")

    def _validated_row(self, entity: AdminEntity, values: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return WRITE_MODELS[entity](**values).to_row()
        except ValidationError as e:
            fields = [str(err["loc"][0]) for err in e.errors() if err.get("loc")]
            logger.warning(f"Invalid {entity.value} values: {fields}")
            raise FormValidationError("Please fill in all required fields", fields=fields) from e

    def list(self, entity: AdminEntity, sort_by: str = "name", descending: bool = False) -> List[Dict[str, Any]]:
        self._require_admin()
        with backend_call(f"load {entity.value}"):
            if entity is AdminEntity.WINES:
                return wines_repo.repo_list_wines(self.sb, sort_by, descending).to_dict("records")
            return wines_repo.repo_list_table(self.sb, entity.table, sort_by, descending)

    def create(self, entity: AdminEntity, values: Dict[str, Any]) -> Dict[str, Any]:
        """Canonical wines are created through the identity resolver, not here."""
        self._require_admin()
        if entity is AdminEntity.WINES:
            raise FormValidationError("Wines are created from the cellar or rating dialogs")
        row = self._validated_row(entity, values)
        with backend_call(f"create {entity.value}"):
            created = wines_repo.repo_insert_row(self.sb, entity.table, row)
        logger.info(f"Created {entity.value} row '{row.get('name')}'")
        return created

    def update(self, entity: AdminEntity, row_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
        self._require_admin()
        row = self._validated_row(entity, values)
        with backend_call(f"update {entity.value}"):
            return wines_repo.repo_update_row(self.sb, entity.table, row_id, row)

    # Deletion

    def _refs(self, table: str, column: str, row_id: str, columns: str = "id") -> List[Dict[str, Any]]:
        return wines_repo.repo_rows_referencing(self.sb, table, column, row_id, columns)

    def _dependency_reason(self, entity: AdminEntity, row_id: str) -> Optional[str]:
        if entity is AdminEntity.COUNTRIES:
            regions = self._refs(Tables.REGIONS, "country_id", row_id, "id, name")
            if regions:
                return (f"This country cannot be deleted because it has {len(regions)} region(s): "
                        f"{_named_list(regions)}. Delete the regions first.")
            wines = self._refs(Tables.WINES, "country_id", row_id)
            if wines:
                return (f"This country cannot be deleted because it has {len(wines)} wine(s) "
                        f"associated with it. Remove or reassign the wines first.")

        elif entity is AdminEntity.REGIONS:
            appellations = self._refs(Tables.APPELLATIONS, "region_id", row_id, "id, name")
            if appellations:
                return (f"This region cannot be deleted because it has {len(appellations)} appellation(s): "
                        f"{_named_list(appellations)}. Delete the appellations first.")
            wines = self._refs(Tables.WINES, "region_id", row_id)
            if wines:
                return (f"This region cannot be deleted because it has {len(wines)} wine(s) "
                        f"associated with it. Remove or reassign the wines first.")

        elif entity is AdminEntity.GRAPES:
            uses = self._refs(Tables.WINE_COMPOSITION, "grape_variety_id", row_id)
            if uses:
                return (f"This grape variety cannot be deleted because it is used in {len(uses)} "
                        f"wine composition(s). Remove it from wines first.")

        elif entity is AdminEntity.WINES:
            references = sum(
                len(self._refs(table, "wine_id", row_id))
                for table in (Tables.CELLAR, Tables.RATINGS, Tables.CONSUMPTIONS)
            )
            if references:
                return (f"This wine cannot be deleted because it has {references} reference(s) "
                        f"in cellar entries, ratings, or consumption records.")

        return None

    def check_delete(self, entity: AdminEntity, row_id: str) -> Optional[str]:
        """Reason the row cannot be deleted, or None if it can."""
        try:
            return self._dependency_reason(entity, row_id)
        except Exception as e:
            logger.error(f"Dependency check failed for {entity.value} {row_id}: {type(e).__name__} - {e}")
            return "Unable to verify dependencies. Please try again."

    def delete(self, entity: AdminEntity, row_id: str) -> None:
        self._require_admin()
        reason = self.check_delete(entity, row_id)
        if reason:
            logger.warning(f"Refused delete of {entity.value} {row_id}")
            raise DeleteRefusedError(reason)

        with backend_call(f"delete {entity.value}"):
            if entity is AdminEntity.WINES:
                wines_repo.repo_delete_wine(self.sb, row_id)
            else:
                wines_repo.repo_delete_row(self.sb, entity.table, row_id)
        logger.info(f"Deleted {entity.value} {row_id}")
