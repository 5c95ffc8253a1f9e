# =============================================================================
# core/services/record_service.py - Generic Record CRUD
# =============================================================================
# One service for every registered record kind. Each admin screen is the
# same loop:
#   fetch all rows (newest first) -> filter -> paginate
# plus audited writes. Kind-specific services (students, consultations,
# contract centers) build their writes on top of insert_record/patch_record.
#
# Bulk writes go one row at a time. The first failure stops the batch and
# raises BatchOperationError naming the rows that were and weren't written;
# nothing is rolled back.
# =============================================================================

import logging
from typing import Any, Iterable, Type

from pydantic import BaseModel, ValidationError

from app.exceptions import (
    BatchOperationError,
    FormValidationError,
    InvalidQueryError,
    OperationNotAllowedError,
    RecordNotFoundError,
    UnknownRecordKindError,
    jsonable_errors,
)
from core.models.activity_log import ActionType
from core.models.contract_center import ContractCenterCreate, ContractCenterUpdate
from core.models.institution import (
    EducationCenterCreate,
    EducationCenterUpdate,
    PracticeInstitutionCreate,
    PracticeInstitutionUpdate,
)
from core.models.listing import RecordList
from core.models.student import StudentApplicationUpdate
from core.services.activity_log_service import ActivityLogService, AuditContext
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_id, normalize_ids
from recordset import Query, RecordKind, UnknownKindError, get_kind, list_kinds
from recordset.engine import filter_records, tab_counts
from recordset.paginator import paginate

logger = logging.getLogger(__name__)


# Validation schemas for the generic create/update endpoints.
# None means the generic endpoint doesn't offer the operation: student rows
# are created by the public form, consultations by ConsultationService, and
# audit rows only by ActivityLogService.
RECORD_SCHEMAS: dict[str, tuple[Type[BaseModel] | None, Type[BaseModel] | None]] = {
    "students": (None, StudentApplicationUpdate),
    "education_centers": (EducationCenterCreate, EducationCenterUpdate),
    "practice_institutions": (PracticeInstitutionCreate, PracticeInstitutionUpdate),
    "contract_centers": (ContractCenterCreate, ContractCenterUpdate),
    "consultations": (None, None),
    "activity_logs": (None, None),
}


def validate_fields(schema: Type[BaseModel], payload: dict[str, Any], partial: bool) -> dict[str, Any]:
    """
    Validate a payload and return the columns to write.

    Raises:
        FormValidationError: On any validation failure (no remote call made)
    """
    try:
        model = schema.model_validate(payload)
    except ValidationError as e:
        raise FormValidationError(jsonable_errors(e.errors()))
    return model.model_dump(mode="json", exclude_unset=partial)


class RecordService:
    """
    Service for per-kind record operations.

    Example:
        page = RecordService.query_page("students", Query(tab="pending"), page=1, page_size=10)
        RecordService.delete_records("students", ["...id..."], audit)
    """

    @staticmethod
    def resolve_kind(kind: RecordKind | str) -> RecordKind:
        """
        Raises:
            UnknownRecordKindError: If no kind is registered under the name
        """
        if isinstance(kind, RecordKind):
            return kind
        try:
            return get_kind(kind)
        except UnknownKindError:
            raise UnknownRecordKindError(kind, list_kinds())

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def list_records(kind: RecordKind | str) -> list[dict[str, Any]]:
        """Every row of the kind's table, newest first."""
        kind = RecordService.resolve_kind(kind)
        return SupabaseClient.fetch_all(kind.table, order_by=kind.order_by, desc=True)

    @staticmethod
    def validate_query(kind: RecordKind, query: Query) -> None:
        """
        Reject tabs and filter fields the kind doesn't have.

        Raises:
            InvalidQueryError: On an unknown tab or filter field
        """
        if query.tab is not None and query.tab not in kind.tabs:
            raise InvalidQueryError(
                f"Unknown tab for {kind.name}: {query.tab}",
                details={"tab": query.tab, "tabs": list(kind.tabs)},
            )
        unknown = [name for name in query.filter_map if name not in kind.filterable_fields]
        if unknown:
            raise InvalidQueryError(
                f"Unknown filter field(s) for {kind.name}: {', '.join(unknown)}",
                details={"fields": unknown, "filterable": list(kind.filterable_fields)},
            )

    @staticmethod
    def with_default_tab(kind: RecordKind, query: Query) -> Query:
        """
        Fill in the kind's default tab when the query names none.

        Lists never mix tabs: GET /admin/students shows the pending tab,
        as the screen does on first load.
        """
        if query.tab is None and kind.default_tab is not None:
            return query.with_tab(kind.default_tab)
        return query

    @staticmethod
    def filter_all(kind: RecordKind | str, query: Query) -> list[dict[str, Any]]:
        """Fetch the table and apply the query in-process."""
        kind = RecordService.resolve_kind(kind)
        query = RecordService.with_default_tab(kind, query)
        RecordService.validate_query(kind, query)
        return filter_records(RecordService.list_records(kind), query, kind)

    @staticmethod
    def query_page(
        kind: RecordKind | str,
        query: Query,
        page: int = 1,
        page_size: int = 10,
    ) -> RecordList:
        """
        One page of a filtered list, with tab badge counts.

        Pages past the end come back empty rather than failing.
        """
        kind = RecordService.resolve_kind(kind)
        query = RecordService.with_default_tab(kind, query)
        RecordService.validate_query(kind, query)

        rows = RecordService.list_records(kind)
        view = paginate(filter_records(rows, query, kind), page, page_size)

        return RecordList(
            kind=kind.name,
            items=view.items,
            page=view.page,
            page_size=view.page_size,
            total_pages=view.total_pages,
            total_count=view.total_count,
            first_index=view.first_index,
            last_index=view.last_index,
            tab=query.tab,
            tab_counts=tab_counts(rows, kind, query),
        )

    @staticmethod
    def get_record(kind: RecordKind | str, record_id: str) -> dict[str, Any]:
        """
        Raises:
            RecordNotFoundError: If the row doesn't exist
        """
        kind = RecordService.resolve_kind(kind)
        row = SupabaseClient.fetch_one(kind.table, record_id)
        if not row:
            raise RecordNotFoundError(kind.name, normalize_id(record_id))
        return row

    # -------------------------------------------------------------------------
    # Audited writes
    # -------------------------------------------------------------------------

    @staticmethod
    def insert_record(
        kind: RecordKind | str,
        fields: dict[str, Any],
        audit: AuditContext | None = None,
    ) -> dict[str, Any]:
        """Insert already-validated fields and log the CREATE."""
        kind = RecordService.resolve_kind(kind)

        try:
            row = SupabaseClient.insert(kind.table, fields)
        except SupabaseClientError as e:
            logger.error(f"Failed to create {kind.name} record: {e}")
            raise

        logger.info(f"Created {kind.name} record: {row.get('id')}")
        ActivityLogService.log_activity(
            audit,
            ActionType.CREATE,
            kind.table,
            normalize_id(row["id"]) if "id" in row else None,
            new_values=row,
            description=ActivityLogService.describe_action(
                ActionType.CREATE, kind.name, record_name=kind.title_of(row)
            ),
        )
        return row

    @staticmethod
    def patch_record(
        kind: RecordKind | str,
        record_id: str,
        patch: dict[str, Any],
        audit: AuditContext | None = None,
        old_row: dict[str, Any] | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        """
        Apply an already-validated patch to one row and log the UPDATE.

        Raises:
            RecordNotFoundError: If the row doesn't exist
        """
        kind = RecordService.resolve_kind(kind)
        id_str = normalize_id(record_id)
        if old_row is None:
            old_row = RecordService.get_record(kind, id_str)

        try:
            row = SupabaseClient.update(kind.table, id_str, patch)
        except SupabaseClientError as e:
            logger.error(f"Failed to update {kind.name} record {id_str}: {e}")
            raise

        if row is None:
            raise RecordNotFoundError(kind.name, id_str)

        logger.info(f"Updated {kind.name} record: {id_str}")
        ActivityLogService.log_activity(
            audit,
            ActionType.UPDATE,
            kind.table,
            id_str,
            old_values=old_row,
            new_values=row,
            description=description or ActivityLogService.describe_action(
                ActionType.UPDATE, kind.name, record_name=kind.title_of(row)
            ),
        )
        return row

    @staticmethod
    def create_record(
        kind: RecordKind | str,
        payload: dict[str, Any],
        audit: AuditContext | None = None,
    ) -> dict[str, Any]:
        """
        Validate and insert a record through the generic endpoint.

        Raises:
            OperationNotAllowedError: If the kind isn't created this way
            FormValidationError: If the payload is invalid
        """
        kind = RecordService.resolve_kind(kind)
        create_schema, _ = RECORD_SCHEMAS.get(kind.name, (None, None))
        if create_schema is None:
            raise OperationNotAllowedError(kind.name, "create")

        fields = validate_fields(create_schema, payload, partial=False)
        return RecordService.insert_record(kind, fields, audit)

    @staticmethod
    def update_record(
        kind: RecordKind | str,
        record_id: str,
        payload: dict[str, Any],
        audit: AuditContext | None = None,
    ) -> dict[str, Any]:
        """
        Validate and apply a partial update through the generic endpoint.

        Only fields present in the payload are written; an empty payload
        returns the row unchanged.
        """
        kind = RecordService.resolve_kind(kind)
        _, update_schema = RECORD_SCHEMAS.get(kind.name, (None, None))
        if update_schema is None:
            raise OperationNotAllowedError(kind.name, "update")

        patch = validate_fields(update_schema, payload, partial=True)
        if not patch:
            return RecordService.get_record(kind, record_id)
        return RecordService.patch_record(kind, record_id, patch, audit)

    @staticmethod
    def bulk_update(
        kind: RecordKind | str,
        record_ids: Iterable[str],
        patch: dict[str, Any],
        audit: AuditContext | None = None,
        operation: str = "bulk update",
    ) -> list[dict[str, Any]]:
        """
        Apply the same patch to several rows, one request per row.

        Returns:
            Updated rows, in request order

        Raises:
            BatchOperationError: When a row fails; rows before it stay written
        """
        kind = RecordService.resolve_kind(kind)
        ids = normalize_ids(record_ids)
        updated: list[dict[str, Any]] = []

        for index, record_id in enumerate(ids):
            try:
                updated.append(RecordService.patch_record(kind, record_id, patch, audit))
            except (SupabaseClientError, RecordNotFoundError) as e:
                succeeded = [normalize_id(row["id"]) for row in updated]
                logger.error(
                    f"{operation} on {kind.name} stopped at {record_id} "
                    f"({len(succeeded)}/{len(ids)} done): {e}"
                )
                raise BatchOperationError(operation, succeeded, ids[index:], str(e))

        logger.info(f"{operation} on {kind.name}: {len(updated)} record(s)")
        return updated

    @staticmethod
    def delete_records(
        kind: RecordKind | str,
        record_ids: Iterable[str],
        audit: AuditContext | None = None,
    ) -> list[str]:
        """
        Delete rows in one request and log one DELETE per row.

        Returns:
            The IDs that were deleted
        """
        kind = RecordService.resolve_kind(kind)
        ids = normalize_ids(record_ids)
        if not ids:
            return []

        snapshots = {}
        if audit is not None:
            snapshots = {record_id: SupabaseClient.fetch_one(kind.table, record_id) for record_id in ids}

        try:
            SupabaseClient.delete(kind.table, ids)
        except SupabaseClientError as e:
            logger.error(f"Failed to delete {kind.name} records: {e}")
            raise

        logger.info(f"Deleted {len(ids)} {kind.name} record(s)")
        for record_id in ids:
            old_row = snapshots.get(record_id)
            ActivityLogService.log_activity(
                audit,
                ActionType.DELETE,
                kind.table,
                record_id,
                old_values=old_row,
                description=ActivityLogService.describe_action(
                    ActionType.DELETE,
                    kind.name,
                    record_name=kind.title_of(old_row) if old_row else None,
                    record_id=record_id,
                ),
            )
        return ids
