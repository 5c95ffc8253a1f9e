# =============================================================================
# core/services/contract_center_service.py - Contract Center Payments
# =============================================================================
# Payment-method changes for the contract education center screen and the
# option lists its filters offer.
# =============================================================================

import logging
from typing import Any, Iterable

from core.models.activity_log import ActionType
from core.models.contract_center import PaymentMethod
from core.services.activity_log_service import ActivityLogService, AuditContext
from core.services.record_service import RecordService
from lib.formatting import month_options
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_id, normalize_ids

logger = logging.getLogger(__name__)

KIND = "contract_centers"

# Range of the payment-date month filter
MONTH_RANGE = ((2024, 11), (2026, 12))


class ContractCenterService:
    """Service for contract center payment rows."""

    @staticmethod
    def payment_methods() -> list[str]:
        return [method.value for method in PaymentMethod]

    @staticmethod
    def month_options() -> list[str]:
        """Month bucket labels for the payment-date filter (24년11월 .. 26년12월)."""
        return month_options(*MONTH_RANGE)

    @staticmethod
    def update_payment_method(
        record_ids: Iterable[str],
        payment_method: PaymentMethod,
        audit: AuditContext | None = None,
    ) -> list[dict[str, Any]]:
        """
        Set the payment method on one or more rows.

        A single row goes through the regular audited update. Several rows
        are changed in one `id IN (...)` request, so they change together or
        not at all, then each row gets its own log entry.
        """
        ids = normalize_ids(record_ids)
        patch = {"payment_method": payment_method.value}

        if len(ids) == 1:
            return [RecordService.patch_record(KIND, ids[0], patch, audit)]

        kind = RecordService.resolve_kind(KIND)
        try:
            rows = SupabaseClient.update_many(kind.table, ids, patch)
        except SupabaseClientError as e:
            logger.error(f"Failed to change payment method on {len(ids)} rows: {e}")
            raise

        logger.info(f"Changed payment method to {payment_method.value} on {len(rows)} rows")
        for row in rows:
            ActivityLogService.log_activity(
                audit,
                ActionType.UPDATE,
                kind.table,
                normalize_id(row["id"]),
                new_values=row,
                description=f"결제방법 일괄 변경: {kind.title_of(row)} → {payment_method.value}",
            )
        return rows
