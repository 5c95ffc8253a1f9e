# =============================================================================
# app/routers/contract_centers.py - Contract Center Payment Endpoints
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import get_audit_context, get_current_admin, require_permission
from core.models.admin import AdminUser
from core.models.contract_center import PaymentMethodChange
from core.services.activity_log_service import AuditContext
from core.services.contract_center_service import ContractCenterService

router = APIRouter()


@router.get("/options")
async def get_filter_options(admin: AdminUser = Depends(get_current_admin)):
    """Payment methods and payment-date month buckets offered by the filters."""
    return {
        "payment_methods": ContractCenterService.payment_methods(),
        "months": ContractCenterService.month_options(),
    }


@router.post("/payment-method")
async def change_payment_method(
    request: PaymentMethodChange,
    admin: AdminUser = Depends(require_permission("can_edit_data")),
    audit: AuditContext = Depends(get_audit_context),
):
    """Set the payment method on the selected rows."""
    rows = ContractCenterService.update_payment_method(request.ids, request.payment_method, audit)
    return {
        "updated": [str(row["id"]) for row in rows],
        "count": len(rows),
        "payment_method": request.payment_method.value,
    }
