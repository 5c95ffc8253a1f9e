# =============================================================================
# app/routers/activity_logs.py - Activity Log Endpoints
# =============================================================================
# The log screen is restricted to super admins (role level 1). Listing goes
# through GET /admin/activity_logs like every other kind.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from app.auth import require_role_level
from core.models.activity_log import ActivityStats, LogIds
from core.models.admin import AdminRoleLevel, AdminUser
from core.services.activity_log_service import ActivityLogService

router = APIRouter()

require_super_admin = require_role_level(AdminRoleLevel.SUPER_ADMIN)


@router.get("/stats", response_model=ActivityStats)
async def get_activity_stats(admin: AdminUser = Depends(require_super_admin)):
    """Entries written today and this week (weeks start Sunday, KST)."""
    return ActivityLogService.activity_stats()


@router.get("/by-admin/{admin_user_id}")
async def get_admin_logs(
    admin_user_id: Annotated[str, Path(description="Admin user ID")],
    limit: Annotated[int, Query(ge=1, le=500, description="Max entries")] = 50,
    admin: AdminUser = Depends(require_super_admin),
):
    return ActivityLogService.user_logs(admin_user_id, limit=limit)


@router.post("/delete")
async def delete_logs(
    request: LogIds,
    admin: AdminUser = Depends(require_super_admin),
):
    """Delete log entries. Deleting logs is not itself logged."""
    count = ActivityLogService.delete_logs(request.ids)
    return {"deleted": request.ids, "count": count}
