# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-in and sign-out are handled by Supabase Auth client-side.
# These routes tell the console who the caller is and what they may do,
# and record each console sign-in.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_audit_context, get_current_admin
from app.auth.models import AdminProfile
from core.models.activity_log import ActionType
from core.models.admin import AdminPermissions, AdminUser
from core.services.activity_log_service import ActivityLogService, AuditContext
from core.services.admin_auth_service import AdminAuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=AdminProfile)
async def get_admin_profile(admin: AdminUser = Depends(get_current_admin)) -> AdminProfile:
    """
    Get the current admin's role and permissions.

    Raises:
        401: If not authenticated
        403: If the user is not an active admin
    """
    return AdminProfile(
        id=admin.id,
        username=admin.username,
        role_name=admin.role_name,
        role_level=admin.role.role_level if admin.role else None,
        permissions=admin.role.permissions if admin.role else AdminPermissions(),
    )


@router.post("/sign-in", response_model=AdminProfile)
async def record_sign_in(
    admin: AdminUser = Depends(get_current_admin),
    audit: AuditContext = Depends(get_audit_context),
) -> AdminProfile:
    """
    Record a console sign-in.

    Called once by the console right after Supabase Auth signs the user in.
    Updates last_login and writes a LOGIN activity log entry.
    """
    AdminAuthService.touch_last_login(admin.id)
    ActivityLogService.log_activity(
        audit,
        ActionType.LOGIN,
        "admin_users",
        admin.id,
        description=f"{admin.username} 로그인",
    )
    logger.info(f"Admin signed in: {admin.username}")
    return await get_admin_profile(admin)
