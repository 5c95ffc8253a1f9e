# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Verifies Supabase JWTs and resolves the admin account behind them.
#
# Usage:
#   from app.auth import get_current_admin, require_permission
#
#   @router.delete("/thing")
#   async def delete(admin: AdminUser = Depends(require_permission("can_delete_data"))):
#       ...
# =============================================================================

from app.auth.dependencies import (
    get_audit_context,
    get_current_admin,
    get_current_user,
    require_permission,
    require_role_level,
)
from app.auth.models import AdminProfile, AuthUser

__all__ = [
    "get_audit_context",
    "get_current_admin",
    "get_current_user",
    "require_permission",
    "require_role_level",
    "AdminProfile",
    "AuthUser",
]
