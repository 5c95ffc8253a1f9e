# =============================================================================
# core/models/admin.py - Admin User and Role Schemas
# =============================================================================
# Admin accounts live in admin_users, keyed by the Supabase Auth user ID,
# with a role row from admin_roles. Permissions are a flat set of flags on
# the role; role_level orders roles (1 = super admin).
# =============================================================================

from datetime import datetime
from enum import IntEnum

from pydantic import BaseModel, Field


class AdminRoleLevel(IntEnum):
    """Lower level means more privilege."""
    SUPER_ADMIN = 1
    ADMIN = 2


class AdminPermissions(BaseModel):
    """Permission flags carried by a role. Missing flags are denied."""

    can_manage_users: bool = False
    can_manage_institutions: bool = False
    can_manage_students: bool = False
    can_manage_contract_centers: bool = False
    can_view_all_data: bool = False
    can_export_data: bool = False
    can_delete_data: bool = False
    can_add_data: bool = False
    can_edit_data: bool = False
    can_modify_system_settings: bool = False


class AdminRole(BaseModel):
    id: int
    role_name: str
    role_level: int = Field(..., ge=1)
    description: str | None = None
    permissions: AdminPermissions = Field(default_factory=AdminPermissions)


class AdminUser(BaseModel):
    """
    An active admin with their role resolved.

    Returned by AdminAuthService.get_admin and injected into admin routes.
    """

    id: str
    username: str
    role_id: int
    role: AdminRole | None = None
    is_active: bool = True
    last_login: datetime | None = None

    @property
    def role_name(self) -> str:
        return self.role.role_name if self.role else "알 수 없음"

    def has_permission(self, permission: str) -> bool:
        if self.role is None:
            return False
        return bool(getattr(self.role.permissions, permission, False))

    def has_role_level(self, required_level: int) -> bool:
        """True when this admin's level is at or above (numerically <=) the requirement."""
        if self.role is None:
            return False
        return self.role.role_level <= required_level
