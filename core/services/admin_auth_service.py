# =============================================================================
# core/services/admin_auth_service.py - Admin Account Lookup
# =============================================================================
# Identity comes from Supabase Auth (a verified JWT). This service resolves
# the admin_users row behind that identity, with its role, and answers
# permission questions for the API layer.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from core.models.admin import AdminUser
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_id

logger = logging.getLogger(__name__)

ADMIN_TABLE = "admin_users"
ADMIN_COLUMNS = "*, role:admin_roles(*)"


class AdminAuthService:
    """Service for admin account and permission checks."""

    @staticmethod
    def get_admin(user_id: str | UUID) -> AdminUser | None:
        """
        Get the active admin account for an auth user.

        Returns:
            AdminUser with role resolved, or None if the user is not an
            active admin
        """
        rows = SupabaseClient.fetch_where(
            ADMIN_TABLE,
            {"id": normalize_id(user_id), "is_active": True},
            columns=ADMIN_COLUMNS,
        )
        if not rows:
            return None

        try:
            return AdminUser.model_validate(_with_permissions(rows[0]))
        except ValidationError as e:
            logger.error(f"Malformed admin row for {user_id}: {e}")
            return None

    @staticmethod
    def has_permission(admin: AdminUser | None, permission: str) -> bool:
        return admin is not None and admin.has_permission(permission)

    @staticmethod
    def has_role_level(admin: AdminUser | None, required_level: int) -> bool:
        """Level 1 is the most privileged; an admin passes at or below the requirement."""
        return admin is not None and admin.has_role_level(required_level)

    @staticmethod
    def touch_last_login(user_id: str | UUID) -> None:
        """Record that the admin just signed in."""
        SupabaseClient.update(
            ADMIN_TABLE,
            user_id,
            {"last_login": datetime.now(timezone.utc).isoformat()},
        )
        logger.info(f"Updated last_login for admin {user_id}")


def _with_permissions(row: dict[str, Any]) -> dict[str, Any]:
    # admin_roles.permissions is JSONB and may be null on old rows
    role = row.get("role")
    if isinstance(role, dict) and role.get("permissions") is None:
        row = {**row, "role": {**role, "permissions": {}}}
    return row
