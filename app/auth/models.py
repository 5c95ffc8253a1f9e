# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from core.models.admin import AdminPermissions


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class AdminProfile(BaseModel):
    """Who the caller is inside the admin console."""
    id: str
    username: str
    role_name: str
    role_level: Optional[int] = None
    permissions: AdminPermissions
