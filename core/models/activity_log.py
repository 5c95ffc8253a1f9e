# =============================================================================
# core/models/activity_log.py - Admin Activity Log Schemas
# =============================================================================
# Every admin write produces one row in admin_activity_logs with the acting
# admin, the table and record touched, and the old/new values. The log
# screen shows the rows, today's and this week's counts, and a field-by-field
# diff of each UPDATE.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ActionType(str, Enum):
    """Kinds of audited admin actions."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"


class ActivityLogEntry(BaseModel):
    """
    One audit row as stored.

    old_values/new_values hold full record snapshots, not just the diff.
    """

    id: str | None = None
    admin_user_id: str
    admin_username: str
    admin_role_name: str
    action_type: ActionType
    table_name: str
    record_id: str | None = None
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None
    description: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None


class FieldChange(BaseModel):
    """One changed field of an UPDATE entry."""

    field: str
    display_name: str
    old_value: Any = None
    new_value: Any = None


class ActivityStats(BaseModel):
    """
    Activity counts for the log screen header.

    Weeks start on Sunday.
    """

    today: int = Field(default=0, ge=0)
    this_week: int = Field(default=0, ge=0)


class LogIds(BaseModel):
    ids: list[str] = Field(..., min_length=1)
