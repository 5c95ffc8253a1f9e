# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database/storage operations
# - list_content.py: Plain text <-> "<li>" tagged content codec
# - formatting.py: Date, month-bucket, phone and file-size formatting
# - utils.py: Shared utilities (error base class, ID normalization)
#
# supabase_client is not re-exported here: it loads settings on import, and
# the codec/formatting helpers must stay importable without configuration.
# =============================================================================

from lib.list_content import (
    DisplayLine,
    is_tagged,
    to_display_lines,
    to_editable_text,
    to_storage,
)
from lib.formatting import (
    format_phone,
    korean_date,
    month_label,
    month_options,
    parse_date,
    parse_datetime,
)
from lib.utils import ApplicationError, blank_to_none, normalize_id, normalize_ids

__all__ = [
    # List content codec
    "DisplayLine",
    "is_tagged",
    "to_display_lines",
    "to_editable_text",
    "to_storage",
    # Formatting
    "format_phone",
    "korean_date",
    "month_label",
    "month_options",
    "parse_date",
    "parse_datetime",
    # Utils
    "ApplicationError",
    "blank_to_none",
    "normalize_id",
    "normalize_ids",
]
