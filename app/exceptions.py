# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError


class PracticumException(Exception):
    """
    Base exception for the practicum admin API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PRACTICUM_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Record Exceptions
# =============================================================================

class UnknownRecordKindError(PracticumException):
    """Raised when a URL names a record kind that isn't registered."""

    def __init__(self, kind: str, known: list[str]):
        super().__init__(
            message=f"Unknown record kind: {kind}",
            code="UNKNOWN_RECORD_KIND",
            status_code=404,
            suggestion=f"Use one of: {', '.join(known)}",
            details={"kind": kind, "known_kinds": known}
        )


class RecordNotFoundError(PracticumException):
    """Raised when a record ID doesn't exist in its table."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(
            message=f"{kind} record not found: {record_id}",
            code="RECORD_NOT_FOUND",
            status_code=404,
            suggestion="The record may have been deleted by another admin; refresh the list",
            details={"kind": kind, "record_id": record_id}
        )


class InvalidQueryError(PracticumException):
    """Raised for list query parameters the kind doesn't support."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="INVALID_QUERY",
            status_code=400,
            suggestion="Check the tab and filter field names for this record kind",
            details=details
        )


class OperationNotAllowedError(PracticumException):
    """Raised when a kind doesn't support the requested write."""

    def __init__(self, kind: str, operation: str):
        super().__init__(
            message=f"{operation} is not supported for {kind}",
            code="OPERATION_NOT_ALLOWED",
            status_code=405,
            details={"kind": kind, "operation": operation}
        )


# =============================================================================
# Write Exceptions
# =============================================================================

class FormValidationError(PracticumException):
    """Raised when submitted fields fail validation before any remote call."""

    def __init__(self, errors: list[dict[str, Any]] | str):
        if isinstance(errors, str):
            errors = [{"msg": errors}]
        super().__init__(
            message="Some required fields are missing or invalid",
            code="FORM_VALIDATION_ERROR",
            status_code=422,
            suggestion="Fill in every required field and submit again",
            details={"errors": errors}
        )


class BatchOperationError(PracticumException):
    """
    Raised when a bulk write stops partway.

    Rows in `succeeded` were written; rows in `failed` and everything after
    were not. Nothing is rolled back, so the caller must refetch.
    """

    def __init__(
        self,
        operation: str,
        succeeded: list[str],
        failed: list[str],
        error: str,
    ):
        super().__init__(
            message=f"{operation} failed after {len(succeeded)} of {len(succeeded) + len(failed)} records: {error}",
            code="BATCH_PARTIAL_FAILURE",
            status_code=502,
            suggestion="Reload the list to see which records changed, then retry the rest",
            details={"operation": operation, "succeeded": succeeded, "failed": failed}
        )
        self.succeeded = succeeded
        self.failed = failed


# =============================================================================
# Permission Exceptions
# =============================================================================

class AdminAccessError(PracticumException):
    """Raised when an authenticated user has no active admin account."""

    def __init__(self, user_id: str):
        super().__init__(
            message="관리자 권한이 없습니다. 관리자에게 문의하세요.",
            code="NOT_AN_ADMIN",
            status_code=403,
            suggestion="Ask a super admin to activate your admin account",
            details={"user_id": user_id}
        )


class PermissionDeniedError(PracticumException):
    """Raised when an admin's role lacks a permission flag or level."""

    def __init__(self, requirement: str):
        super().__init__(
            message=f"Permission denied: {requirement}",
            code="PERMISSION_DENIED",
            status_code=403,
            suggestion="Ask a super admin to grant the permission to your role",
            details={"required": requirement}
        )


# =============================================================================
# Attachment Exceptions
# =============================================================================

class FileTooLargeError(PracticumException):
    """Raised before upload when an attachment is over MAX_UPLOAD_SIZE_MB."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"Attachment is {size_mb:.1f}MB; the limit is {max_mb}MB",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion="Compress or split the file before attaching it to the memo",
            details={"size_mb": round(size_mb, 2), "max_mb": max_mb}
        )


class StorageUploadError(PracticumException):
    """Raised when the attachment bucket rejects an upload. The memo is left unchanged."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Attachment upload failed: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=502,
            suggestion="Check the consultation-files bucket exists, then upload again",
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def practicum_exception_handler(
    request: Request,
    exc: PracticumException
) -> JSONResponse:
    """
    Convert PracticumException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def supabase_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """
    Remote data service failures surface as 502.

    The client should refetch before trying again.
    """
    content = {
        "detail": exc.message,
        "code": exc.code,
        "suggestion": exc.suggestion or "Reload the list and try again",
    }
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=502, content=content)


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = exc.errors() if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_errors(errors)
        }
    )


def jsonable_errors(errors: Any) -> Any:
    """Strip non-serializable context objects from pydantic error dicts."""
    if not isinstance(errors, list):
        return errors
    return [
        {key: value for key, value in error.items() if key in ("loc", "msg", "type")}
        for error in errors
    ]
