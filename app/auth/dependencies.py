# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Sign-in happens in Supabase Auth; this API only verifies the bearer token
# and resolves the admin account behind it.
#
# Token verification supports both:
# - ES256 (Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# Usage:
#   from app.auth import get_current_admin, require_permission
#
#   @router.get("/export")
#   async def export(admin: AdminUser = Depends(require_permission("can_export_data"))):
#       ...
# =============================================================================

import logging
import time
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser
from app.config import settings
from app.exceptions import AdminAccessError, PermissionDeniedError
from core.models.admin import AdminUser
from core.services.activity_log_service import AuditContext
from core.services.admin_auth_service import AdminAuthService

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """JWKS endpoint of the Supabase project (https://<ref>.supabase.co)."""
    return f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()
    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys beat no keys
        return _jwks_cache or {"keys": []}


def _get_signing_key(token: str) -> tuple[str | dict, str]:
    """
    Pick the verification key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = header.get("alg", "HS256")
    kid = header.get("kid")

    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from a Supabase JWT.

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    token = credentials.credentials

    try:
        signing_key, algorithm = _get_signing_key(token)
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience="authenticated"
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {e}")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise _unauthorized("Invalid token: malformed user ID")

    return AuthUser(id=user_uuid, email=payload.get("email"))


async def get_current_admin(user: AuthUser = Depends(get_current_user)) -> AdminUser:
    """
    Resolve the active admin account of the authenticated user.

    Raises:
        AdminAccessError: 403 if the user has no active admin account
    """
    admin = AdminAuthService.get_admin(user.id)
    if admin is None:
        logger.warning(f"Non-admin user tried the admin API: {user.id}")
        raise AdminAccessError(str(user.id))
    return admin


def require_permission(permission: str):
    """
    Dependency factory: the admin's role must carry a permission flag.

    Example:
        Depends(require_permission("can_delete_data"))
    """
    async def checker(admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
        if not admin.has_permission(permission):
            raise PermissionDeniedError(permission)
        return admin

    return checker


def require_role_level(level: int):
    """Dependency factory: the admin's role level must be <= level."""
    async def checker(admin: AdminUser = Depends(get_current_admin)) -> AdminUser:
        if not admin.has_role_level(level):
            raise PermissionDeniedError(f"role_level <= {level}")
        return admin

    return checker


async def get_audit_context(
    request: Request,
    admin: AdminUser = Depends(get_current_admin),
) -> AuditContext:
    """Acting admin plus request metadata for activity log entries."""
    return AuditContext(
        admin=admin,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
