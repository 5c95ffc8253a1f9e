# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sample records for every list screen
# - Provides admin users with and without permissions
# - Provides a mocked SupabaseClient (db fixture)
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import DEFAULT, patch

import pytest

from core.models.admin import AdminPermissions, AdminRole, AdminUser
from core.services.activity_log_service import AuditContext
from lib.supabase_client import SupabaseClient


# =============================================================================
# Record Fixtures
# =============================================================================

def make_student(
    record_id: str,
    name: str,
    created_at: str,
    payment_status: str = "pending",
    completion: str = "not_started",
    **extra,
) -> dict:
    """Student application row as stored (newest-first order is up to the caller)."""
    row = {
        "id": record_id,
        "student_name": name,
        "gender": "여",
        "phone": "010-1234-5678",
        "address": "서울시 강남구",
        "practice_type": "사회복지현장실습",
        "preferred_semester": "2025-1",
        "preferred_day": "평일",
        "car_available": "가능",
        "practice_manager": None,
        "service_payment_status": None,
        "payment_status": payment_status,
        "practice_completion_status": completion,
        "created_at": created_at,
    }
    row.update(extra)
    return row


@pytest.fixture
def student_rows():
    """Five students, newest first, covering every tab."""
    return [
        make_student("s5", "김민수", "2025-07-15T02:00:00Z"),
        make_student("s4", "이영희", "2025-07-01T00:30:00Z", payment_status="paid"),
        make_student("s3", "박지성", "2025-06-30T14:59:59Z", completion="completed"),
        make_student("s2", "최유리", "2025-06-10T09:00:00Z", payment_status="refunded"),
        make_student(
            "s1", "김하늘", "2025-05-20T09:00:00Z",
            payment_status="refunded", completion="completed",
        ),
    ]


@pytest.fixture
def contract_rows():
    """Contract center payment rows with month-bucketed payment dates."""
    return [
        {
            "id": "c3",
            "classification": "A",
            "student_name": "정수민",
            "payment_date": "2025-07-01",
            "payment_method": "카드결제",
            "created_at": "2025-07-02T00:00:00Z",
        },
        {
            "id": "c2",
            "classification": "B",
            "student_name": "한지민",
            "payment_date": "25년06월30일",
            "payment_method": "계좌이체",
            "created_at": "2025-07-01T00:00:00Z",
        },
        {
            "id": "c1",
            "classification": "A",
            "student_name": "오세훈",
            "payment_date": "미정",
            "payment_method": None,
            "created_at": "2025-06-01T00:00:00Z",
        },
    ]


@pytest.fixture
def numbered_students():
    """Twelve pending students s12..s1, newest first."""
    return [
        make_student(f"s{n}", f"학생{n}", f"2025-07-{n:02d}T00:00:00Z", address="부산" if n % 3 else "서울")
        for n in range(12, 0, -1)
    ]


# =============================================================================
# Admin Fixtures
# =============================================================================

def make_admin(level: int = 1, **permissions) -> AdminUser:
    return AdminUser(
        id="11111111-1111-1111-1111-111111111111",
        username="admin",
        role_id=level,
        role=AdminRole(
            id=level,
            role_name="최고관리자" if level == 1 else "관리자",
            role_level=level,
            permissions=AdminPermissions(**permissions),
        ),
    )


ALL_PERMISSIONS = {name: True for name in AdminPermissions.model_fields}


@pytest.fixture
def super_admin() -> AdminUser:
    return make_admin(1, **ALL_PERMISSIONS)


@pytest.fixture
def read_only_admin() -> AdminUser:
    """Level-2 admin with no permission flags."""
    return make_admin(2)


@pytest.fixture
def audit(super_admin) -> AuditContext:
    return AuditContext(admin=super_admin, ip_address="127.0.0.1", user_agent="pytest")


# =============================================================================
# Supabase Mock
# =============================================================================

@pytest.fixture
def db():
    """
    Every SupabaseClient call replaced with a MagicMock.

    insert and update echo their input back as the stored row.
    """
    with patch.multiple(
        SupabaseClient,
        fetch_all=DEFAULT,
        fetch_one=DEFAULT,
        fetch_where=DEFAULT,
        count=DEFAULT,
        insert=DEFAULT,
        update=DEFAULT,
        update_many=DEFAULT,
        delete=DEFAULT,
        upload_file=DEFAULT,
        get_public_url=DEFAULT,
        remove_files=DEFAULT,
    ) as mocks:
        mocks["insert"].side_effect = lambda table, fields: {"id": "new-id", **fields}
        mocks["update"].side_effect = lambda table, record_id, patch_: {"id": record_id, **patch_}
        yield mocks
