# =============================================================================
# tests/test_api.py - API Endpoint Tests
# =============================================================================
# Tests the FastAPI routes with TestClient. Authentication is replaced by
# dependency_overrides and SupabaseClient by the db fixture.
#
# Run with: pytest tests/test_api.py -v
# =============================================================================

import pytest
from fastapi.testclient import TestClient

from app.auth import get_current_admin
from app.main import app
from lib.supabase_client import SupabaseClientError


@pytest.fixture
def client_as():
    """Build a TestClient acting as the given admin."""
    def build(admin):
        app.dependency_overrides[get_current_admin] = lambda: admin
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


@pytest.fixture
def client(client_as, super_admin):
    return client_as(super_admin)


@pytest.fixture
def anonymous():
    app.dependency_overrides.clear()
    return TestClient(app)


ADMIN = "/api/v1/admin"


# =============================================================================
# Public Endpoints
# =============================================================================

class TestPublicEndpoints:
    """Tests for endpoints that need no admin."""

    def test_root(self, anonymous):
        response = anonymous.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "Practicum Admin API"

    def test_health(self, anonymous):
        response = anonymous.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_submit_application(self, anonymous, db):
        response = anonymous.post("/api/v1/applications", json={
            "student_name": "김민수",
            "gender": "남",
            "phone": "01012345678",
            "birth_date": "1999-03-02",
            "address": "서울시 강남구",
            "preferred_practice_date": "2025-03-04",
            "grade_report_date": "25년 2월",
            "preferred_semester": "2025-1",
            "practice_type": "사회복지현장실습",
            "preferred_day": "평일",
            "advisor_name": "이교수",
            "car_available": "가능",
        })

        assert response.status_code == 201
        assert response.json()["application_id"] == "new-id"
        assert response.json()["message"] == "실습신청이 성공적으로 제출되었습니다!"
        assert db["insert"].call_args.args[1]["phone"] == "010-1234-5678"

    def test_incomplete_application_is_rejected(self, anonymous, db):
        response = anonymous.post("/api/v1/applications", json={"student_name": "김민수"})

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
        db["insert"].assert_not_called()

    def test_admin_routes_need_a_token(self, anonymous):
        response = anonymous.get(f"{ADMIN}/students")
        assert response.status_code in (401, 403)


# =============================================================================
# List Endpoints
# =============================================================================

class TestListEndpoints:
    """Tests for GET /admin/{kind}."""

    def test_search_within_tab(self, client, db, student_rows):
        db["fetch_all"].return_value = student_rows

        response = client.get(f"{ADMIN}/students", params={"q": "김", "tab": "pending"})

        assert response.status_code == 200
        data = response.json()
        assert [item["id"] for item in data["items"]] == ["s5"]
        assert data["total_pages"] == 1
        assert data["tab_counts"] == {"pending": 1, "completed": 1, "refunded": 1}

    def test_no_tab_means_pending(self, client, db, student_rows):
        db["fetch_all"].return_value = student_rows

        data = client.get(f"{ADMIN}/students").json()

        assert data["tab"] == "pending"
        assert [item["id"] for item in data["items"]] == ["s5", "s4"]

    def test_months_and_field_filters(self, client, db, contract_rows):
        db["fetch_all"].return_value = contract_rows

        response = client.get(
            f"{ADMIN}/contract_centers",
            params={"months": ["25년06월", "25년07월"], "f.classification": "a"},
        )

        assert [item["id"] for item in response.json()["items"]] == ["c3"]

    def test_date_range(self, client, db, student_rows):
        db["fetch_all"].return_value = student_rows
        response = client.get(
            f"{ADMIN}/students",
            params={"date_from": "2025-07-01", "date_to": "2025-07-01", "tab": "pending"},
        )
        assert [item["id"] for item in response.json()["items"]] == ["s4"]

    def test_inverted_date_range(self, client, db):
        response = client.get(f"{ADMIN}/students", params={"date_from": "2025-07-02", "date_to": "2025-07-01"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_QUERY"

    def test_unknown_tab(self, client, db):
        response = client.get(f"{ADMIN}/students", params={"tab": "archived"})
        assert response.status_code == 400

    def test_unknown_filter_field(self, client, db):
        response = client.get(f"{ADMIN}/students", params={"f.password": "x"})
        assert response.status_code == 400
        assert response.json()["details"]["fields"] == ["password"]

    def test_unknown_kind(self, client):
        response = client.get(f"{ADMIN}/invoices")
        assert response.status_code == 404
        assert response.json()["code"] == "UNKNOWN_RECORD_KIND"

    def test_page_size_capped(self, client, db):
        db["fetch_all"].return_value = []
        data = client.get(f"{ADMIN}/education_centers", params={"page_size": 1000}).json()
        assert data["page_size"] == 100
        assert data["total_pages"] == 1

    def test_page_past_end(self, client, db, student_rows):
        db["fetch_all"].return_value = student_rows
        data = client.get(f"{ADMIN}/students", params={"page": 5}).json()
        assert data["items"] == []
        assert data["page"] == 5

    def test_remote_failure_is_502(self, client, db):
        db["fetch_all"].side_effect = SupabaseClientError("connection refused", code="FETCH_FAILED")
        response = client.get(f"{ADMIN}/students")
        assert response.status_code == 502
        assert response.json()["code"] == "FETCH_FAILED"

    def test_activity_logs_need_super_admin(self, client_as, read_only_admin, super_admin, db):
        db["fetch_all"].return_value = []
        assert client_as(read_only_admin).get(f"{ADMIN}/activity_logs").status_code == 403
        assert client_as(super_admin).get(f"{ADMIN}/activity_logs").status_code == 200


class TestExport:
    """Tests for CSV export."""

    def test_csv_with_bom(self, client, db, student_rows):
        db["fetch_all"].return_value = student_rows

        response = client.get(f"{ADMIN}/students/export", params={"tab": "refunded"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.content.startswith("﻿".encode("utf-8"))
        assert "최유리" in response.text
        assert "김민수" not in response.text

    def test_export_needs_permission(self, client_as, read_only_admin, db):
        response = client_as(read_only_admin).get(f"{ADMIN}/students/export")
        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"


# =============================================================================
# Record Writes
# =============================================================================

class TestRecordWrites:
    """Tests for the generic create/update/delete endpoints."""

    def test_create_education_center(self, client, db):
        response = client.post(f"{ADMIN}/education_centers", json={"center_name": "서울교육원"})
        assert response.status_code == 201
        assert response.json()["center_name"] == "서울교육원"

    def test_create_invalid(self, client, db):
        response = client.post(f"{ADMIN}/education_centers", json={"center_name": " "})
        assert response.status_code == 422
        assert response.json()["code"] == "FORM_VALIDATION_ERROR"

    def test_create_not_allowed(self, client, db):
        response = client.post(f"{ADMIN}/activity_logs", json={"description": "x"})
        assert response.status_code == 405

    def test_update_student(self, client, db):
        db["fetch_one"].return_value = {"id": "s1", "phone": "010-0000-0000"}

        response = client.patch(f"{ADMIN}/students/s1", json={"phone": "01011112222"})

        assert response.status_code == 200
        assert db["update"].call_args.args == ("student_applications", "s1", {"phone": "010-1111-2222"})

    def test_update_needs_permission(self, client_as, read_only_admin, db):
        response = client_as(read_only_admin).patch(f"{ADMIN}/students/s1", json={"phone": "x"})
        assert response.status_code == 403

    def test_delete(self, client, db):
        db["fetch_one"].return_value = {"id": "x"}
        response = client.post(f"{ADMIN}/students/delete", json={"ids": ["s1", "s2"]})
        assert response.status_code == 200
        assert response.json()["count"] == 2

    def test_history(self, client, db):
        db["fetch_where"].return_value = [{
            "id": "l1",
            "action_type": "UPDATE",
            "old_values": {"payment_status": "pending"},
            "new_values": {"payment_status": "paid"},
        }]

        entries = client.get(f"{ADMIN}/students/s1/history").json()["entries"]

        assert entries[0]["changes"][0]["field"] == "payment_status"
        assert entries[0]["changes"][0]["new_value"] == "paid"


# =============================================================================
# Kind-Specific Endpoints
# =============================================================================

class TestStudentEndpoints:
    def test_bulk_mark_paid(self, client, db):
        db["fetch_one"].side_effect = lambda table, record_id: {"id": record_id}

        response = client.post(f"{ADMIN}/students/bulk/mark_paid", json={"ids": ["s1", "s2"]})

        assert response.status_code == 200
        assert response.json()["count"] == 2
        assert response.json()["message"] == "2명의 학생을 입금완료로 처리했습니다."

    def test_bulk_partial_failure(self, client, db):
        db["fetch_one"].side_effect = lambda table, record_id: {"id": record_id}
        db["update"].side_effect = [{"id": "s1"}, SupabaseClientError("timeout")]

        response = client.post(f"{ADMIN}/students/bulk/mark_refunded", json={"ids": ["s1", "s2", "s3"]})

        assert response.status_code == 502
        body = response.json()
        assert body["code"] == "BATCH_PARTIAL_FAILURE"
        assert body["details"]["succeeded"] == ["s1"]
        assert body["details"]["failed"] == ["s2", "s3"]

    def test_unknown_action(self, client, db):
        response = client.post(f"{ADMIN}/students/bulk/graduate", json={"ids": ["s1"]})
        assert response.status_code == 422

    def test_payment_status(self, client, db):
        db["fetch_one"].return_value = {"id": "s1"}
        response = client.patch(f"{ADMIN}/students/s1/payment-status", json={"status": "paid"})
        assert response.json()["service_payment_status"] == "입금완료"


class TestConsultationEndpoints:
    def test_consultants_route_wins_over_record_id(self, client, db):
        db["fetch_all"].return_value = [{"consultant_name": "이상담"}]

        response = client.get(f"{ADMIN}/consultations/consultants")

        assert response.json() == [{"consultant_name": "이상담", "count": 1}]
        db["fetch_one"].assert_not_called()

    def test_create(self, client, db):
        response = client.post(f"{ADMIN}/consultations", json={
            "consultation_type": "일반상담",
            "consultant_name": "이상담",
            "member_name": "김민수",
            "consultation_content": "a\nb",
        })
        assert response.status_code == 201
        assert response.json()["consultation_content"] == "<li>a</li><li>b</li>"

    def test_content(self, client, db):
        db["fetch_one"].return_value = {"id": "m1", "consultation_content": "<li>질문</li><li>> 답변</li>"}
        data = client.get(f"{ADMIN}/consultations/m1/content").json()
        assert data["editable_text"] == "질문\n> 답변"
        assert data["lines"][1]["is_quoted"] is True

    def test_processed_toggle(self, client, db):
        db["fetch_one"].return_value = {"id": "m1"}
        assert client.post(f"{ADMIN}/consultations/m1/processed").json()["is_processed"] is True
        assert client.delete(f"{ADMIN}/consultations/m1/processed").json()["is_processed"] is False

    def test_upload_attachment(self, client, db):
        db["fetch_one"].return_value = {"id": "m1"}
        db["get_public_url"].return_value = "https://x/consultation-files/u/1.txt"

        response = client.post(
            f"{ADMIN}/consultations/m1/attachment",
            files={"file": ("memo.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 200
        assert response.json()["attached_file_name"] == "memo.txt"
        assert response.json()["size_label"] == "5 Bytes"


class TestContractCenterEndpoints:
    def test_options(self, client):
        data = client.get(f"{ADMIN}/contract_centers/options").json()
        assert "환불자" in data["payment_methods"]
        assert data["months"][-1] == "26년12월"

    def test_change_payment_method(self, client, db):
        db["update_many"].return_value = [{"id": "c1"}, {"id": "c2"}]
        response = client.post(
            f"{ADMIN}/contract_centers/payment-method",
            json={"ids": ["c1", "c2"], "payment_method": "확인불가"},
        )
        assert response.json() == {"updated": ["c1", "c2"], "count": 2, "payment_method": "확인불가"}

    def test_invalid_payment_method(self, client, db):
        response = client.post(
            f"{ADMIN}/contract_centers/payment-method",
            json={"ids": ["c1"], "payment_method": "현금"},
        )
        assert response.status_code == 422


class TestActivityLogEndpoints:
    def test_stats(self, client, db):
        db["count"].side_effect = [2, 9]
        assert client.get(f"{ADMIN}/activity_logs/stats").json() == {"today": 2, "this_week": 9}

    def test_stats_forbidden_below_super_admin(self, client_as, read_only_admin):
        assert client_as(read_only_admin).get(f"{ADMIN}/activity_logs/stats").status_code == 403

    def test_delete_logs(self, client, db):
        response = client.post(f"{ADMIN}/activity_logs/delete", json={"ids": ["l1"]})
        assert response.json()["count"] == 1
        db["delete"].assert_called_once_with("admin_activity_logs", ["l1"])


class TestAuthEndpoints:
    def test_me(self, client):
        data = client.get("/api/v1/auth/me").json()
        assert data["username"] == "admin"
        assert data["role_level"] == 1
        assert data["permissions"]["can_export_data"] is True

    def test_sign_in_is_logged(self, client, db):
        response = client.post("/api/v1/auth/sign-in")

        assert response.status_code == 200
        assert db["update"].call_args.args[0] == "admin_users"
        table, entry = db["insert"].call_args.args
        assert table == "admin_activity_logs"
        assert entry["action_type"] == "LOGIN"
