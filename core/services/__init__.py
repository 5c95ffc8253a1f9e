# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .activity_log_service import ActivityLogService, AuditContext
from .admin_auth_service import AdminAuthService
from .record_service import RecordService
from .student_service import StudentService
from .consultation_service import ConsultationService
from .contract_center_service import ContractCenterService

__all__ = [
    "ActivityLogService",
    "AuditContext",
    "AdminAuthService",
    "RecordService",
    "StudentService",
    "ConsultationService",
    "ContractCenterService",
]
