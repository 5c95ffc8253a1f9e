# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - student.py: Student application form and status enums
# - institution.py: Education center / practice institution schemas
# - contract_center.py: Contract center payment schemas
# - consultation.py: Consultation memo schemas
# - activity_log.py: Audit log schemas
# - admin.py: Admin user, role and permission schemas
# - listing.py: List endpoint response schema
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Student Models - Application form and tab statuses
# -----------------------------------------------------------------------------
from .student import (
    CompletionStatus,
    PaymentStatus,
    PaymentStatusChange,
    StudentApplicationCreate,
    StudentApplicationUpdate,
    StudentBulkAction,
    StudentBulkRequest,
    StudentTab,
)

# -----------------------------------------------------------------------------
# Partner Models - Institutions and contract center payments
# -----------------------------------------------------------------------------
from .institution import (
    EducationCenterCreate,
    EducationCenterUpdate,
    PracticeInstitutionCreate,
    PracticeInstitutionUpdate,
)
from .contract_center import (
    ContractCenterCreate,
    ContractCenterUpdate,
    PaymentMethod,
    PaymentMethodChange,
)

# -----------------------------------------------------------------------------
# Consultation Models
# -----------------------------------------------------------------------------
from .consultation import (
    CONSULTATION_TYPES,
    Attachment,
    Consultant,
    ConsultationContent,
    ConsultationCreate,
    ConsultationIds,
    ConsultationUpdate,
    ContentLine,
)

# -----------------------------------------------------------------------------
# Admin Models - Accounts and audit log
# -----------------------------------------------------------------------------
from .admin import (
    AdminPermissions,
    AdminRole,
    AdminRoleLevel,
    AdminUser,
)
from .activity_log import (
    ActionType,
    ActivityLogEntry,
    ActivityStats,
    FieldChange,
    LogIds,
)

# -----------------------------------------------------------------------------
# Listing Models
# -----------------------------------------------------------------------------
from .listing import (
    BulkResult,
    DeleteRequest,
    RecordList,
)

__all__ = [
    # Student
    "CompletionStatus",
    "PaymentStatus",
    "PaymentStatusChange",
    "StudentApplicationCreate",
    "StudentApplicationUpdate",
    "StudentBulkAction",
    "StudentBulkRequest",
    "StudentTab",
    # Partners
    "EducationCenterCreate",
    "EducationCenterUpdate",
    "PracticeInstitutionCreate",
    "PracticeInstitutionUpdate",
    "ContractCenterCreate",
    "ContractCenterUpdate",
    "PaymentMethod",
    "PaymentMethodChange",
    # Consultation
    "CONSULTATION_TYPES",
    "Attachment",
    "Consultant",
    "ConsultationContent",
    "ConsultationCreate",
    "ConsultationIds",
    "ConsultationUpdate",
    "ContentLine",
    # Admin
    "AdminPermissions",
    "AdminRole",
    "AdminRoleLevel",
    "AdminUser",
    "ActionType",
    "ActivityLogEntry",
    "ActivityStats",
    "FieldChange",
    "LogIds",
    # Listing
    "BulkResult",
    "DeleteRequest",
    "RecordList",
]
