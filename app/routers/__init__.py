# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - applications.py: Public student application form
# - students.py: Student status transitions
# - consultations.py: Consultation memo endpoints
# - contract_centers.py: Payment-method changes and filter options
# - activity_logs.py: Audit log stats and cleanup
# - records.py: Generic list/export/CRUD for every record kind
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import applications
from . import students
from . import consultations
from . import contract_centers
from . import activity_logs
from . import records

__all__ = [
    "health",
    "applications",
    "students",
    "consultations",
    "contract_centers",
    "activity_logs",
    "records",
]
