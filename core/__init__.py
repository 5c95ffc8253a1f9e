# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the admin API:
# - models/: Pydantic schemas for data validation
# - services/: Record CRUD, status transitions, audit logging, admin roles
#
# Models do not import from FastAPI. Services raise app.exceptions errors
# that the API layer renders.
# =============================================================================
