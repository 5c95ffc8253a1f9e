# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the practicum admin API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    PracticumException,
    practicum_exception_handler,
    supabase_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    activity_logs,
    applications,
    consultations,
    contract_centers,
    health,
    records,
    students,
)
from lib.supabase_client import SupabaseClientError
from recordset import list_kinds

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown.
    """
    logger.info(f"Starting Practicum Admin API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Record kinds: {', '.join(list_kinds())}")

    yield

    logger.info("Shutting down Practicum Admin API")


# Create FastAPI application
app = FastAPI(
    title="Practicum Admin API",
    description="""
## Practicum Placement Admin API

Backs the public practicum application form and the internal admin console.

### Screens

| Kind | Table |
|------|-------|
| `students` | student applications (pending / completed / refunded tabs) |
| `education_centers` | partner education centers |
| `practice_institutions` | partner practice institutions |
| `contract_centers` | contract education center payments |
| `consultations` | consultation memos |
| `activity_logs` | admin audit log (super admins only) |

Every list endpoint takes the same query: `q`, `tab`, `date_from`, `date_to`,
`months`, `f.<field>`, `page`, `page_size`.

### Quick Start

```bash
# Pending students whose name contains 김, second page
curl "http://localhost:8000/api/v1/admin/students?q=김&tab=pending&page=2" \\
  -H "Authorization: Bearer $TOKEN"
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Current admin and permissions"},
        {"name": "Applications", "description": "Public student application form"},
        {"name": "Students", "description": "Student status transitions"},
        {"name": "Consultations", "description": "Consultation memos and attachments"},
        {"name": "Contract Centers", "description": "Contract center payment methods"},
        {"name": "Activity Logs", "description": "Admin audit log"},
        {"name": "Records", "description": "List, export and edit any record kind"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PracticumException)
async def handle_practicum_exception(request: Request, exc: PracticumException):
    """Handle custom application exceptions."""
    return await practicum_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_error(request: Request, exc: SupabaseClientError):
    """Remote data service failures."""
    logger.error(f"Supabase error on {request.method} {request.url.path}: {exc}")
    return await supabase_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================
# Kind-specific admin routers go first: their fixed paths
# (/admin/consultations/consultants, ...) must win over /admin/{kind}/{id}.

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

app.include_router(
    applications.router,
    prefix="/api/v1",
    tags=["Applications"]
)

app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

app.include_router(
    students.router,
    prefix="/api/v1/admin/students",
    tags=["Students"]
)

app.include_router(
    consultations.router,
    prefix="/api/v1/admin/consultations",
    tags=["Consultations"]
)

app.include_router(
    contract_centers.router,
    prefix="/api/v1/admin/contract_centers",
    tags=["Contract Centers"]
)

app.include_router(
    activity_logs.router,
    prefix="/api/v1/admin/activity_logs",
    tags=["Activity Logs"]
)

app.include_router(
    records.router,
    prefix="/api/v1/admin",
    tags=["Records"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Practicum Admin API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
