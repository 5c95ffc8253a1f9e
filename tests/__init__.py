# =============================================================================
# tests/ - Test Suite
# =============================================================================
# - test_engine.py / test_paginator.py / test_view_state.py: list screen logic
# - test_list_content.py / test_formatting.py: codec and formatting helpers
# - test_models.py: Pydantic model validation
# - test_services.py: services against a mocked SupabaseClient
# - test_api.py: endpoints through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
