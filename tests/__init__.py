# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Mando API gateway:
# - test_cors_origin.py: Origin validation decisions
# - test_errors.py: Error codes, status tables and classification
# - test_api.py: End-to-end tests through the FastAPI app
# - test_files.py: Upload rules and file endpoints
# - test_notifications.py: Novu client and the test notification endpoint
# - test_http_client.py: Outbound request logging
# - test_config.py: Settings parsing
#
# Run tests with: pytest
# =============================================================================
