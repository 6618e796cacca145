# =============================================================================
# tests/ - Test Suite
# =============================================================================
# Tests for the Property Admin API:
# - test_property_service.py: add/edit/delete and id matching
# - test_storage_service.py: properties.json download/upload
# - test_update_endpoint.py: POST /api/update-and-deploy end to end
# - test_config.py, test_supabase_client.py, test_deploy_hook_service.py,
#   test_health.py: supporting modules
#
# Run tests with: pytest
# =============================================================================
