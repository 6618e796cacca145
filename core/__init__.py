# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the property collection logic:
# - models/: Pydantic schemas for the update endpoint
# - services/: Storage I/O, collection mutations, deploy hook
# =============================================================================
