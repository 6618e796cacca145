# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Bearer token auth backed by Supabase Auth, plus the admin email allowlist.
#
# Usage:
#   from app.auth import extract_bearer_token, verify_token, require_admin
# =============================================================================

from app.auth.dependencies import extract_bearer_token, require_admin, verify_token
from app.auth.models import AuthUser

__all__ = [
    "extract_bearer_token",
    "verify_token",
    "require_admin",
    "AuthUser",
]
