# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    User returned by Supabase Auth for a valid access token.

    Only the fields the admin check needs are kept.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None
