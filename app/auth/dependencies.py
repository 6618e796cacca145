# =============================================================================
# app/auth/dependencies.py - Bearer Token Auth
# =============================================================================
# Authenticates admin requests in three steps:
# 1. extract_bearer_token(): pull the token out of "Authorization: Bearer <t>"
# 2. verify_token(): ask Supabase Auth who the token belongs to
# 3. require_admin(): check the user's email against ADMIN_EMAILS
#
# Tokens are verified by Supabase itself (auth.get_user), not decoded locally.
#
# Usage:
#   token = extract_bearer_token(request.headers.get("authorization"))
#   user = verify_token(token, settings)
#   require_admin(user, settings)
# =============================================================================

import logging

from app.auth.models import AuthUser
from app.config import Settings
from app.exceptions import InvalidTokenError, MissingTokenError, NotAdminError
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str:
    """
    Get the token from an Authorization header value.

    The prefix is matched literally and case-sensitively. The token is the
    second space-separated segment of the header.

    Raises:
        MissingTokenError: If the header is absent, malformed or empty
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise MissingTokenError()

    token = authorization.split(" ")[1]
    if not token:
        raise MissingTokenError()
    return token


def verify_token(token: str, config: Settings) -> AuthUser:
    """
    Resolve a user access token with Supabase Auth.

    Uses a client built with the anon key.

    Args:
        token: Access token from the admin frontend
        config: Settings holding the Supabase URL and anon key

    Returns:
        AuthUser: The user the token belongs to

    Raises:
        InvalidTokenError: If Supabase rejects the token or returns no user
    """
    client = SupabaseClient.create_auth_client(config)

    try:
        response = client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token verification failed: {e}")
        raise InvalidTokenError(str(e))

    user = getattr(response, "user", None) if response else None
    if user is None:
        logger.warning("Token verification returned no user")
        raise InvalidTokenError("no user")

    logger.debug(f"Authenticated user: {user.id}")
    return AuthUser(id=str(user.id), email=user.email)


def require_admin(user: AuthUser, config: Settings) -> AuthUser:
    """
    Check that the user is on the admin allowlist.

    Raises:
        NotAdminError: If the user's email is not in ADMIN_EMAILS
    """
    email = (user.email or "").lower()
    if email not in config.admin_emails_list:
        logger.warning(f"Rejected non-admin user {user.id} ({email or 'no email'})")
        raise NotAdminError(email)
    return user
