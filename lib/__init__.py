# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# - supabase_client.py: Supabase client factory (public singleton and
#   per-request clients)
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError

__all__ = [
    "SupabaseClient",
    "SupabaseClientError",
]
