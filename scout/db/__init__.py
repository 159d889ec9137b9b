"""
Database access layer for Global Gourmet Scout backend.

Only the Supabase client factory lives here; the key-value table itself is
wrapped by scout.services.storage.SupabaseKeyValueStore.
"""

from .client import get_supabase_client

__all__ = ["get_supabase_client"]
