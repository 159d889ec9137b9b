"""
Supabase client factory for the key-value storage backend.

Only used when STORAGE_BACKEND=supabase. The app has no user accounts, so a
single client created with the publishable key is shared for the process.
Access control is left to the table's RLS policies.
"""

import logging
from typing import Optional

from scout.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)

_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get or create the shared Supabase client.

    Returns:
        A Supabase client created with SUPABASE_PUBLISHABLE_KEY.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_PUBLISHABLE_KEY is not configured.
    """
    global _supabase_client

    if _supabase_client is not None:
        return _supabase_client

    if not settings.SUPABASE_URL or not settings.SUPABASE_PUBLISHABLE_KEY:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_PUBLISHABLE_KEY must be set "
            "to use the supabase storage backend."
        )

    _supabase_client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )

    logger.debug("Created Supabase client for key-value storage")

    return _supabase_client
