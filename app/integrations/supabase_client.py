"""
Supabase integration (detection history table).

`client` starts as None. Call `initialize()` inside the FastAPI lifespan
context manager. Consuming modules reference `supabase_client.client` at
call time rather than importing the variable directly.
"""

import logging

from supabase import create_client

from app.config import settings

logger = logging.getLogger(__name__)

# Set by initialize(). None when Supabase credentials are absent or init fails.
client = None  # supabase.Client | None


def initialize() -> None:
    """Create the Supabase client and bind it to the module-level `client`."""
    global client

    url = settings.supabase_resolved_url
    key = settings.supabase_resolved_key

    if url and key:
        try:
            client = create_client(url, key)
            logger.info(f"[STARTUP] Supabase client initialized (table: {settings.supabase_table})")
        except Exception as e:
            logger.error(f"[STARTUP] Failed to initialize Supabase client: {e}")
    else:
        logger.warning(
            "[STARTUP] Supabase credentials not found. Detection history is disabled."
        )
