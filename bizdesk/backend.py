"""
BIZDESK - Backend Access
========================
Builds the Supabase client every store talks to.
"""

import logging
from typing import Optional

from supabase import Client, create_client

from .config import Settings, get_settings

logger = logging.getLogger("bizdesk.backend")

TASKS_TABLE = "tasks"
SALES_TABLE = "sales"
PROFILES_TABLE = "profiles"


def create_backend(settings: Optional[Settings] = None) -> Client:
    """Create a Supabase client from settings (raises ConfigurationError)"""
    settings = settings or get_settings()
    settings.require_backend()

    client = create_client(settings.supabase_url, settings.supabase_key)
    logger.debug(f"Supabase client ready for {settings.supabase_url}")
    return client
