import logging

import streamlit as st

from society.context import (
    AppContext,
    create_local_backend,
    create_local_context,
    create_supabase_context,
)
from society.core.config import Settings

logger = logging.getLogger(__name__)


@st.cache_resource
def _local_backend():
    """One in-memory store and account book for every browser session of this server."""
    return create_local_backend()


def create_app_context(settings: Settings) -> AppContext:
    """
    Build the context for a new browser session.

    DISABLE_AUTH=true keeps everything in-process; otherwise each browser
    session gets its own Supabase client so sessions never leak between users.
    """
    if settings.disable_auth:
        logger.info("AUTH MODE: DISABLED (local accounts, in-memory store)")
        store, book = _local_backend()
        return create_local_context(settings, store, book)

    logger.info("AUTH MODE: ENABLED (Supabase)")
    return create_supabase_context(settings)
