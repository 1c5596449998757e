import logging

import streamlit as st

from auth import show_profile_section
from navigation import setup_navigation
from role_guard import get_context, pending_redirect, remember_params, start_guard
from society.core.config import configure_logging, load_settings
from society.core.errors import ConfigurationError

st.set_page_config(page_title="Society Portal", page_icon="🏘️", layout="wide")
configure_logging(load_settings().log_level)

logger = logging.getLogger("streamlit_app")

try:
    ctx = get_context()
except ConfigurationError as e:
    logger.error("Cannot start: %s", e)
    st.error(f"Configuration error: {e}")
    st.stop()

# Session -> role -> ready; nothing is routed until the guard is ready
start_guard(ctx)

pg, pages = setup_navigation(ctx)

# Apply a navigation request from the previous run
decision = pending_redirect(ctx)
if decision is not None and decision.route is not None and decision.route.name in pages:
    remember_params(decision.route, decision.params)
    st.switch_page(pages[decision.route.name])

show_profile_section(ctx)

try:
    pg.run()
except Exception as e:
    logger.exception("Unhandled error while rendering %s", pg.title)
    st.error(f"Error: {e}")
