"""
Bridge between Streamlit's session state and the route guard.

The guard lives inside the per-browser ``AppContext``; pages never check
roles themselves. Navigation requests go through ``go`` so every move is
decided by the guard on the next run.
"""
import logging
from typing import Dict, Optional

import streamlit as st

from society.context import AppContext
from society.core.config import load_settings
from society.core.routing import Route, RouteDecision
from supabase_client import create_app_context

logger = logging.getLogger(__name__)

CONTEXT_KEY = "ctx"
REDIRECT_KEY = "redirect_to"
PARAMS_KEY = "route_params"


def get_context() -> AppContext:
    ctx = st.session_state.get(CONTEXT_KEY)
    if ctx is None:
        ctx = create_app_context(load_settings())
        st.session_state[CONTEXT_KEY] = ctx
    return ctx


def start_guard(ctx: AppContext) -> None:
    """Run the LOADING_SESSION -> LOADING_ROLE -> READY transitions once per browser session."""
    if ctx.guard.is_ready:
        return
    with st.spinner("🔄 Loading your dashboard..."):
        ctx.guard.start()


def go(path: str) -> None:
    """Ask for ``path``; the guard decides on the next run whether it is shown or redirected."""
    st.session_state[REDIRECT_KEY] = path
    st.rerun()


def pending_redirect(ctx: AppContext) -> Optional[RouteDecision]:
    path = st.session_state.pop(REDIRECT_KEY, None)
    if path is None:
        return None
    decision = ctx.guard.resolve(path)
    if decision.redirect_to:
        logger.info("Redirecting %s to %s", path, decision.redirect_to)
        decision = ctx.guard.resolve(decision.redirect_to)
    return decision


def remember_params(route: Route, params: Dict[str, str]) -> None:
    st.session_state[PARAMS_KEY] = {"route": route.name, **params}


def route_param(route: Route, name: str) -> Optional[str]:
    """Path parameter for ``route``: the ``id`` query parameter wins, then the last ``go`` call."""
    value = st.query_params.get("id")
    if value:
        return value
    params = st.session_state.get(PARAMS_KEY) or {}
    if params.get("route") != route.name:
        return None
    return params.get(name)


def sign_out(ctx: AppContext) -> None:
    ctx.sessions.sign_out()
    st.session_state.pop(PARAMS_KEY, None)
    go("/login")
