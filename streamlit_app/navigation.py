"""
Navigation module for role-based page routing using st.navigation.

Only the routes the guard permits are registered, with the role's home
page as the default. Any other URL falls through to that default.
"""
from typing import Callable, Dict, Tuple

import streamlit as st
from streamlit.navigation.page import StreamlitPage

import auth
from app_pages import billing, complaints, details, home, members, notices, profile, resident_dashboard
from society.context import AppContext
from society.core.routing import Access, Route

PageRenderer = Callable[[AppContext], None]

# Route name -> function that draws the page
PAGE_RENDERERS: Dict[str, PageRenderer] = {
    "login": auth.login_ui,
    "register": auth.register_ui,
    "view_details": details.render,
    "file_complaint": complaints.render_file_complaint,
    "home": home.render,
    "maintenance": complaints.render_maintenance,
    "members": members.render_members,
    "billing": billing.render_billing,
    "create_new_bill": billing.render_create_bill,
    "events": notices.render_events,
    "create_notice": notices.render_create_notice,
    "notice_details": notices.render_notice_details,
    "complaints": complaints.render_complaints,
    "complaint_details": complaints.render_complaint_details,
    "profile": profile.render,
    "resident_dashboard": resident_dashboard.render,
    "resident_billing": billing.render_resident_billing,
    "resident_complaints": complaints.render_resident_complaints,
    "resident_notice": notices.render_resident_notice,
    "resident_members": members.render_resident_members,
    "resident_profile": profile.render,
}


def _bind(route: Route, render: PageRenderer, ctx: AppContext):
    def page():
        render(ctx)

    # st.Page infers the page identity from the function name
    page.__name__ = route.name
    return page


def get_pages(ctx: AppContext) -> Dict[str, StreamlitPage]:
    """
    Get Page objects for every route the guard currently permits, keyed by route name
    """
    home_path = ctx.guard.home_path
    pages = {}
    for route in ctx.guard.reachable_routes():
        pages[route.name] = st.Page(
            _bind(route, PAGE_RENDERERS[route.name], ctx),
            title=route.title,
            icon=route.icon or None,
            url_path=route.name.replace("_", "-"),
            default=route.path == home_path,
        )
    return pages


def show_menu(ctx: AppContext, pages: Dict[str, StreamlitPage]) -> None:
    with st.sidebar:
        st.markdown("## 🏘️ Society Portal")
        for route in ctx.guard.reachable_routes():
            if route.has_params:
                continue
            # sign-in forms stay reachable by URL but are not listed once signed in
            if ctx.guard.authenticated and route.access == Access.PUBLIC:
                continue
            st.page_link(pages[route.name], label=route.title, icon=route.icon or None)


def setup_navigation(ctx: AppContext) -> Tuple[StreamlitPage, Dict[str, StreamlitPage]]:
    """
    Setup role-based navigation and return the navigation object with the page table
    """
    pages = get_pages(ctx)

    if not pages:
        st.error("No pages available for your role. Please contact the committee.")
        st.stop()

    pg = st.navigation(list(pages.values()), position="hidden")
    show_menu(ctx, pages)
    return pg, pages
