import streamlit as st

from components import inject_css, money, stat_card
from role_guard import go
from society.context import AppContext
from society.screens import ResidentDashboard


def render(ctx: AppContext):
    inject_css()
    screen = ResidentDashboard(ctx).load()
    st.title(f"🏠 {screen.greeting}")
    if screen.error:
        st.error(screen.error)
        return

    if screen.profile:
        st.caption(f"Flat {screen.profile.flatNo} · {screen.profile.contactNo}")

    col1, col2, col3 = st.columns(3)
    with col1:
        stat_card("Open complaints", str(screen.open_complaints), "Filed by you")
    with col2:
        stat_card("Amount due", money(screen.unpaid_bills), "Pending and overdue bills")
    with col3:
        stat_card("Latest notice", screen.latest_notice or "None")

    st.markdown("---")
    col_a, col_b = st.columns(2)
    if col_a.button("✍️ File a complaint", use_container_width=True):
        go("/file-complaint")
    if col_b.button("💰 View my bills", use_container_width=True):
        go("/resident-billing")
