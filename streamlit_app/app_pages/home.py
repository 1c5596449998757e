import pandas as pd
import plotly.express as px
import streamlit as st

from components import inject_css, money, stat_card
from role_guard import go
from society.context import AppContext
from society.screens import CommitteeDashboard


def render(ctx: AppContext):
    st.title("🏠 Committee Dashboard")
    inject_css()

    screen = CommitteeDashboard(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        stat_card("Pending complaints", str(screen.pending_complaints), "Waiting for the committee")
    with col2:
        stat_card("Unpaid bills", money(screen.unpaid_bills), "Pending and overdue")
    with col3:
        stat_card("Upcoming event", screen.upcoming_event or "None", "Latest notice")

    st.subheader("Complaints by status")
    df = pd.DataFrame(
        {"Status": list(screen.complaints_by_status), "Complaints": list(screen.complaints_by_status.values())}
    )
    if df["Complaints"].sum() == 0:
        st.info("No complaints filed yet.")
    else:
        fig = px.bar(df, x="Status", y="Complaints", color="Status", text="Complaints")
        fig.update_layout(showlegend=False, height=320, margin=dict(l=10, r=10, t=10, b=10))
        st.plotly_chart(fig, use_container_width=True)

    st.subheader("Past notices")
    if screen.past_notices:
        for headline in screen.past_notices:
            st.markdown(f"- {headline}")
    else:
        st.caption("No earlier notices.")

    st.markdown("---")
    col_a, col_b, col_c = st.columns(3)
    if col_a.button("📋 Review complaints", use_container_width=True):
        go("/complaints")
    if col_b.button("🧾 Create a bill", use_container_width=True):
        go("/create-new-bill")
    if col_c.button("📢 Post a notice", use_container_width=True):
        go("/create-notice")
