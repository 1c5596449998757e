import streamlit as st

from components import badge, flash, inject_css, records_table, show_flash, show_messages
from role_guard import go, route_param
from society.context import AppContext
from society.schemas.complaint import ComplaintStatus
from society.screens import (
    ComplaintDetailScreen,
    ComplaintsScreen,
    FileComplaintScreen,
    MaintenanceScreen,
    ResidentComplaintsScreen,
)

STATUS_OPTIONS = [status.value for status in ComplaintStatus]

COLUMNS = {
    "name": "Member",
    "flatNo": "Flat",
    "description": "Issue",
    "status": "Status",
    "reply": "Reply",
    "createdAt": "Filed on",
}


def _complaint_card(ctx: AppContext, complaint, action_path: str):
    with st.container(border=True):
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(f"**{complaint.name}** · Flat {complaint.flatNo}")
            st.write(complaint.description)
            if complaint.reply:
                st.caption(f"Reply: {complaint.reply}")
        with col2:
            st.markdown(badge(complaint.status.value), unsafe_allow_html=True)
            st.caption(complaint.createdAt.strftime("%d %b %Y"))
            if st.button("Open", key=f"open_{complaint.id}"):
                go(f"{action_path}/{complaint.id}")


def render_complaints(ctx: AppContext):
    st.title("📋 Complaints")
    inject_css()
    show_flash()

    screen = ComplaintsScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    counts = screen.count_by_status()
    cols = st.columns(len(counts))
    for col, (status, count) in zip(cols, counts.items()):
        col.metric(status.value, count)

    selected = st.selectbox("Filter by status", ["All"] + STATUS_OPTIONS)
    items = [c for c in screen.items if selected == "All" or c.status.value == selected]
    if not items:
        st.info("No complaints found.")
        return
    for complaint in items:
        _complaint_card(ctx, complaint, "/complaints")


def render_resident_complaints(ctx: AppContext):
    st.title("📋 My Complaints")
    show_flash()

    screen = ResidentComplaintsScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    if st.button("✍️ File a new complaint"):
        go("/file-complaint")

    if not screen.items:
        st.info("You have not filed any complaints.")
        return
    records_table(screen.items, COLUMNS)

    with st.expander("Open a complaint"):
        labels = {f"{c.description[:40]} ({c.status.value})": c.id for c in screen.items}
        choice = st.selectbox("Complaint", list(labels))
        if st.button("View details"):
            go(f"/view-details/{labels[choice]}")


def render_file_complaint(ctx: AppContext):
    st.title("✍️ File a Complaint")

    screen = FileComplaintScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    with st.form("file_complaint_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        col1.text_input("Name", value=screen.member, disabled=True)
        col2.text_input("Flat No.", value=screen.flat_no, disabled=True)
        description = st.text_area("Describe the issue")
        submitted = st.form_submit_button("Submit complaint")

    if submitted:
        if screen.submit(description):
            flash(screen.success)
            go("/complaints" if ctx.guard.permits(ctx.guard.route_for("complaints")) else "/resident-complaints")
        st.error(screen.error)


def render_maintenance(ctx: AppContext):
    st.title("🛠️ Maintenance Queue")
    st.caption("Open complaints, oldest first.")
    inject_css()
    show_flash()

    screen = MaintenanceScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return
    if not screen.items:
        st.success("Nothing waiting. Every complaint is done.")
        return

    for complaint in screen.items:
        with st.container(border=True):
            col1, col2 = st.columns([4, 1])
            with col1:
                st.markdown(f"**Flat {complaint.flatNo}** · {complaint.name}")
                st.write(complaint.description)
            with col2:
                st.markdown(badge(complaint.status.value), unsafe_allow_html=True)
                if st.button("Mark done", key=f"done_{complaint.id}"):
                    if screen.mark_done(complaint.id):
                        flash(screen.success)
                        st.rerun()
                    st.error(screen.error)


def render_complaint_details(ctx: AppContext):
    route = ctx.guard.route_for("complaint_details")
    complaint_id = route_param(route, "id")
    st.title("🗂️ Complaint Details")
    if st.button("← Back to complaints"):
        go("/complaints")

    if not complaint_id:
        st.error("Invalid complaint ID.")
        return

    screen = ComplaintDetailScreen(ctx, complaint_id).load()
    if screen.error:
        st.error(screen.error)
        return

    complaint = screen.complaint
    inject_css()
    st.markdown(f"### {complaint.name} · Flat {complaint.flatNo}")
    st.markdown(badge(complaint.status.value), unsafe_allow_html=True)
    st.write(complaint.description)
    st.caption(f"Filed on {complaint.createdAt.strftime('%d %b %Y %H:%M')}")
    if complaint.updatedAt:
        st.caption(f"Last updated {complaint.updatedAt.strftime('%d %b %Y %H:%M')}")

    col1, col2 = st.columns(2)
    with col1:
        with st.form("complaint_status_form"):
            status = st.selectbox(
                "Status", STATUS_OPTIONS, index=STATUS_OPTIONS.index(complaint.status.value)
            )
            if st.form_submit_button("Update status"):
                screen.update_status(status)
    with col2:
        with st.form("complaint_reply_form"):
            reply = st.text_area("Reply", value=complaint.reply or "")
            if st.form_submit_button("Save reply"):
                screen.reply(reply)

    show_messages(screen)
