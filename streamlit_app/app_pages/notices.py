import datetime as dt

import streamlit as st

from components import flash, show_flash
from role_guard import go, route_param
from society.context import AppContext
from society.screens import CreateNoticeScreen, EventsScreen, NoticeBoardScreen, NoticeDetailScreen


def _notice_body(notice):
    st.caption(f"📅 {notice.date:%d %b %Y} at {notice.time:%H:%M}")
    st.write(notice.description)
    if notice.name:
        st.caption(f"Posted by {notice.name}")


def render_events(ctx: AppContext):
    st.title("📅 Events & Notices")
    show_flash()

    screen = EventsScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    if st.button("📢 Create notice"):
        go("/create-notice")

    if not screen.items:
        st.info("No notices have been posted.")
        return

    for notice in screen.items:
        with st.container(border=True):
            col1, col2 = st.columns([5, 1])
            with col1:
                st.markdown(f"### {notice.title}")
                _notice_body(notice)
            with col2:
                if st.button("Open", key=f"open_{notice.id}"):
                    go(f"/notice/{notice.id}")
                if st.button("🗑️ Delete", key=f"delete_{notice.id}"):
                    if screen.delete(notice.id):
                        flash(screen.success)
                        st.rerun()
                    st.error(screen.error)


def render_resident_notice(ctx: AppContext):
    st.title("📢 Notices")

    screen = NoticeBoardScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return
    if not screen.items:
        st.info("No notices have been posted.")
        return

    for notice in screen.items:
        with st.expander(f"{notice.title} · {notice.date:%d %b %Y}", expanded=notice is screen.items[0]):
            _notice_body(notice)


def render_create_notice(ctx: AppContext):
    st.title("📢 Create Notice")

    screen = CreateNoticeScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    with st.form("create_notice_form"):
        title = st.text_input("Title")
        col1, col2 = st.columns(2)
        date = col1.date_input("Date", value=None, min_value=dt.date.today())
        time = col2.time_input("Time", value=None)
        description = st.text_area("Description")
        st.caption(f"Posted as {screen.author or 'unknown'}")
        submitted = st.form_submit_button("Publish")

    if submitted:
        if screen.create(title, date, time, description):
            flash(screen.success)
            go("/events")
        st.error(screen.error)


def render_notice_details(ctx: AppContext):
    route = ctx.guard.route_for("notice_details")
    notice_id = route_param(route, "noticeId")
    st.title("📄 Notice")
    if st.button("← Back to events"):
        go("/events")

    if not notice_id:
        st.error("Notice not found.")
        return

    screen = NoticeDetailScreen(ctx, notice_id).load()
    if screen.error:
        st.error(screen.error)
        return

    st.markdown(f"## {screen.notice.title}")
    _notice_body(screen.notice)
