import streamlit as st

from components import badge, inject_css
from role_guard import route_param
from society.context import AppContext
from society.screens import ResourceDetailScreen


def render(ctx: AppContext):
    route = ctx.guard.route_for("view_details")
    st.title("🔎 Details")

    screen = ResourceDetailScreen(ctx, route_param(route, "id")).load()
    if screen.error:
        st.error(screen.error)
        return

    resource = screen.resource
    if screen.resource_type == "complaint":
        inject_css()
        st.markdown(f"### Complaint from Flat {resource.flatNo}")
        st.markdown(badge(resource.status.value), unsafe_allow_html=True)
        st.write(resource.description)
        if resource.reply:
            st.info(f"Committee reply: {resource.reply}")
    else:
        st.markdown(f"### {resource.title}")
        st.caption(f"📅 {resource.date:%d %b %Y} at {resource.time:%H:%M}")
        st.write(resource.description)

    st.caption(f"Created by {screen.creator_name} on {resource.createdAt:%d %b %Y}")
