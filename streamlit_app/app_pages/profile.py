import streamlit as st

from society.context import AppContext
from society.screens import ProfileScreen


def render(ctx: AppContext):
    st.title("👤 My Profile")

    screen = ProfileScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    profile = screen.profile
    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"**Name:** {profile.name}")
        st.markdown(f"**Flat No.:** {profile.flatNo}")
        st.markdown(f"**Contact No.:** {profile.contactNo}")
    with col2:
        st.markdown(f"**Email:** {profile.email or '-'}")
        st.markdown(f"**Role:** {screen.role_label}")
        if profile.createdAt:
            st.markdown(f"**Member since:** {profile.createdAt:%d %b %Y}")
