import streamlit as st

from components import flash, records_table, show_flash
from society.context import AppContext
from society.schemas.user import Role
from society.screens import MembersScreen, ResidentMembersScreen

ROLE_OPTIONS = [role.value for role in Role]

COLUMNS = {
    "name": "Name",
    "flatNo": "Flat",
    "contactNo": "Contact",
    "email": "Email",
    "role": "Role",
}


def render_members(ctx: AppContext):
    st.title("👥 Members")
    show_flash()

    screen = MembersScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return

    with st.expander("➕ Add a member"):
        with st.form("add_member_form", clear_on_submit=True):
            col1, col2 = st.columns(2)
            name = col1.text_input("Full Name")
            flat_no = col1.text_input("Flat No.")
            contact_no = col1.text_input("Contact No.")
            email = col2.text_input("Email")
            password = col2.text_input("Temporary password", type="password")
            role = col2.selectbox("Role", ROLE_OPTIONS)
            submitted = st.form_submit_button("Add member")
        if submitted:
            if screen.add_member(name, flat_no, contact_no, email, password, role=role):
                flash(screen.success)
                st.rerun()
            st.error(screen.error)

    if not screen.items:
        st.info("No members registered yet.")
        return

    for member in screen.items:
        with st.container(border=True):
            col1, col2, col3 = st.columns([3, 3, 1])
            col1.markdown(f"**{member.name}**  \nFlat {member.flatNo}")
            col2.caption(f"{member.effective_role.value} · {member.contactNo}")
            if col3.button("Remove", key=f"remove_{member.id}", disabled=member.id == ctx.user_id):
                if screen.delete(member.id):
                    flash(screen.success)
                    st.rerun()
                st.error(screen.error)


def render_resident_members(ctx: AppContext):
    st.title("👥 Members")

    screen = ResidentMembersScreen(ctx).load()
    if screen.error:
        st.error(screen.error)
        return
    if not screen.items:
        st.info("No members registered yet.")
        return
    records_table(screen.items, COLUMNS)
