import logging

import streamlit as st

from components import show_flash
from role_guard import go, sign_out
from society.context import AppContext
from society.core.auth import LOCAL_ADMIN_EMAIL, LOCAL_ADMIN_PASSWORD
from society.schemas.user import Role
from society.screens import LoginScreen, RegisterScreen

logger = logging.getLogger(__name__)

ROLE_OPTIONS = [role.value for role in Role]


def _login_screen(ctx: AppContext) -> LoginScreen:
    # kept across reruns so the phone number survives between "send" and "verify"
    screen = st.session_state.get("login_screen")
    if screen is None or screen.ctx is not ctx:
        screen = LoginScreen(ctx)
        st.session_state["login_screen"] = screen
    return screen


def _finish_login(screen: LoginScreen) -> None:
    st.session_state.pop("login_screen", None)
    go(screen.redirect_to or "/")


def login_ui(ctx: AppContext):
    st.title("Login")
    show_flash()
    screen = _login_screen(ctx)

    if screen.redirect_to:
        st.info("You are already signed in.")
        if st.button("Go to my dashboard"):
            go(screen.redirect_to)
        return

    if ctx.settings.disable_auth:
        # AUTH BYPASS MODE - local accounts, nothing leaves this process
        st.info("🔓 Auth is currently disabled - Click below to continue")
        st.caption(f"Seeded committee account: {LOCAL_ADMIN_EMAIL} / {LOCAL_ADMIN_PASSWORD}")
        if st.button("Continue (No Auth Required)"):
            if screen.sign_in(LOCAL_ADMIN_EMAIL, LOCAL_ADMIN_PASSWORD):
                _finish_login(screen)
            st.error(screen.error)
        st.markdown("---")

    tab1, tab2 = st.tabs(["🔐 Email", "📱 Phone"])

    with tab1:
        st.markdown("### Email/Password Login")
        with st.form("login_form"):
            email = st.text_input("Email", key="login_email")
            password = st.text_input("Password", type="password", key="login_password")
            submitted = st.form_submit_button("Login")

        if submitted:
            if screen.sign_in(email, password):
                st.success(f"✅ {screen.success}")
                _finish_login(screen)
            st.error(f"❌ {screen.error}")

    with tab2:
        st.markdown("### Sign in with a verification code")
        st.caption(
            f"Numbers without a country code are sent to {ctx.settings.phone_country_code}."
        )
        phone_number = st.text_input("Phone number", key="login_phone")
        if st.button("Send code", key="send_code_btn"):
            if screen.send_code(phone_number):
                st.success(screen.success)
            else:
                st.error(screen.error)

        if screen.code_sent:
            code = st.text_input("Verification code", key="login_code", max_chars=6)
            if st.button("Verify", key="verify_code_btn"):
                if screen.verify_code(code):
                    _finish_login(screen)
                st.error(screen.error)

    st.markdown("---")
    st.caption("New to the society portal?")
    if st.button("📝 Create an account"):
        go("/register")


def register_ui(ctx: AppContext):
    st.title("Create New Account")
    screen = RegisterScreen(ctx)

    with st.form("register_form"):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Full Name")
            flat_no = st.text_input("Flat No.")
            contact_no = st.text_input("Contact No.")
        with col2:
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            confirm_password = st.text_input("Confirm Password", type="password")
        role = st.selectbox("Role", ROLE_OPTIONS, index=ROLE_OPTIONS.index(Role.RESIDENT.value))
        submitted = st.form_submit_button("Sign Up")

    if submitted:
        if not screen.register(
            name,
            flat_no,
            contact_no,
            email,
            password,
            role=role,
            confirm_password=confirm_password,
        ):
            st.error(f"❌ {screen.error}")
        elif screen.needs_confirmation:
            st.success(f"✅ {screen.success}")
            st.info("Once verified, you can sign in from the Login page.")
        else:
            st.success(f"✅ {screen.success}")
            go("/")

    st.markdown("---")
    if st.button("🔐 Already have an account? Log in"):
        go("/login")


def show_profile_section(ctx: AppContext):
    """Signed-in user's name, role and a sign-out button at the bottom of the sidebar."""
    session = ctx.session
    if session is None:
        return
    with st.sidebar:
        st.markdown("---")
        st.caption("Signed in as")
        st.markdown(f"**{session.email or session.phone or session.user_id}**")
        if ctx.role:
            st.caption(ctx.role.value)
        if st.button("🚪 Sign out", key="sign_out_btn", use_container_width=True):
            sign_out(ctx)
