# views/auth.py
import streamlit as st

from strategy_advisor.errors import AuthenticationError


def _sign_in_form(authenticator):
    with st.form(key="sign_in_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        if not username or not password:
            st.error("Please enter both username and password.")
            return

        try:
            st.session_state.auth_session = authenticator.sign_in(username, password)
        except AuthenticationError as exc:
            st.error(f"Sign-in failed: {exc}")
            return
        st.rerun()


def _create_account_form(authenticator):
    with st.form(key="sign_up_form"):
        username = st.text_input("Username")
        email = st.text_input("Email", placeholder="you@example.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Create account")

    if submitted:
        if not username or not email or not password:
            st.error("Please fill in username, email and password.")
            return

        try:
            confirmed = authenticator.sign_up(username, password, email)
        except AuthenticationError as exc:
            st.error(f"Sign-up failed: {exc}")
            return

        if confirmed:
            st.success("Account created. You can sign in now.")
        else:
            st.session_state.pending_confirmation = username
            st.success("Account created. Check your email for a confirmation code.")


def _confirm_form(authenticator):
    with st.form(key="confirm_form"):
        username = st.text_input("Username", value=st.session_state.get("pending_confirmation", ""))
        code = st.text_input("Confirmation code")
        submitted = st.form_submit_button("Confirm")

    if submitted:
        try:
            authenticator.confirm_sign_up(username, code.strip())
        except AuthenticationError as exc:
            st.error(f"Confirmation failed: {exc}")
            return
        st.session_state.pop("pending_confirmation", None)
        st.success("Account confirmed. You can sign in now.")


def render_auth(authenticator):
    st.header("🔐 Sign in / Sign up")
    st.caption("Authenticate to get personalized investment strategies.")

    mode = st.radio("Mode", ["Sign in", "Create account", "Confirm account"], horizontal=True)

    if mode == "Sign in":
        _sign_in_form(authenticator)
    elif mode == "Create account":
        _create_account_form(authenticator)
    else:
        _confirm_form(authenticator)


def latest_session(state):
    """Session with the newest tokens; the credential provider refreshes its own copy."""
    controller = state.get("controller")
    provider = getattr(controller, "credential_provider", None)
    if provider is not None and getattr(provider, "session", None) is not None:
        return provider.session
    return state.get("auth_session")


def render_user_bar(authenticator):
    session = latest_session(st.session_state)

    col_welcome, col_button = st.columns([5, 1])
    with col_welcome:
        st.markdown(f"Welcome, **{session.username or 'User'}**!")
    with col_button:
        if st.button("Sign Out", key="sign_out"):
            authenticator.sign_out(session)
            for key in ("auth_session", "controller"):
                st.session_state.pop(key, None)
            st.rerun()
