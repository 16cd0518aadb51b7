import streamlit as st

from explorer.auth import (
    CONFIRM_EMAIL_MESSAGE,
    SETUP_REQUIRED_MESSAGE,
    AuthError,
    get_supabase_client,
    is_configured,
    sign_in,
    sign_up,
)
from explorer.config import get_settings, setup_logger
from explorer.render import inject_global_css, note_box
from explorer.session import EXPLORER_PAGE, current_user, init_session_state

st.set_page_config(page_title="Sign in · Data Insight Explorer", layout="wide")

inject_global_css()
setup_logger(get_settings().log_verbosity)
init_session_state()

if current_user():
    st.switch_page(EXPLORER_PAGE)

# ── Setup check ───────────────────────────────────────────────────────────────
if not is_configured():
    note_box("⚙️ Setup Required", SETUP_REQUIRED_MESSAGE)
    st.stop()

features_col, form_col = st.columns([1, 1], gap="large")

with features_col:
    st.title("📊 Data Insight Explorer")
    st.markdown("Unlock the power of your data with advanced analytics and visualization tools.")
    st.markdown(
        """
- **📊 Advanced Analytics** – automatic per-column statistics
- **📈 Real-time Insights** – AI-generated observations about your data
- **🗂️ Interactive Dashboards** – pick the columns you want to chart
"""
    )

with form_col:
    is_login = st.session_state["is_login"]
    st.subheader("Welcome back!" if is_login else "Get started today")
    st.caption("Sign in to access your data insights" if is_login
               else "Create an account to explore your data")

    with st.form("auth_form", clear_on_submit=False):
        email = st.text_input("Email address", placeholder="Enter your email")
        password = st.text_input("Password", type="password", placeholder="Enter your password")
        submitted = st.form_submit_button(
            "Sign in" if is_login else "Create account",
            type="primary",
            use_container_width=True,
        )

    if submitted:
        if not email.strip() or not password:
            st.error("Please enter your email and password.")
        else:
            with st.spinner("Processing..."):
                try:
                    client = get_supabase_client()
                    action = sign_in if is_login else sign_up
                    result = action(client, email.strip(), password)
                except AuthError as e:
                    st.error(str(e))
                    result = None

            if result is not None:
                if result.signed_in:
                    st.session_state["auth"] = result
                    st.switch_page(EXPLORER_PAGE)
                else:
                    st.success(CONFIRM_EMAIL_MESSAGE)
                    st.session_state["is_login"] = True

    toggle_label = ("Don't have an account? Sign up" if is_login
                    else "Already have an account? Sign in")
    if st.button(toggle_label, type="tertiary"):
        st.session_state["is_login"] = not is_login
        st.rerun()
