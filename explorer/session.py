# explorer/session.py

import logging

import streamlit as st

from explorer.auth import AuthResult

SIGN_IN_PAGE = "pages/1_Sign_In.py"
EXPLORER_PAGE = "pages/2_Explorer.py"

DATASET_KEYS = ("current_data", "summary", "ai_insights", "selected_columns", "ai_response", "file_name")


def init_session_state() -> None:
    defaults = {
        "auth": None,               # AuthResult once signed in
        "current_data": None,       # DataFrame of the uploaded CSV
        "file_name": None,
        "summary": None,            # DatasetSummary
        "ai_insights": [],
        "selected_columns": [],
        "ai_response": None,
        "is_login": True,           # sign-in vs sign-up form
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def current_user() -> AuthResult | None:
    auth = st.session_state.get("auth")
    return auth if auth and auth.signed_in else None


def require_sign_in() -> AuthResult:
    """Send anonymous visitors back to the sign-in page."""
    user = current_user()
    if user is None:
        st.switch_page(SIGN_IN_PAGE)
        st.stop()
    return user


def clear_dataset() -> None:
    for key in DATASET_KEYS:
        st.session_state.pop(key, None)
    init_session_state()


def sign_out_locally() -> None:
    user = current_user()
    logging.info(f"Clearing session for {user.email if user else 'anonymous'}")
    st.session_state.clear()
    init_session_state()
