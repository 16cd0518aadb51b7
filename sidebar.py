# sidebar.py
import logging

import streamlit as st

from explorer.auth import AuthError, get_supabase_client, sign_out
from explorer.session import SIGN_IN_PAGE, clear_dataset, current_user, sign_out_locally


def render_sidebar(*, show_dataset: bool = True) -> None:
    with st.sidebar:

        # ───── Legend of insight icons ─────
        with st.expander("Legend of icons", expanded=False):
            st.markdown(
                """
| Icon | Meaning |
|------|---------|
| 📈 | Trend or correlation |
| ⚠️ | Anomaly or outlier |
| 💡 | General insight |
| 🔢 🏷️ 📅 | Numeric · categorical · date column |
""",
                unsafe_allow_html=True,
            )

        # ────────────────── Account ──────────────────
        st.header("Account")
        user = current_user()
        if user is None:
            st.info("Not signed in")
            return
        st.write(f"Signed in as **{user.email}**")

        if st.button("Sign out", use_container_width=True):
            try:
                sign_out(get_supabase_client(), user)
            except AuthError as e:
                # the local session is dropped regardless
                logging.warning(f"Provider sign-out failed: {e}")
            sign_out_locally()
            st.switch_page(SIGN_IN_PAGE)

        # ────────────────── Data preview ──────────────────
        if not show_dataset:
            return

        st.header("Data")
        df = st.session_state.get("current_data")
        if df is None:
            st.info("No dataset")
            return

        st.write(f"`{st.session_state.get('file_name') or 'dataset.csv'}`")
        st.write(f"{df.shape[0]:,} rows × {df.shape[1]} cols")
        if st.button("Upload another file", use_container_width=True):
            clear_dataset()
            st.rerun()
