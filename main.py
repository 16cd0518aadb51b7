import streamlit as st

from explorer.config import get_settings, setup_logger
from explorer.session import EXPLORER_PAGE, SIGN_IN_PAGE, current_user, init_session_state

st.set_page_config(
    page_title="Data Insight Explorer",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

setup_logger(get_settings().log_verbosity)
init_session_state()

st.switch_page(EXPLORER_PAGE if current_user() else SIGN_IN_PAGE)
