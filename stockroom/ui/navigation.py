import uuid

import streamlit as st

from ..auth.auth import AuthService
from ..auth.session_store import JsonFileSessionStore
from ..config import load_settings
from ..core.constants import SESSION_ID_PARAM, THEME_DARK
from ..core.logging import flush_logs
from ..db.database_utils import connect_db
from .helpers import show_error
from .theme import load_css, load_theme, toggle_theme

NAV_LINKS = [
    ("dashboard_app.py", "📊 Dashboard"),
    ("pages/1_Items.py", "📦 Items"),
    ("pages/2_Categories.py", "🗂️ Categories"),
    ("pages/3_Suppliers.py", "🚚 Suppliers"),
    ("pages/4_Transactions.py", "🔁 Transactions"),
    ("pages/5_Reports.py", "📈 Reports"),
]


def browser_session_id() -> str:
    """Return the id of this browser session, minting one on first visit.

    The id rides in the URL so a reload restores the same stored session.
    """
    sid = st.query_params.get(SESSION_ID_PARAM)
    if not sid:
        sid = uuid.uuid4().hex
        st.query_params[SESSION_ID_PARAM] = sid
    return sid


def get_auth() -> AuthService:
    """Return this browser session's auth service, restoring any stored user."""
    if "auth_service" not in st.session_state:
        session = JsonFileSessionStore(
            load_settings().session_file, namespace=browser_session_id()
        )
        auth = AuthService(connect_db(), session)
        auth.check_auth()
        st.session_state.auth_service = auth
    auth = st.session_state.auth_service
    # page links drop query params; keep the id in the URL for reloads
    if st.query_params.get(SESSION_ID_PARAM) != auth.session.namespace:
        st.query_params[SESSION_ID_PARAM] = auth.session.namespace
    return auth


def render_sidebar_nav(include_clear_logs_button: bool = True) -> None:
    """Render sidebar navigation links to all app pages."""
    with st.sidebar:
        st.title("Inventory")
        for path, label in NAV_LINKS:
            st.page_link(path, label=label)
        if include_clear_logs_button and st.button("Clear Logs"):
            flush_logs()
            st.toast("Logs cleared")


def _render_login_form(auth: AuthService) -> None:
    st.title("🔐 Sign in to Inventory")
    login_tab, register_tab = st.tabs(["Login", "Register"])
    with login_tab:
        with st.form("login_form"):
            email = st.text_input("Email", key="login_email")
            password = st.text_input("Password", type="password", key="login_password")
            if st.form_submit_button("Sign in"):
                result = auth.login(email, password)
                if result.ok:
                    st.rerun()
                else:
                    show_error(result.message)
    with register_tab:
        with st.form("register_form"):
            name = st.text_input("Full name", key="register_name")
            email = st.text_input("Email", key="register_email")
            password = st.text_input("Password", type="password", key="register_password")
            if st.form_submit_button("Create account"):
                result = auth.register(name, email, password)
                if result.ok:
                    st.rerun()
                else:
                    show_error(result.message)


def require_login() -> AuthService:
    """Gate a page behind authentication.

    Unauthenticated sessions get the login/register screen and the page
    script stops there. Authenticated sessions get the sidebar with user
    info, theme toggle and logout.
    """
    auth = get_auth()
    theme = load_theme(auth.session)
    load_css(theme)
    if not auth.is_authenticated:
        _render_login_form(auth)
        st.stop()

    render_sidebar_nav(include_clear_logs_button=False)
    with st.sidebar:
        st.divider()
        st.markdown(f"**{auth.user['name']}**  \n{auth.user['role']}")
        label = "☀️ Light mode" if theme == THEME_DARK else "🌙 Dark mode"
        if st.button(label, key="theme_toggle_btn"):
            toggle_theme(auth.session)
            st.rerun()
        if st.button("Logout", key="logout_btn"):
            auth.logout()
            st.rerun()
    return auth
