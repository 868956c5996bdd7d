from contextlib import contextmanager
from typing import Dict, Iterator, MutableMapping

import streamlit as st

from ..services.list_utils import clamp_page


def format_change(change: int) -> str:
    """Signed quantity for display: ``+5`` / ``-3``."""
    return f"+{change}" if change > 0 else str(change)


def format_optional(value, empty: str = "-") -> str:
    return empty if value is None or value == "" else str(value)


@contextmanager
def submission_guard(state: MutableMapping, key: str) -> Iterator[bool]:
    """Yield True if no submission under ``key`` is already in flight.

    The flag lives in ``state`` (normally ``st.session_state``) and is always
    cleared on exit, so a rapid second submit is ignored rather than queued.
    """
    flag = f"{key}_in_flight"
    if state.get(flag):
        yield False
        return
    state[flag] = True
    try:
        yield True
    finally:
        state[flag] = False


def render_field_error(field_errors: Dict[str, str], field: str) -> None:
    """Show the inline message for ``field`` under its widget, if any."""
    message = field_errors.get(field)
    if message:
        st.markdown(f"<div class='field-error'>{message}</div>", unsafe_allow_html=True)


def pagination_controls(total_pages: int, *, current_page_key: str) -> int:
    """Render Previous / Page x of y / Next and return the current page.

    Navigation is disabled outside ``[1, total_pages]``; the stored page is
    clamped first so a shrinking result set never strands the user.
    """
    current_page = clamp_page(st.session_state.get(current_page_key, 1), total_pages)
    st.session_state[current_page_key] = current_page
    if total_pages <= 1:
        return current_page

    cols = st.columns([1, 2, 1])
    if cols[0].button(
        "⬅️ Previous",
        key=f"{current_page_key}_prev_btn",
        disabled=current_page == 1,
    ):
        st.session_state[current_page_key] = current_page - 1
        st.rerun()
    cols[1].write(f"Page {current_page} of {total_pages}")
    if cols[2].button(
        "Next ➡️",
        key=f"{current_page_key}_next_btn",
        disabled=current_page == total_pages,
    ):
        st.session_state[current_page_key] = current_page + 1
        st.rerun()
    return current_page


def show_success(msg: str) -> None:
    """Display a success message using toast if available."""
    if hasattr(st, "toast"):
        st.toast(msg, icon="✅")
    else:
        st.success(msg)


def show_warning(msg: str) -> None:
    """Display a warning message using toast if available."""
    if hasattr(st, "toast"):
        st.toast(msg, icon="⚠️")
    else:
        st.warning(msg)


def show_error(msg: str) -> None:
    """Display a blocking error message."""
    st.error(msg, icon="❌")


def handle_form_result(result, state: MutableMapping, errors_key: str) -> None:
    """Surface a service ``Result`` after a form submit.

    Field errors are kept in ``state[errors_key]`` for the inline messages.
    Success and field errors rerun the script so the page redraws; any other
    failure is shown in place, since a rerun would wipe it.
    """
    state[errors_key] = result.field_errors
    if result.ok:
        show_success(result.message)
        st.rerun()
    elif result.field_errors:
        st.rerun()
    else:
        show_error(result.message)
