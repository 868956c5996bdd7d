from pathlib import Path

import streamlit as st

from ..core.constants import SESSION_KEY_THEME, THEME_DARK, THEME_LIGHT, TX_IN, TX_OUT

CSS_PATH = Path(__file__).with_name("styles.css")
DARK_CSS_PATH = Path(__file__).with_name("dark.css")

TX_BADGE_CLASSES = {
    TX_IN: "badge-in",
    TX_OUT: "badge-out",
}


def load_theme(session) -> str:
    """Return the stored theme, defaulting to light."""
    theme = session.load(SESSION_KEY_THEME)
    return theme if theme in (THEME_LIGHT, THEME_DARK) else THEME_LIGHT


def toggle_theme(session) -> str:
    """Flip between light and dark, persist the choice and return it."""
    new_theme = THEME_DARK if load_theme(session) == THEME_LIGHT else THEME_LIGHT
    session.save(SESSION_KEY_THEME, new_theme)
    return new_theme


def load_css(theme: str = THEME_LIGHT) -> None:
    css = CSS_PATH.read_text() if CSS_PATH.exists() else ""
    if theme == THEME_DARK and DARK_CSS_PATH.exists():
        css += DARK_CSS_PATH.read_text()
    if css:
        st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)


def format_tx_badge(tx_type: str) -> str:
    css_class = TX_BADGE_CLASSES.get(tx_type, "badge-adjustment")
    return f"<span class='{css_class}'>{tx_type}</span>"
