import os
from dataclasses import dataclass

import streamlit as st
from streamlit.errors import StreamlitAPIException

from .core.constants import DEFAULT_PAGE_SIZE
from .core.logging import get_logger

logger = get_logger(__name__)

# Mapping of setting names to their corresponding environment variables
_ENV_VARS = {
    "latency_seconds": "STOCKROOM_LATENCY_SECONDS",
    "page_size": "STOCKROOM_PAGE_SIZE",
    "session_file": "STOCKROOM_SESSION_FILE",
}

_DEFAULTS = {
    "latency_seconds": "0.3",
    "page_size": str(DEFAULT_PAGE_SIZE),
    "session_file": ".stockroom_session.json",
}


@dataclass(frozen=True)
class Settings:
    latency_seconds: float
    page_size: int
    session_file: str


def _read_secrets() -> dict:
    """Return the ``[stockroom]`` table from Streamlit secrets, if any."""
    try:
        if "stockroom" in st.secrets:
            return dict(st.secrets["stockroom"])
    except (FileNotFoundError, KeyError, StreamlitAPIException):
        # No secrets.toml present
        pass
    return {}


def _coerce(name: str, raw, cast):
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid value %r for setting '%s'; using default.", raw, name)
        return cast(_DEFAULTS[name])
    if value < 0:
        logger.warning("Negative value %r for setting '%s'; using default.", raw, name)
        return cast(_DEFAULTS[name])
    return value


def load_settings() -> Settings:
    """Return settings from environment, then Streamlit secrets, then defaults."""
    secrets = _read_secrets()
    raw = {}
    for key, env in _ENV_VARS.items():
        value = os.getenv(env)
        if value in (None, ""):
            value = secrets.get(key)
        if value in (None, ""):
            value = _DEFAULTS[key]
        raw[key] = value

    page_size = _coerce("page_size", raw["page_size"], int)
    if page_size == 0:
        page_size = DEFAULT_PAGE_SIZE
    return Settings(
        latency_seconds=_coerce("latency_seconds", raw["latency_seconds"], float),
        page_size=page_size,
        session_file=str(raw["session_file"]),
    )
