import pytest

from stockroom.auth.session_store import MemorySessionStore
from stockroom.core.constants import SESSION_ID_PARAM
from stockroom.core.errors import ErrorKind, Result
from stockroom.ui import helpers, navigation
from stockroom.ui.helpers import format_change, format_optional, submission_guard
from stockroom.ui.theme import format_tx_badge, load_theme, toggle_theme


def test_format_change():
    assert format_change(5) == "+5"
    assert format_change(-3) == "-3"
    assert format_change(0) == "0"


def test_format_optional():
    assert format_optional(None) == "-"
    assert format_optional("") == "-"
    assert format_optional("Aisle 3") == "Aisle 3"


def test_submission_guard_blocks_second_submit():
    state = {}
    with submission_guard(state, "add") as first:
        assert first
        with submission_guard(state, "add") as second:
            assert not second
    assert state["add_in_flight"] is False
    with submission_guard(state, "add") as again:
        assert again


def test_submission_guard_clears_flag_on_error():
    state = {}
    try:
        with submission_guard(state, "save"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert not state["save_in_flight"]


def test_theme_defaults_to_light_and_toggles():
    session = MemorySessionStore()
    assert load_theme(session) == "light"
    assert toggle_theme(session) == "dark"
    assert session.load("theme") == "dark"
    assert toggle_theme(session) == "light"


def test_unknown_stored_theme_is_ignored():
    assert load_theme(MemorySessionStore({"theme": "neon"})) == "light"


def test_tx_badge_classes():
    assert "badge-in" in format_tx_badge("IN")
    assert "badge-out" in format_tx_badge("OUT")
    assert "badge-adjustment" in format_tx_badge("ADJUSTMENT")


class RecordingStreamlit:
    """Stands in for the ``st`` module and records what a helper asked for."""

    def __init__(self):
        self.calls = []
        self.query_params = {}

    def toast(self, msg, icon=None):
        self.calls.append(("toast", msg))

    def error(self, msg, icon=None):
        self.calls.append(("error", msg))

    def rerun(self):
        self.calls.append(("rerun", None))


@pytest.fixture
def fake_st(monkeypatch):
    fake = RecordingStreamlit()
    monkeypatch.setattr(helpers, "st", fake)
    return fake


def test_form_failure_without_field_errors_stays_on_screen(fake_st):
    state = {"errors": {"name": "old"}}
    result = Result.fail(ErrorKind.NOT_FOUND, "Update failed: Category ID 9 not found.")
    helpers.handle_form_result(result, state, "errors")
    assert fake_st.calls == [("error", "Update failed: Category ID 9 not found.")]
    assert state["errors"] == {}


def test_form_field_errors_rerun_without_alert(fake_st):
    state = {}
    result = Result.fail(ErrorKind.REQUIRED, "Please correct the highlighted fields.", {"name": "Category name is required"})
    helpers.handle_form_result(result, state, "errors")
    assert fake_st.calls == [("rerun", None)]
    assert state["errors"] == {"name": "Category name is required"}


def test_form_success_toasts_then_reruns(fake_st):
    state = {}
    helpers.handle_form_result(Result.success(None, "Category 'Garden' added."), state, "errors")
    assert fake_st.calls == [("toast", "Category 'Garden' added."), ("rerun", None)]
    assert state["errors"] == {}


def test_browser_session_id_is_minted_once(monkeypatch):
    fake = RecordingStreamlit()
    monkeypatch.setattr(navigation, "st", fake)
    first = navigation.browser_session_id()
    assert fake.query_params[SESSION_ID_PARAM] == first
    assert navigation.browser_session_id() == first
    fake.query_params.clear()
    assert navigation.browser_session_id() != first
