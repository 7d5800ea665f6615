"""Tests for typespeed.app – CLI parsing, summary and exit codes."""

from __future__ import annotations

import pytest

from typespeed import app
from typespeed.core.config import AppConfig
from typespeed.core.driver import SessionOutcome
from typespeed.core.session import TestResult


@pytest.fixture()
def result() -> TestResult:
    return TestResult(
        wpm=42.5,
        elapsed=15.0,
        duration=15,
        typed_chars=60,
        correct_chars=55,
        chart=((0.5, 24.0), (1.0, 36.0)),
    )


@pytest.fixture()
def fake_terminal(monkeypatch: pytest.MonkeyPatch):
    """Replace curses.wrapper and the config loader; record what the test ran with."""
    calls = {}

    def _configure(outcome: SessionOutcome, config: AppConfig = AppConfig(text="hello world")):
        monkeypatch.setattr(app, "load_config", lambda: config)

        def _wrapper(func, cfg, duration):
            calls["config"] = cfg
            calls["duration"] = duration
            return outcome

        monkeypatch.setattr(app.curses, "wrapper", _wrapper)
        monkeypatch.setattr(app.locale, "setlocale", lambda *a: "C")
        return calls

    return _configure


# ---------------------------------------------------------------------------
# parse_args
# ---------------------------------------------------------------------------

class TestParseArgs:
    def test_no_flag(self):
        assert app.parse_args([]).duration is None

    def test_duration_flag(self):
        assert app.parse_args(["-t", "30"]).duration == "30"

    def test_bad_value_kept_raw(self):
        assert app.parse_args(["-t", "abc"]).duration == "abc"

    def test_flag_without_value(self):
        assert app.parse_args(["-t"]).duration is None

    def test_extra_arguments_ignored(self):
        assert app.parse_args(["-t", "20", "extra"]).duration == "20"


# ---------------------------------------------------------------------------
# format_result
# ---------------------------------------------------------------------------

class TestFormatResult:
    def test_contains_final_wpm(self, result: TestResult):
        text = app.format_result(result)
        assert "Final WPM: 42.50" in text

    def test_contains_counts(self, result: TestResult):
        text = app.format_result(result)
        assert "60 typed" in text
        assert "55 correct" in text
        assert "15.00s of 15s" in text


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

class TestRun:
    def test_completed_prints_summary(self, fake_terminal, result, capsys):
        fake_terminal(SessionOutcome(completed=True, result=result))
        assert app.run([]) == 0
        assert "Final WPM: 42.50" in capsys.readouterr().out

    def test_cancelled_prints_nothing(self, fake_terminal, capsys):
        fake_terminal(SessionOutcome(completed=False))
        assert app.run([]) == 1
        assert "WPM" not in capsys.readouterr().out

    def test_default_duration_from_config(self, fake_terminal):
        calls = fake_terminal(SessionOutcome(completed=False), AppConfig(text="x", duration=20))
        app.run([])
        assert calls["duration"] == 20

    def test_flag_overrides_duration(self, fake_terminal):
        calls = fake_terminal(SessionOutcome(completed=False))
        app.run(["-t", "45"])
        assert calls["duration"] == 45

    def test_unparseable_flag_falls_back(self, fake_terminal):
        calls = fake_terminal(SessionOutcome(completed=False))
        app.run(["-t", "later"])
        assert calls["duration"] == 15

    def test_flag_without_value_uses_default(self, fake_terminal):
        calls = fake_terminal(SessionOutcome(completed=False))
        app.run(["-t"])
        assert calls["duration"] == 15

    def test_extra_arguments_do_not_abort(self, fake_terminal):
        calls = fake_terminal(SessionOutcome(completed=False))
        app.run(["-t", "20", "extra"])
        assert calls["duration"] == 20

    def test_missing_locale_is_recovered(self, fake_terminal, monkeypatch: pytest.MonkeyPatch):
        calls = fake_terminal(SessionOutcome(completed=False))

        def _unsupported(*args):
            raise app.locale.Error("unsupported locale setting")

        monkeypatch.setattr(app.locale, "setlocale", _unsupported)
        assert app.run([]) == 1
        assert calls["duration"] == 15

    def test_broken_config_exits_before_terminal(self, monkeypatch: pytest.MonkeyPatch):
        def _broken():
            raise ValueError("config.yaml: 'text' is empty")

        def _wrapper(*args):
            raise AssertionError("terminal must not start")

        monkeypatch.setattr(app, "load_config", _broken)
        monkeypatch.setattr(app.curses, "wrapper", _wrapper)
        assert app.run([]) == 1
