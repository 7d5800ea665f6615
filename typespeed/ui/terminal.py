"""curses glue: keyboard polling and snapshot rendering."""

from __future__ import annotations

import curses
from typing import Callable, Union

from typespeed.core.driver import BACKSPACE, CANCEL, NO_EVENT, InputEvent
from typespeed.core.session import Phase, SessionSnapshot
from typespeed.ui.colors import init_colors
from typespeed.ui.results_view import draw_results
from typespeed.ui.typing_view import draw_typing

ESCAPE = "\x1b"
BACKSPACE_KEYS = ("\b", "\x7f", curses.KEY_BACKSPACE)
QUIT_KEY = "q"


def translate_key(key: Union[str, int]) -> InputEvent:
    """Map a ``get_wch`` result to an input event."""
    if key == ESCAPE:
        return CANCEL
    if key in BACKSPACE_KEYS:
        return BACKSPACE
    if isinstance(key, str) and len(key) == 1 and key.isprintable():
        return InputEvent.character(key)
    return NO_EVENT


class CursesEventSource:
    """Reads one key per poll, giving up after the timeout."""

    def __init__(self, stdscr: "curses.window") -> None:
        self._stdscr = stdscr
        self._stdscr.keypad(True)

    def __call__(self, timeout: float) -> InputEvent:
        self._stdscr.timeout(max(0, int(timeout * 1000)))
        try:
            key = self._stdscr.get_wch()
        except curses.error:
            return NO_EVENT
        except KeyboardInterrupt:
            return CANCEL
        return translate_key(key)


class CursesRenderer:
    """Draws the typing screen while the test runs and the results once finished."""

    def __init__(self, stdscr: "curses.window") -> None:
        self._stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        init_colors()

    def __call__(self, snapshot: SessionSnapshot) -> None:
        if snapshot.phase is Phase.FINISHED:
            draw_results(self._stdscr, snapshot)
        elif snapshot.phase is not Phase.CANCELLED:
            draw_typing(self._stdscr, snapshot)


def wait_for_quit(stdscr: "curses.window", redraw: Callable[[], None]) -> None:
    """Block on the results screen until ``q`` is pressed, redrawing on resize."""
    stdscr.timeout(-1)
    while True:
        try:
            key = stdscr.get_wch()
        except curses.error:
            continue
        except KeyboardInterrupt:
            return
        if key == QUIT_KEY:
            return
        if key == curses.KEY_RESIZE:
            redraw()
