"""Typing screen: countdown and colored reference text."""

from __future__ import annotations

import curses
from typing import List

from typespeed.core.session import SessionSnapshot
from typespeed.ui.colors import TerminalColors, char_attr, color
from typespeed.ui.models import StyledChar, styled_text


def wrap_styled(chars: List[StyledChar], width: int) -> List[List[StyledChar]]:
    """Break the text into lines no wider than ``width``, preferring spaces."""
    if width <= 0:
        return []
    lines: List[List[StyledChar]] = []
    start = 0
    while start < len(chars):
        end = min(start + width, len(chars))
        if end < len(chars):
            space = max(
                (i for i in range(start, end) if chars[i].char == " "),
                default=-1,
            )
            if space >= start:
                end = space + 1
        lines.append(chars[start:end])
        start = end
    return lines


def _put(stdscr: "curses.window", row: int, col: int, text: str, attr: int = 0) -> None:
    try:
        stdscr.addstr(row, col, text, attr)
    except curses.error:
        pass


def draw_typing(stdscr: "curses.window", snapshot: SessionSnapshot) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()

    timer_row = int(height * 0.4) + 1
    text_row = timer_row + 3

    timer = f"{snapshot.time_left}s"
    _put(stdscr, timer_row, max(0, (width - len(timer)) // 2), timer, color(TerminalColors.TIMER))

    lines = wrap_styled(styled_text(snapshot), max(1, width - 2))
    for offset, line in enumerate(lines):
        row = text_row + offset
        if row >= height:
            break
        col = max(0, (width - len(line)) // 2)
        for i, item in enumerate(line):
            _put(stdscr, row, col + i, item.char, char_attr(item.status))

    stdscr.refresh()
