"""Terminal color palette and character attributes."""

import curses

from typespeed.ui.models import CharStatus


class TerminalColors:
    """curses color pair ids used by the screens."""

    CORRECT = 1
    INCORRECT = 2
    PENDING = 3
    TIMER = 4
    CHART = 5
    CARET = 6


def init_colors() -> None:
    """Register color pairs. Terminals without color keep default attributes."""
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(TerminalColors.CORRECT, curses.COLOR_GREEN, -1)
    curses.init_pair(TerminalColors.INCORRECT, curses.COLOR_RED, -1)
    curses.init_pair(TerminalColors.PENDING, curses.COLOR_WHITE, -1)
    curses.init_pair(TerminalColors.TIMER, curses.COLOR_BLUE, -1)
    curses.init_pair(TerminalColors.CHART, curses.COLOR_YELLOW, -1)
    # caret: pending character on a white background
    curses.init_pair(TerminalColors.CARET, curses.COLOR_BLACK, curses.COLOR_WHITE)


def color(pair: int) -> int:
    if not curses.has_colors():
        return curses.A_NORMAL
    return curses.color_pair(pair)


def char_attr(status: CharStatus) -> int:
    if status is CharStatus.CORRECT:
        return color(TerminalColors.CORRECT)
    if status is CharStatus.INCORRECT:
        return color(TerminalColors.INCORRECT) | curses.A_BOLD
    if status is CharStatus.CARET:
        if not curses.has_colors():
            return curses.A_REVERSE
        return color(TerminalColors.CARET)
    return color(TerminalColors.PENDING) | curses.A_DIM
