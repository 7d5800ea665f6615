"""Results screen: final speed and the WPM-over-time chart."""

from __future__ import annotations

import curses

from typespeed.core.session import SessionSnapshot
from typespeed.ui.colors import TerminalColors, color
from typespeed.ui.models import chart_bounds, chart_cells

CHART_TITLE = "WPM over time"
QUIT_HINT = "Press q to quit"


def _put(stdscr: "curses.window", row: int, col: int, text: str, attr: int = 0) -> None:
    try:
        stdscr.addstr(row, col, text, attr)
    except curses.error:
        pass


def _centered(stdscr: "curses.window", row: int, text: str, attr: int = 0) -> None:
    _, width = stdscr.getmaxyx()
    _put(stdscr, row, max(0, (width - len(text)) // 2), text, attr)


def draw_chart(stdscr: "curses.window", snapshot: SessionSnapshot, top: int, bottom: int) -> None:
    """Draw the bordered chart between rows ``top`` and ``bottom`` inclusive."""
    _, width = stdscr.getmaxyx()
    if bottom - top < 4 or width < 16:
        return

    try:
        box = stdscr.derwin(bottom - top + 1, width, top, 0)
        box.box()
    except curses.error:
        return
    _put(box, 0, 2, f" {CHART_TITLE} ")

    bounds = chart_bounds(snapshot.chart)
    y_max = f"{bounds.max_wpm:.0f}"
    x_max = f"{bounds.max_time:.0f}"
    gutter = max(len(y_max), len("WPM")) + 1

    # plot area inside the border, left of it the y labels, below it the x labels
    plot_top = 1
    plot_left = 1 + gutter
    plot_height = (bottom - top + 1) - 4
    plot_width = width - plot_left - 1
    if plot_height <= 0 or plot_width <= 0:
        return

    _put(box, plot_top, 1, y_max.rjust(gutter - 1))
    _put(box, plot_top + plot_height // 2, 1, "WPM".rjust(gutter - 1))
    _put(box, plot_top + plot_height - 1, 1, "0".rjust(gutter - 1))

    axis_row = plot_top + plot_height
    for col in range(plot_width):
        _put(box, axis_row, plot_left + col, "-")
    labels_row = axis_row + 1
    _put(box, labels_row, plot_left, "0")
    _put(box, labels_row, plot_left + (plot_width - len("Time")) // 2, "Time")
    _put(box, labels_row, plot_left + plot_width - len(x_max), x_max)

    attr = color(TerminalColors.CHART) | curses.A_BOLD
    for row, col in chart_cells(snapshot.chart, plot_width, plot_height):
        _put(box, plot_top + row, plot_left + col, "•", attr)


def draw_results(stdscr: "curses.window", snapshot: SessionSnapshot) -> None:
    stdscr.erase()
    height, _ = stdscr.getmaxyx()

    _centered(stdscr, 1, f"Final WPM: {snapshot.wpm:.2f}", curses.A_BOLD)
    draw_chart(stdscr, snapshot, 3, height - 3)
    _centered(stdscr, height - 2, QUIT_HINT)

    stdscr.refresh()
