"""Data models used by the UI, derived purely from session snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Set, Tuple

from typespeed.core.session import Sample, SessionSnapshot

CHART_WPM_HEADROOM = 10.0


class CharStatus(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    PENDING = "pending"
    CARET = "caret"


@dataclass(frozen=True)
class StyledChar:
    char: str
    status: CharStatus


def styled_text(snapshot: SessionSnapshot) -> List[StyledChar]:
    """Status of every target character: typed ones by equality, then the caret, then pending."""
    typed = snapshot.typed
    caret = len(typed) if snapshot.active else -1
    styled: List[StyledChar] = []
    for i, ch in enumerate(snapshot.target):
        if i < len(typed):
            status = CharStatus.CORRECT if typed[i] == ch else CharStatus.INCORRECT
        elif i == caret:
            status = CharStatus.CARET
        else:
            status = CharStatus.PENDING
        styled.append(StyledChar(ch, status))
    return styled


@dataclass(frozen=True)
class ChartBounds:
    max_time: float
    max_wpm: float


def chart_bounds(points: Sequence[Sample]) -> ChartBounds:
    """X runs to the last sample time (1 when empty), Y to the peak WPM plus headroom."""
    max_time = points[-1][0] if points else 1.0
    if max_time <= 0:
        max_time = 1.0
    peak = max((wpm for _, wpm in points), default=0.0)
    return ChartBounds(max_time=max_time, max_wpm=max(peak, 0.0) + CHART_WPM_HEADROOM)


def _to_cell(point: Sample, bounds: ChartBounds, width: int, height: int) -> Tuple[int, int]:
    t, wpm = point
    x = min(max(t / bounds.max_time, 0.0), 1.0)
    y = min(max(wpm / bounds.max_wpm, 0.0), 1.0)
    col = int(round(x * (width - 1)))
    row = (height - 1) - int(round(y * (height - 1)))
    return row, col


def chart_cells(points: Sequence[Sample], width: int, height: int) -> Set[Tuple[int, int]]:
    """Grid cells (row, col) covered by the WPM line, row 0 at the top."""
    if width <= 0 or height <= 0 or not points:
        return set()
    bounds = chart_bounds(points)
    cells = [_to_cell(p, bounds, width, height) for p in points]
    covered: Set[Tuple[int, int]] = {cells[0]}
    for (r0, c0), (r1, c1) in zip(cells, cells[1:]):
        steps = max(abs(r1 - r0), abs(c1 - c0))
        for step in range(1, steps + 1):
            frac = step / steps
            covered.add((int(round(r0 + (r1 - r0) * frac)), int(round(c0 + (c1 - c0) * frac))))
        covered.add((r1, c1))
    return covered
