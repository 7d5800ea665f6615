from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 15
SAMPLE_INTERVAL = 0.5
CHARS_PER_WORD = 5.0
MIN_ELAPSED = 1.0

Sample = Tuple[float, float]


@dataclass(frozen=True)
class NotStarted:
    """No character accepted yet; the countdown has not begun."""


@dataclass(frozen=True)
class Typing:
    started_at: float


@dataclass(frozen=True)
class Finished:
    started_at: float
    ended_at: float


@dataclass(frozen=True)
class Cancelled:
    """Aborted run. Never carries an end instant and never yields a result."""

    started_at: Optional[float] = None


SessionState = Union[NotStarted, Typing, Finished, Cancelled]


class Phase(Enum):
    NOT_STARTED = "not_started"
    TYPING = "typing"
    FINISHED = "finished"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session handed to renderers once per loop iteration."""

    phase: Phase
    target: str
    typed: str
    duration: int
    time_left: int
    elapsed: float
    wpm: float
    samples: Tuple[Sample, ...]
    chart: Tuple[Sample, ...]

    @property
    def active(self) -> bool:
        return self.phase in (Phase.NOT_STARTED, Phase.TYPING)


@dataclass(frozen=True)
class TestResult:
    """Final statistics of a finished session."""

    __test__ = False

    wpm: float
    elapsed: float
    duration: int
    typed_chars: int
    correct_chars: int
    chart: Tuple[Sample, ...]


class TestSession:
    """State machine for one timed typing test.

    The session never reads a clock. Every operation that depends on time
    takes ``now`` (seconds on a monotonic scale) from the caller, so the
    driver owns the clock and tests can step through time explicitly.

    Speed is gross WPM: ``(typed characters / 5) / elapsed minutes``, with
    elapsed time floored at one second so the first keystrokes do not report
    absurd speeds.

    The test completes when the countdown reaches zero or the whole target has
    been typed, whichever comes first. Out-of-range mutations (typing past the
    end, deleting from an empty buffer, typing after completion) are ignored
    rather than reported.
    """

    __test__ = False

    def __init__(self, target: str, duration: int = DEFAULT_DURATION) -> None:
        if not target:
            raise ValueError("target text must not be empty")
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")
        self._target = target
        self._duration = int(duration)
        self._typed: List[str] = []
        self._state: SessionState = NotStarted()
        self._samples: List[Sample] = []
        self._last_sample_at: Optional[float] = None
        self._closing_sample: Optional[Sample] = None

    @property
    def target(self) -> str:
        """Reference text the participant types against."""
        return self._target

    @property
    def typed(self) -> str:
        """Characters typed so far, aligned by position to the target."""
        return "".join(self._typed)

    @property
    def duration(self) -> int:
        """Configured test length in seconds."""
        return self._duration

    @property
    def state(self) -> SessionState:
        """Current state variant."""
        return self._state

    @property
    def phase(self) -> Phase:
        """Current state as a plain enum value."""
        if isinstance(self._state, Typing):
            return Phase.TYPING
        if isinstance(self._state, Finished):
            return Phase.FINISHED
        if isinstance(self._state, Cancelled):
            return Phase.CANCELLED
        return Phase.NOT_STARTED

    @property
    def active(self) -> bool:
        """True until the session is finished or cancelled."""
        return isinstance(self._state, (NotStarted, Typing))

    @property
    def started_at(self) -> Optional[float]:
        """Instant of the first accepted keystroke, or None."""
        return getattr(self._state, "started_at", None)

    @property
    def ended_at(self) -> Optional[float]:
        """Instant of the transition to Finished, or None."""
        if isinstance(self._state, Finished):
            return self._state.ended_at
        return None

    @property
    def speed_samples(self) -> Tuple[Sample, ...]:
        """Throttled (elapsed, wpm) history, oldest first."""
        return tuple(self._samples)

    @property
    def last_sample_at(self) -> Optional[float]:
        """Instant of the most recent sample, or of the start before the first one."""
        return self._last_sample_at

    @property
    def closing_sample(self) -> Optional[Sample]:
        """(elapsed, wpm) recorded at the moment the session finished."""
        return self._closing_sample

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def submit_character(self, char: str, now: float) -> None:
        """Record a keystroke, starting the countdown on the first one."""
        if not self.active:
            return
        if isinstance(self._state, NotStarted):
            self._state = Typing(started_at=now)
            self._last_sample_at = now
            logger.debug("Session started at %.3f", now)
        if len(self._typed) < len(self._target):
            self._typed.append(char)

    def delete_last_character(self) -> None:
        """Remove the most recent keystroke, if any."""
        if not self.active:
            return
        if self._typed:
            self._typed.pop()

    def cancel(self) -> None:
        """Abort the run. A finished session keeps its result."""
        if not self.active:
            return
        self._state = Cancelled(started_at=self.started_at)
        logger.debug("Session cancelled after %d characters", len(self._typed))

    def tick(self, now: float) -> None:
        """Take a speed sample if one is due, then check for completion."""
        if not self.active:
            return
        if (
            self._last_sample_at is not None
            and now - self._last_sample_at >= SAMPLE_INTERVAL
        ):
            self._samples.append((self.elapsed(now), self.current_wpm(now)))
            self._last_sample_at = now

        if self.is_finished(now):
            start = self.started_at
            if start is None:
                start = now
            self._state = Finished(started_at=start, ended_at=max(now, start))
            self._closing_sample = (self.elapsed(now), self.current_wpm(now))
            logger.debug(
                "Session finished: %d/%d characters in %.2fs",
                len(self._typed),
                len(self._target),
                self.elapsed(now),
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def elapsed(self, now: float) -> float:
        """Seconds since the first keystroke, frozen at the end instant."""
        start = self.started_at
        if start is None:
            return 0.0
        end = self.ended_at
        if end is None:
            end = now
        return max(0.0, end - start)

    def time_left(self, now: float) -> int:
        """Whole seconds remaining on the countdown, never negative."""
        start = self.started_at
        if start is None:
            return self._duration
        end = self.ended_at
        if end is None:
            end = now
        spent = int(math.floor(max(0.0, end - start)))
        return max(0, self._duration - spent)

    def current_wpm(self, now: float) -> float:
        """Gross words per minute, with elapsed time floored at one second."""
        minutes = max(self.elapsed(now), MIN_ELAPSED) / 60.0
        return (len(self._typed) / CHARS_PER_WORD) / minutes

    def is_finished(self, now: float) -> bool:
        """Return True once time is up or the whole target has been typed."""
        if isinstance(self._state, Finished):
            return True
        return self.time_left(now) == 0 or len(self._typed) == len(self._target)

    def correct_count(self) -> int:
        """Number of typed positions matching the target."""
        return sum(1 for a, b in zip(self._typed, self._target) if a == b)

    def chart_series(self) -> Tuple[Sample, ...]:
        """Sample history followed by the closing point, if it adds anything."""
        series = list(self._samples)
        closing = self._closing_sample
        if closing is not None and (not series or series[-1][0] < closing[0]):
            series.append(closing)
        return tuple(series)

    def snapshot(self, now: float) -> SessionSnapshot:
        """Immutable view of the session at ``now`` for renderers."""
        return SessionSnapshot(
            phase=self.phase,
            target=self._target,
            typed=self.typed,
            duration=self._duration,
            time_left=self.time_left(now),
            elapsed=self.elapsed(now),
            wpm=self.current_wpm(now),
            samples=self.speed_samples,
            chart=self.chart_series(),
        )

    def result(self) -> Optional[TestResult]:
        """Final statistics, or None unless the session finished normally."""
        if not isinstance(self._state, Finished):
            return None
        end = self._state.ended_at
        return TestResult(
            wpm=self.current_wpm(end),
            elapsed=self.elapsed(end),
            duration=self._duration,
            typed_chars=len(self._typed),
            correct_chars=self.correct_count(),
            chart=self.chart_series(),
        )
