"""Poll loop that feeds input events into a TestSession and renders snapshots."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from typespeed.core.session import SessionSnapshot, TestResult, TestSession

logger = logging.getLogger(__name__)

POLL_TIMEOUT = 0.05


class EventKind(Enum):
    CHARACTER = "character"
    BACKSPACE = "backspace"
    CANCEL = "cancel"
    NONE = "none"


@dataclass(frozen=True)
class InputEvent:
    kind: EventKind
    char: Optional[str] = None

    @classmethod
    def character(cls, char: str) -> "InputEvent":
        return cls(EventKind.CHARACTER, char)


NO_EVENT = InputEvent(EventKind.NONE)
BACKSPACE = InputEvent(EventKind.BACKSPACE)
CANCEL = InputEvent(EventKind.CANCEL)

EventSource = Callable[[float], InputEvent]
Renderer = Callable[[SessionSnapshot], None]
Clock = Callable[[], float]


@dataclass(frozen=True)
class SessionOutcome:
    """How a run ended. ``result`` is only present for completed tests."""

    completed: bool
    result: Optional[TestResult] = None


class TypingTestDriver:
    """Single-threaded driver for one test.

    Each iteration waits at most ``poll_timeout`` seconds for one input
    event, applies it, ticks the session and renders a fresh snapshot.
    A cancel event ends the loop straight away without a tick.
    """

    def __init__(
        self,
        session: TestSession,
        poll: EventSource,
        render: Renderer,
        clock: Clock = time.monotonic,
        poll_timeout: float = POLL_TIMEOUT,
    ) -> None:
        self._session = session
        self._poll = poll
        self._render = render
        self._clock = clock
        self._poll_timeout = poll_timeout

    @property
    def session(self) -> TestSession:
        return self._session

    def apply(self, event: InputEvent) -> None:
        """Apply a single input event to the session."""
        if event.kind is EventKind.CHARACTER and event.char:
            self._session.submit_character(event.char, self._clock())
        elif event.kind is EventKind.BACKSPACE:
            self._session.delete_last_character()
        elif event.kind is EventKind.CANCEL:
            self._session.cancel()

    def step(self) -> bool:
        """Run one loop iteration. Returns True while the test is still running."""
        event = self._poll(self._poll_timeout)
        self.apply(event)
        now = self._clock()
        if self._session.active:
            self._session.tick(now)
        self._render(self._session.snapshot(now))
        return self._session.active

    def run(self) -> SessionOutcome:
        self._render(self._session.snapshot(self._clock()))
        while self.step():
            pass
        result = self._session.result()
        if result is None:
            logger.debug("Test aborted before completion")
            return SessionOutcome(completed=False)
        return SessionOutcome(completed=True, result=result)
