"""Application entry point and setup for the typespeed typing test."""

import argparse
import curses
import locale
import logging
from typing import List, Optional

from typespeed.core.config import AppConfig, load_config, parse_duration
from typespeed.core.driver import SessionOutcome, TypingTestDriver
from typespeed.core.session import TestResult, TestSession
from typespeed.ui.terminal import CursesEventSource, CursesRenderer, wait_for_quit

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="typespeed",
        description="Terminal typing speed test.",
        epilog="Start typing to start the clock. Esc aborts, q leaves the results screen.",
    )
    # kept as a string so that a missing or bad value falls back to the default instead of erroring
    parser.add_argument(
        "-t", dest="duration", nargs="?", const=None, default=None, metavar="SECONDS", help="Test duration in seconds."
    )
    args, extra = parser.parse_known_args(argv)
    if extra:
        logger.debug("Ignoring extra arguments: %s", extra)
    return args


def format_result(result: TestResult) -> str:
    lines = [
        "Results",
        f"Final WPM: {result.wpm:.2f}",
        f"Elapsed: {result.elapsed:.2f}s of {result.duration}s",
        f"Characters: {result.typed_chars} typed, {result.correct_chars} correct",
    ]
    return "\n".join(lines)


def run_test(stdscr: "curses.window", config: AppConfig, duration: int) -> SessionOutcome:
    """Run one test inside an initialized curses screen."""
    session = TestSession(config.text, duration)
    renderer = CursesRenderer(stdscr)
    driver = TypingTestDriver(session, CursesEventSource(stdscr), renderer)
    try:
        outcome = driver.run()
    except KeyboardInterrupt:
        session.cancel()
        return SessionOutcome(completed=False)
    if outcome.completed:
        final = session.snapshot(session.ended_at or 0.0)
        wait_for_quit(stdscr, lambda: renderer(final))
    return outcome


def run(argv: Optional[List[str]] = None) -> int:
    """Load configuration, run the test in the terminal and print the summary."""
    args = parse_args(argv)
    try:
        config = load_config()
    except (OSError, ValueError) as exc:
        configure_logging()
        logger.error("Could not load configuration: %s", exc)
        return 1
    configure_logging(config.log_level)

    duration = parse_duration(args.duration, config.duration)
    logger.info("Starting %ds typing test", duration)

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as exc:
        logger.warning("Could not apply system locale, keeping default: %s", exc)
    outcome = curses.wrapper(run_test, config, duration)

    if not outcome.completed or outcome.result is None:
        logger.info("Test cancelled")
        return 1
    print(format_result(outcome.result))
    return 0


def main() -> None:
    raise SystemExit(run())
