from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Self

from log_transcript.backend import LoggingBackend, RootLoggerBackend
from log_transcript.errors import (
    NoMatchingLogError,
    TranscriptMismatchError,
    UnexpectedLogError,
)
from log_transcript.levels import resolve_level
from log_transcript.predicates import Predicate, at_log_level
from log_transcript.records import CapturedRecord
from log_transcript.rendering import (
    join_transcript,
    normalize_newlines,
    render_lines,
    render_message,
)
from log_transcript.settings import DEFAULT_STACK_DEPTH, CaptureSettings

log = logging.getLogger(__name__)


class LogCapture(logging.Handler):
    """A logging handler that captures log records so a test can assert on them.

    Usage:
        capture = LogCapture(isolating=True)

        def test_greeting() -> None:
            capture.start(logging.INFO)
            greet("World")
            capture.assert_logs("Hello World!")

    ``start`` always empties the buffer, so a session only ever sees what was
    logged after it. Records stay readable after ``stop``.
    """

    def __init__(
        self,
        isolating: bool = False,
        level: int | str | None = None,
        *,
        stack_depth: int = DEFAULT_STACK_DEPTH,
        backend: LoggingBackend | None = None,
    ) -> None:
        super().__init__()
        self.settings = CaptureSettings(
            isolating=isolating, level=level, stack_depth=stack_depth
        )
        self.backend: LoggingBackend = backend or RootLoggerBackend()
        self._records: list[CapturedRecord] = []
        self._started = False
        self._apply_handler_level()

    @classmethod
    def from_settings(
        cls, settings: CaptureSettings, backend: LoggingBackend | None = None
    ) -> Self:
        return cls(
            isolating=settings.isolating,
            level=settings.level,
            stack_depth=settings.stack_depth,
            backend=backend,
        )

    @property
    def isolating(self) -> bool:
        return self.settings.isolating

    @property
    def minimum_level(self) -> int | None:
        return self.settings.level

    @property
    def stack_depth(self) -> int:
        return self.settings.stack_depth

    @property
    def started(self) -> bool:
        return self._started

    @property
    def records(self) -> tuple[CapturedRecord, ...]:
        """Snapshot of the buffer in arrival order."""
        with self.lock:
            return tuple(self._records)

    def setLevel(self, level: int | str) -> None:
        # logging.Handler API; keeps the settings in step with the handler.
        self.set_level(level)

    def set_level(self, level: int | str | None) -> None:
        """Set the capture floor. Only records logged from now on are affected."""
        self.settings.level = level
        self._apply_handler_level()

    def set_stack_depth(self, stack_depth: int) -> None:
        self.settings.stack_depth = stack_depth

    def _apply_handler_level(self) -> None:
        level = self.settings.level
        super().setLevel(logging.NOTSET if level is None else level)

    def start(self, level: int | str | None = None) -> None:
        """Attach to the log stream and empty the buffer.

        A ``level`` becomes the new capture floor and is applied to the
        ambient logger, so lower records are not even created. Calling this on
        a started session only re-applies the level and empties the buffer.
        """
        if level is not None:
            self.set_level(level)

        if not self._started:
            if self.settings.isolating:
                self.backend.detach_others(self)
            self.backend.attach(self)
            self._started = True
            log.debug("Capturing logs via %r", self.backend)

        if self.settings.level is not None:
            self.backend.set_level(self.settings.level)

        self.reset()

    def stop(self) -> None:
        """Detach from the log stream. Captured records are kept."""
        if not self._started:
            return
        self.backend.detach(self)
        self._started = False
        log.debug(
            "Stopped capturing logs via %r, %d record(s) kept",
            self.backend,
            len(self._records),
        )

    def reset(self) -> None:
        with self.lock:
            self._records.clear()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            captured = CapturedRecord.from_log_record(record)
        except Exception:
            self.handleError(record)
            return
        self._records.append(captured)

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.stop()

    def _filtered(self, level: int | str | None) -> list[CapturedRecord]:
        records = self.records
        if level is None:
            return list(records)
        predicate = at_log_level(level)
        return [record for record in records if predicate(record)]

    def get_messages(
        self,
        level: int | str | None = None,
        mapper: Callable[[str], str] | None = None,
    ) -> list[str]:
        """Return rendered lines for captured records at or above ``level``.

        With a ``mapper`` each line is just the message passed through it; the
        exception block is left out.
        """
        return render_lines(self._filtered(level), self.stack_depth, mapper)

    def transcript(
        self,
        level: int | str | None = None,
        mapper: Callable[[str], str] | None = None,
    ) -> str:
        return join_transcript(self.get_messages(level, mapper))

    def assert_logs(
        self,
        expected: str,
        *,
        level: int | str | None = None,
        mapper: Callable[[str], str] | None = None,
    ) -> None:
        """Assert the transcript is exactly ``expected``.

        Line endings are normalized to ``\\n`` on both sides, so ``\\r\\n``
        in ``expected`` or in a logged message compares equal to ``\\n``.
        ``level`` restricts the transcript to records at or above it, and
        ``mapper`` rewrites each message (for timestamps, generated ids and the
        like) before comparing.
        """
        if level is not None:
            level = resolve_level(level)
        expected = normalize_newlines(expected)
        actual = normalize_newlines(self.transcript(level, mapper))
        if expected != actual:
            raise TranscriptMismatchError(expected, actual)

    def assert_any_log(self, predicate: Predicate) -> None:
        """Assert at least one captured record satisfies ``predicate``."""
        records = self.records
        if not any(predicate(record) for record in records):
            raise NoMatchingLogError(
                len(records),
                join_transcript(render_lines(records, self.stack_depth)),
            )

    def assert_no_log(self, predicate: Predicate) -> None:
        """Assert no captured record satisfies ``predicate``."""
        matches = [record for record in self.records if predicate(record)]
        if matches:
            raise UnexpectedLogError(
                len(matches),
                join_transcript(render_message(record) for record in matches),
            )

    def __repr__(self) -> str:
        state = "started" if self._started else "stopped"
        return (
            f"<{type(self).__name__} {state} level={self.settings.level} "
            f"isolating={self.settings.isolating} records={len(self._records)}>"
        )
