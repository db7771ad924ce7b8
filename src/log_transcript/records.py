from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Self


def _qualified_class_name(exc_type: type[BaseException]) -> str:
    module = exc_type.__module__
    if module in ("builtins", "__main__"):
        return exc_type.__qualname__
    return f"{module}.{exc_type.__qualname__}"


def _safe_str(value: object, what: str) -> str:
    try:
        return str(value)
    except Exception:
        return f"<{what} str() failed>"


def _frame_lines(tb: TracebackType | None) -> tuple[str, ...]:
    summary = traceback.StackSummary.extract(
        traceback.walk_tb(tb), lookup_lines=False
    )
    return tuple(
        f'File "{frame.filename}", line {frame.lineno}, in {frame.name}'
        for frame in summary
    )


@dataclass(frozen=True)
class ThrowableInfo:
    """The exception attached to a captured record.

    Only the exception itself is rendered; ``cause`` is kept so predicates can
    inspect it.
    """

    class_name: str
    message: str
    frames: tuple[str, ...] = ()
    cause: ThrowableInfo | None = None

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        tb: TracebackType | None = None,
        _seen: set[int] | None = None,
    ) -> Self:
        seen = _seen if _seen is not None else set()
        seen.add(id(exc))

        chained = exc.__cause__
        if chained is None and not exc.__suppress_context__:
            chained = exc.__context__

        cause = None
        if chained is not None and id(chained) not in seen:
            cause = cls.from_exception(chained, _seen=seen)

        return cls(
            class_name=_qualified_class_name(type(exc)),
            message=_safe_str(exc, "exception"),
            frames=_frame_lines(tb if tb is not None else exc.__traceback__),
            cause=cause,
        )

    @classmethod
    def from_exc_info(cls, exc_info: Any) -> Self | None:
        """Build from ``LogRecord.exc_info``; anything malformed gives ``None``."""
        if not isinstance(exc_info, tuple) or len(exc_info) != 3:
            return None
        _, value, tb = exc_info
        if not isinstance(value, BaseException):
            return None
        if not isinstance(tb, TracebackType):
            tb = None
        return cls.from_exception(value, tb)


@dataclass(frozen=True)
class CapturedRecord:
    """One log event as seen by the capture handler."""

    level: int
    logger_name: str
    message: str
    throwable: ThrowableInfo | None = None
    format_error: Exception | None = None

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)

    @classmethod
    def from_log_record(cls, record: logging.LogRecord) -> Self:
        format_error = None
        try:
            message = record.getMessage()
        except Exception as e:
            # Raised again when the record is rendered, not while the code
            # under test is logging.
            format_error = e
            message = _safe_str(record.msg, "message")

        try:
            throwable = ThrowableInfo.from_exc_info(record.exc_info)
        except Exception:
            # Kept without its exception block.
            throwable = None

        return cls(
            level=record.levelno,
            logger_name=record.name,
            message=message,
            throwable=throwable,
            format_error=format_error,
        )
