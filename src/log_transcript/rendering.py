"""Deterministic text rendering of captured records."""

from collections.abc import Callable, Iterable

from log_transcript.errors import RecordFormatError
from log_transcript.records import CapturedRecord

FRAME_INDENT = "    "


def normalize_newlines(text: str) -> str:
    """Replace ``\\r\\n`` and lone ``\\r`` terminators with ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def render_message(record: CapturedRecord) -> str:
    if record.format_error is not None:
        raise RecordFormatError(
            record.logger_name, record.message, record.format_error
        ) from record.format_error
    return record.message


def render_record(record: CapturedRecord, stack_depth: int) -> str:
    """Render the message, followed by the exception block when there is one.

    The exception block is ``ClassName: message`` and then at most
    ``stack_depth`` frames, innermost (the raising frame) first, each indented
    by four spaces. A ``stack_depth`` of zero leaves the exception out
    entirely.
    """
    text = render_message(record)
    throwable = record.throwable
    if stack_depth <= 0 or throwable is None:
        return text

    lines = [text, f"{throwable.class_name}: {throwable.message}"]
    innermost = throwable.frames[::-1][:stack_depth]
    lines.extend(FRAME_INDENT + frame for frame in innermost)
    return "\n".join(lines)


def render_lines(
    records: Iterable[CapturedRecord],
    stack_depth: int,
    mapper: Callable[[str], str] | None = None,
) -> list[str]:
    """Render each record. With a ``mapper`` only the mapped message is kept."""
    if mapper is None:
        return [render_record(record, stack_depth) for record in records]
    return [mapper(render_message(record)) for record in records]


def join_transcript(lines: Iterable[str]) -> str:
    return "\n".join(lines)
