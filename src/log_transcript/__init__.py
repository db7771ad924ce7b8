"""Capture log records during a test and assert on the rendered transcript."""

from log_transcript.backend import LoggingBackend, RootLoggerBackend
from log_transcript.capture import LogCapture
from log_transcript.errors import (
    LogAssertionError,
    LogTranscriptError,
    NoMatchingLogError,
    RecordFormatError,
    TranscriptMismatchError,
    UnexpectedLogError,
)
from log_transcript.levels import TRACE, resolve_level
from log_transcript.predicates import (
    Predicate,
    RecordPredicate,
    at_log_level,
    from_logger,
    message_matches,
)
from log_transcript.records import CapturedRecord, ThrowableInfo
from log_transcript.settings import CaptureSettings

__all__ = [
    "TRACE",
    "CaptureSettings",
    "CapturedRecord",
    "LogAssertionError",
    "LogCapture",
    "LogTranscriptError",
    "LoggingBackend",
    "NoMatchingLogError",
    "Predicate",
    "RecordFormatError",
    "RecordPredicate",
    "RootLoggerBackend",
    "ThrowableInfo",
    "TranscriptMismatchError",
    "UnexpectedLogError",
    "at_log_level",
    "from_logger",
    "message_matches",
    "resolve_level",
]
