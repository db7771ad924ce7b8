from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from log_transcript.levels import resolve_level
from log_transcript.records import CapturedRecord

Predicate: TypeAlias = Callable[[CapturedRecord], bool]


@dataclass(frozen=True)
class RecordPredicate:
    """A callable record test that composes with ``&``, ``|`` and ``~``.

    The other operand may be any plain ``Callable[[CapturedRecord], bool]``.
    """

    test: Predicate
    description: str = "<predicate>"

    def __call__(self, record: CapturedRecord) -> bool:
        return bool(self.test(record))

    def __and__(self, other: Predicate) -> RecordPredicate:
        return RecordPredicate(
            lambda record: self(record) and bool(other(record)),
            f"({self.description} & {_describe(other)})",
        )

    def __rand__(self, other: Predicate) -> RecordPredicate:
        return RecordPredicate(
            lambda record: bool(other(record)) and self(record),
            f"({_describe(other)} & {self.description})",
        )

    def __or__(self, other: Predicate) -> RecordPredicate:
        return RecordPredicate(
            lambda record: self(record) or bool(other(record)),
            f"({self.description} | {_describe(other)})",
        )

    def __ror__(self, other: Predicate) -> RecordPredicate:
        return RecordPredicate(
            lambda record: bool(other(record)) or self(record),
            f"({_describe(other)} | {self.description})",
        )

    def __invert__(self) -> RecordPredicate:
        return RecordPredicate(lambda record: not self(record), f"~{self.description}")

    def __repr__(self) -> str:
        return f"RecordPredicate({self.description})"


def _describe(predicate: Predicate) -> str:
    if isinstance(predicate, RecordPredicate):
        return predicate.description
    return getattr(predicate, "__name__", repr(predicate))


def at_log_level(level: int | str) -> RecordPredicate:
    """True for records at ``level`` or more severe."""
    threshold = resolve_level(level)
    return RecordPredicate(
        lambda record: record.level >= threshold, f"level >= {threshold}"
    )


def message_matches(pattern: str | re.Pattern[str]) -> RecordPredicate:
    """True when the whole formatted message matches ``pattern``."""
    regex = re.compile(pattern)
    return RecordPredicate(
        lambda record: regex.fullmatch(record.message) is not None,
        f"message ~ {regex.pattern!r}",
    )


def from_logger(name: str) -> RecordPredicate:
    """True for records logged by ``name`` or one of its child loggers."""
    prefix = f"{name}."
    return RecordPredicate(
        lambda record: record.logger_name == name
        or record.logger_name.startswith(prefix),
        f"logger {name!r}",
    )
