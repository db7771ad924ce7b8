from difflib import context_diff


class LogTranscriptError(Exception):
    """Base class for errors raised by the capture harness itself."""


class RecordFormatError(LogTranscriptError):
    """A captured record's message could not be substituted."""

    def __init__(self, logger_name: str, template: str, error: Exception) -> None:
        self.logger_name = logger_name
        self.template = template
        self.error = error
        super().__init__(
            f"Could not format message {template!r} logged by {logger_name!r}: "
            f"{type(error).__name__}: {error}"
        )


class LogAssertionError(AssertionError):
    """A log assertion failed.

    Carries the ``expected`` and ``actual`` text so test runners and callers
    can inspect both sides.
    """

    def __init__(self, message: str, expected: str, actual: str) -> None:
        self.message = message
        self.expected = expected
        self.actual = actual
        super().__init__(self._describe())

    def _describe(self) -> str:
        return (
            f"{self.message} ==> expected: <{self.expected}> "
            f"but was: <{self.actual}>"
        )


class TranscriptMismatchError(LogAssertionError):
    """The rendered transcript was not exactly the expected text."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__("Log assertion failed", expected, actual)

    def diff(self) -> list[str]:
        return list(
            context_diff(
                self.expected.split("\n"),
                self.actual.split("\n"),
                fromfile="expected",
                tofile="actual",
                lineterm="",
            )
        )

    def _describe(self) -> str:
        description = super()._describe()
        diff = self.diff()
        if diff:
            description += "\n" + "\n".join(diff)
        return description


class NoMatchingLogError(LogAssertionError):
    """No captured record satisfied the predicate."""

    SENTINEL = "<Predicate>"

    def __init__(self, checked: int, actual: str) -> None:
        self.checked = checked
        super().__init__(
            f"None of the {checked} log lines matched", self.SENTINEL, actual
        )


class UnexpectedLogError(LogAssertionError):
    """At least one captured record satisfied a predicate that should not match."""

    SENTINEL = "<No match for Predicate>"

    def __init__(self, matched: int, actual: str) -> None:
        self.matched = matched
        super().__init__(
            f"Found {matched} matching log line(s)", self.SENTINEL, actual
        )
