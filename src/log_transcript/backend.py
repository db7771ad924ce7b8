import logging
from typing import Protocol

log = logging.getLogger(__name__)


class LoggingBackend(Protocol):
    """The process-wide log stream a capture session attaches to."""

    def attach(self, handler: logging.Handler) -> None: ...

    def detach(self, handler: logging.Handler) -> None: ...

    def detach_others(self, handler: logging.Handler) -> None:
        """Remove every recipient of the stream except ``handler``."""
        ...

    def set_level(self, level: int) -> None: ...


class RootLoggerBackend:
    """Attach to a stdlib logger, the root logger unless ``logger_name`` is given.

    Handlers removed by ``detach_others`` are not closed and are not put back
    later; isolation lasts for the rest of the test.
    """

    def __init__(self, logger_name: str | None = None) -> None:
        self.logger = logging.getLogger(logger_name)

    def attach(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def detach(self, handler: logging.Handler) -> None:
        self.logger.removeHandler(handler)

    def detach_others(self, handler: logging.Handler) -> None:
        others = [h for h in self.logger.handlers if h is not handler]
        for other in others:
            self.logger.removeHandler(other)
        if others:
            log.debug(
                "Detached %d handler(s) from logger %r", len(others), self.logger.name
            )

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def __repr__(self) -> str:
        return f"RootLoggerBackend({self.logger.name!r})"
