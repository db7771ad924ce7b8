"""Shared pytest fixtures for all tests."""

import logging
from collections.abc import Iterator

import pytest

from log_transcript import LogCapture
from tests.fixtures.logs import LogEmitter

pytest_plugins = ["pytester", "log_transcript.pytest_plugin"]


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo root logger level changes and stray captures left by a test."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if isinstance(handler, LogCapture):
            root.removeHandler(handler)


@pytest.fixture()
def log_emitter() -> LogEmitter:
    """Fixture that logs through a test logger, including logged exceptions."""
    return LogEmitter(logging.getLogger("tests.log_transcript"))


@pytest.fixture()
def capture() -> Iterator[LogCapture]:
    """A LogCapture started at INFO on the root logger."""
    log_capture = LogCapture()
    log_capture.start(logging.INFO)
    yield log_capture
    log_capture.stop()
