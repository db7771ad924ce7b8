"""pytest plugin providing the ``log_capture`` fixture.

Enable it from a ``conftest.py``::

    pytest_plugins = ["log_transcript.pytest_plugin"]

Defaults come from the ``log_capture_*`` ini options and can be overridden per
test with ``@pytest.mark.log_capture(level="WARNING", isolating=True)``.
"""

from collections.abc import Iterator
from typing import Any

import pytest

from log_transcript.capture import LogCapture
from log_transcript.settings import DEFAULT_STACK_DEPTH, CaptureSettings


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "log_capture_isolating",
        type="bool",
        default=False,
        help="Detach other root logger handlers while log_capture is active.",
    )
    parser.addini(
        "log_capture_level",
        default="",
        help="Minimum level captured by log_capture (name or number).",
    )
    parser.addini(
        "log_capture_stack_depth",
        default=str(DEFAULT_STACK_DEPTH),
        help="Stack frames rendered for each logged exception (0 to disable).",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "log_capture(level=None, isolating=None, stack_depth=None): "
        "override the log_capture fixture settings for a test.",
    )


def capture_settings(request: pytest.FixtureRequest) -> CaptureSettings:
    config = request.config
    values: dict[str, Any] = {
        "isolating": config.getini("log_capture_isolating"),
        "level": config.getini("log_capture_level"),
        "stack_depth": config.getini("log_capture_stack_depth"),
    }
    marker = request.node.get_closest_marker("log_capture")
    if marker is not None:
        values.update(
            (key, value) for key, value in marker.kwargs.items() if value is not None
        )
    return CaptureSettings.model_validate(values)


@pytest.fixture()
def log_capture(request: pytest.FixtureRequest) -> Iterator[LogCapture]:
    """A started LogCapture, stopped again when the test finishes."""
    with LogCapture.from_settings(capture_settings(request)) as capture:
        yield capture
