from typing import Any

from pydantic import BaseModel, ConfigDict, NonNegativeInt, field_validator

from log_transcript.levels import resolve_level

DEFAULT_STACK_DEPTH = 4


class CaptureSettings(BaseModel):
    """Options for a capture session.

    ``level`` accepts a number or a level name. Assignments are validated, so a
    session can be reconfigured between runs without bypassing these checks.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    isolating: bool = False
    level: int | None = None
    stack_depth: NonNegativeInt = DEFAULT_STACK_DEPTH

    @field_validator("level", mode="before")
    @classmethod
    def _resolve_level(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            return resolve_level(value)
        return value
