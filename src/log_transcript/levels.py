import logging

# The stdlib has no level below DEBUG.
TRACE = 5

_EXTRA_LEVEL_NAMES = {"TRACE": TRACE}


def resolve_level(level: int | str) -> int:
    """Turn a level number or name (``"INFO"``, ``"warn"``, ...) into an int."""
    if isinstance(level, bool):
        raise TypeError(f"Invalid log level: {level!r}")
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        if name in _EXTRA_LEVEL_NAMES:
            return _EXTRA_LEVEL_NAMES[name]
        mapping = logging.getLevelNamesMapping()
        if name in mapping:
            return mapping[name]
        raise ValueError(f"Unknown log level: {level!r}")
    raise TypeError(f"Invalid log level: {level!r}")
