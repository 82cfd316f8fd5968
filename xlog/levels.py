"""
Severity levels for xlog

Levels are ordered so that a single threshold comparison decides whether a
message is emitted:

    DEBUG < INFO < WARN < ERROR < FATAL
"""

from enum import IntEnum
from typing import Union

_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}


class LogLevel(IntEnum):
    """Log severity, lowest first"""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    @property
    def tag(self) -> str:
        """Fixed-width (5 character) tag used in formatted lines"""
        return self.name.ljust(5)

    @classmethod
    def parse(cls, value: Union["LogLevel", int, str]) -> "LogLevel":
        """
        Convert a level, level value or level name to a LogLevel.

        Names are case-insensitive; WARNING and CRITICAL are accepted as
        aliases of WARN and FATAL.

        Raises:
            ValueError: if the value does not name a level

        Example:
            LogLevel.parse("warning")  # LogLevel.WARN
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                pass
        elif isinstance(value, str):
            name = value.strip().upper()
            name = _ALIASES.get(name, name)
            if name in cls.__members__:
                return cls[name]
        raise ValueError(f"Invalid log level: {value}. Must be one of: {', '.join(cls.__members__)}")
