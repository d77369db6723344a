"""
Log levels, event identifiers and recorded calls.

Levels follow the structured-logging ordering: TRACE is the lowest,
CRITICAL the highest, NONE is the "suppress" sentinel above everything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any

from mocklog.formatted import format_template


class LogLevel(IntEnum):
    """Ordered log levels. NONE is never routed."""
    TRACE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    NONE = 6

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve level from string name, case-insensitive."""
        name_upper = name.upper()
        name_upper = _ALIASES.get(name_upper, name_upper)
        try:
            return cls[name_upper]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.name for m in cls)}"
            )

    @classmethod
    def from_value(cls, value: int | str) -> "LogLevel":
        """Resolve level from int or string."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int):
            for member in cls:
                if member.value == value:
                    return member
            raise ValueError(
                f"No log level with value {value}. "
                f"Valid values: {', '.join(f'{m.name}={m.value}' for m in cls)}"
            )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")

    @classmethod
    def from_stdlib(cls, levelno: int) -> "LogLevel":
        """Map a stdlib `logging` numeric level onto the nearest family."""
        if levelno < 10:
            return cls.TRACE
        if levelno < 20:
            return cls.DEBUG
        if levelno < 30:
            return cls.INFORMATION
        if levelno < 40:
            return cls.WARNING
        if levelno < 50:
            return cls.ERROR
        return cls.CRITICAL

    @property
    def method_stem(self) -> str:
        """Method family name on the mockable contract, e.g. 'warning'."""
        if self is LogLevel.NONE:
            raise ValueError("LogLevel.NONE has no method family")
        return self.name.lower()


_ALIASES: dict[str, str] = {
    "INFO": "INFORMATION",
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
    "OFF": "NONE",
}

# Levels that map onto a method family (everything but NONE)
ROUTABLE_LEVELS: tuple[LogLevel, ...] = tuple(
    member for member in LogLevel if member is not LogLevel.NONE
)


@dataclass(frozen=True)
class EventId:
    """
    Event identifier: numeric id plus optional name.

    A default EventId (id 0, no name) counts as "absent". Both fields are
    checked independently, so EventId(0, "Startup") and EventId(7) are
    both present.
    """
    id: int = 0
    name: str | None = None

    @property
    def is_present(self) -> bool:
        return self.id != 0 or bool(self.name)

    def __str__(self) -> str:
        return self.name if self.name else str(self.id)

    @classmethod
    def coerce(cls, value: Any) -> "EventId":
        """Accept None, an int, an (id, name) tuple or an EventId."""
        if value is None:
            return cls()
        if isinstance(value, EventId):
            return value
        if isinstance(value, bool):
            raise TypeError("Expected EventId, int or (id, name) tuple, got bool")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, tuple) and len(value) == 2:
            return cls(int(value[0]), value[1])
        raise TypeError(
            f"Expected EventId, int or (id, name) tuple, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class LoggedCall:
    """
    Immutable record of one call received by RecordingLogger.

    `shape` is the CallShape name ("PLAIN", "WITH_ERROR", ...). `event_id`
    and `error` are None for shapes that do not carry them.
    """
    level: LogLevel
    shape: str
    message: str | None
    args: tuple[Any, ...] = ()
    event_id: EventId | None = None
    error: BaseException | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def formatted(self) -> str:
        """Message with holes filled positionally."""
        return format_template(self.message, self.args)
