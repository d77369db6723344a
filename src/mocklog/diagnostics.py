"""
Diagnostics: the adapter's own instrumentation trail.

Singleton with a level floor and tag activation. Most diagnostic calls
exit at _should_emit() with no work done; the hot path of a routed log
call pays one comparison and one set lookup.

Records land in a bounded ring buffer that tests (or a developer in a
debugger) read back with get_recent(). Echo to stderr is optional.

Usage:
    diag = Diagnostics.instance()
    diag.activate_tag(EXTRACT_TAG)
    ...
    for record in diag.get_recent(tags={EXTRACT_TAG}):
        print(record.message, record.context)
"""

from __future__ import annotations

import sys
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from mocklog.records import LogLevel

if TYPE_CHECKING:
    from mocklog.config import DiagnosticsConfig


EXTRACT_TAG = "mocklog.extract"
ROUTE_TAG = "mocklog.route"
SCOPE_TAG = "mocklog.scope"

DEFAULT_RING_BUFFER_SIZE = 1000


@dataclass(frozen=True)
class DiagnosticRecord:
    """Immutable diagnostic entry."""
    timestamp: datetime
    level: LogLevel
    message: str
    tags: frozenset[str] = field(default_factory=frozenset)
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        level: LogLevel,
        message: str,
        tags: set[str] | frozenset[str] | None = None,
        **context: Any,
    ) -> "DiagnosticRecord":
        return cls(
            timestamp=datetime.now(timezone.utc),
            level=level,
            message=message,
            tags=frozenset(tags) if tags else frozenset(),
            context=context,
        )

    def compact(self) -> str:
        """Example: 14:32:05 [   DEBUG] [mocklog.extract] structured fields unreadable | error=..."""
        ts = self.timestamp.strftime("%H:%M:%S")
        tags_str = ",".join(sorted(self.tags)) if self.tags else "-"
        line = f"{ts} [{self.level.name:>8}] [{tags_str}] {self.message}"
        if self.context:
            extras = " ".join(f"{k}={v}" for k, v in self.context.items())
            line = f"{line} | {extras}"
        return line


class Diagnostics:
    """
    Process-wide diagnostic trail.

    A record is kept if:
    1. level >= current_level, OR
    2. any of its tags is active.
    """

    _instance: Optional["Diagnostics"] = None
    _lock = threading.Lock()

    def __init__(self, ring_buffer_size: int = DEFAULT_RING_BUFFER_SIZE) -> None:
        self._current_level: LogLevel = LogLevel.WARNING
        self._active_tags: set[str] = set()
        self._buffer: deque[DiagnosticRecord] = deque(maxlen=ring_buffer_size)
        self._buffer_lock = threading.Lock()
        self.echo = False

    @classmethod
    def instance(cls) -> "Diagnostics":
        """Get or create the singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton. For tests."""
        with cls._lock:
            cls._instance = None

    # ── Configuration ─────────────────────────────────────────────

    def configure(self, config: "DiagnosticsConfig") -> None:
        """Apply a DiagnosticsConfig (level floor, tags, buffer, echo)."""
        self._current_level = config.current_level
        self._active_tags = set(config.active_tags)
        self.echo = config.echo
        with self._buffer_lock:
            if self._buffer.maxlen != config.ring_buffer_size:
                self._buffer = deque(self._buffer, maxlen=config.ring_buffer_size)

    @property
    def current_level(self) -> LogLevel:
        return self._current_level

    @current_level.setter
    def current_level(self, value: int | str) -> None:
        self._current_level = LogLevel.from_value(value)

    def activate_tag(self, tag: str) -> None:
        self._active_tags.add(tag)

    def deactivate_tag(self, tag: str) -> None:
        self._active_tags.discard(tag)

    @property
    def active_tags(self) -> frozenset[str]:
        return frozenset(self._active_tags)

    # ── Recording ─────────────────────────────────────────────────

    def record(
        self,
        level: LogLevel,
        message: str,
        tags: set[str] | None = None,
        **context: Any,
    ) -> None:
        if not self._should_emit(level, tags):
            return

        entry = DiagnosticRecord.create(level, message, tags, **context)
        with self._buffer_lock:
            self._buffer.append(entry)
        if self.echo:
            try:
                print(entry.compact(), file=sys.stderr, flush=True)
            except (OSError, ValueError):
                # Closed or broken stderr must not break the log call
                pass

    def _should_emit(self, level: LogLevel, tags: set[str] | None) -> bool:
        if level >= self._current_level:
            return True
        return bool(tags and (tags & self._active_tags))

    def trace(self, message: str, tags: set[str] | None = None, **ctx: Any) -> None:
        self.record(LogLevel.TRACE, message, tags, **ctx)

    def debug(self, message: str, tags: set[str] | None = None, **ctx: Any) -> None:
        self.record(LogLevel.DEBUG, message, tags, **ctx)

    def warning(self, message: str, tags: set[str] | None = None, **ctx: Any) -> None:
        self.record(LogLevel.WARNING, message, tags, **ctx)

    # ── Reading ───────────────────────────────────────────────────

    def get_recent(self, n: int = 100, tags: set[str] | None = None) -> list[DiagnosticRecord]:
        """Most recent records, oldest first, optionally filtered by tags."""
        with self._buffer_lock:
            records = list(self._buffer)
        if tags:
            records = [r for r in records if r.tags & tags]
        return records[-n:]

    def clear(self) -> None:
        with self._buffer_lock:
            self._buffer.clear()

    @property
    def count(self) -> int:
        return len(self._buffer)

    def status(self) -> dict:
        return {
            "current_level": self._current_level.name,
            "active_tags": sorted(self._active_tags),
            "buffer_count": self.count,
            "buffer_max": self._buffer.maxlen,
            "echo": self.echo,
        }
