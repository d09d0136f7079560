"""Diagnostic logging for the simulators.

The two-pass translators (macroprocessor and assembler) never abort on
bad input.  They *detect and report*: a duplicate label, an undefined
operand or a macro called with the wrong number of arguments becomes a
diagnostic, and the pass carries on with a best-effort result.  This
module is where those diagnostics go:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, line).
- **Logger** — an append-only log with filtering and clearing.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes minimum-level filtering trivial.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The subsystem that generated the event (e.g. "assembler").
        line: The 1-based source line the event refers to, if any.

    """

    level: LogLevel
    message: str
    source: str
    line: int | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message`` (with the line when known)."""
        where = self.source if self.line is None else f"{self.source} (line {self.line})"
        return f"[{self.level.name}] {where}: {self.message}"


class Logger:
    """Append-only log buffer with filtering.

    The logger collects ``LogEntry`` records and provides simple
    querying by level and/or source.  One logger can be shared by
    several passes so a whole run ends up in a single audit trail.
    """

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        line: int | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Subsystem that generated the event.
            line: Source line number associated with the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, line=line))

    def warning(self, message: str, *, source: str, line: int | None = None) -> None:
        """Append a WARNING entry."""
        self.log(LogLevel.WARNING, message, source=source, line=line)

    def error(self, message: str, *, source: str, line: int | None = None) -> None:
        """Append an ERROR entry."""
        self.log(LogLevel.ERROR, message, source=source, line=line)

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of recorded entries."""
        return len(self._entries)
