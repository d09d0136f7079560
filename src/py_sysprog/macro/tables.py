"""Macro Name Table and Macro Definition Table.

Pass I of the macroprocessor builds two tables:

- **MDT** (Macro Definition Table) — every line of every definition, in
  order: the ``MACRO`` header, the body lines with formal parameters
  rewritten as positional placeholders (``#0``, ``#1``, ...), and the
  closing ``MEND``.
- **MNT** (Macro Name Table) — macro name → where its header sits in
  the MDT and how many formal parameters it takes.

The tables are write-once: Pass I fills a ``MacroTablesBuilder`` and
freezes it, and Pass II only ever sees the read-only ``MacroTables``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from py_sysprog.source import parse_line

if TYPE_CHECKING:
    from collections.abc import Mapping

MACRO = "MACRO"
MEND = "MEND"


def is_mend(text: str) -> bool:
    """Return True if *text* has MEND in its opcode column.

    ``JMP MEND`` is a jump to a label named MEND, not the end of a body.
    """
    return parse_line(text).opcode == MEND


def placeholder(index: int) -> str:
    """Return the positional placeholder for the *index*-th parameter."""
    return f"#{index}"


def substitute(text: str, mapping: Mapping[str, str]) -> str:
    """Replace every whole occurrence of each key of *mapping* in *text*.

    Keys only match as complete names: ``&A`` does not match inside
    ``&AB`` and ``#1`` does not match inside ``#10``.  All keys are
    replaced in a single scan, so a replacement value is never itself
    rewritten.
    """
    if not mapping:
        return text
    alternatives = "|".join(re.escape(key) for key in sorted(mapping, key=len, reverse=True))
    pattern = re.compile(rf"(?<![\w&#])(?:{alternatives})(?!\w)")
    return pattern.sub(lambda match: mapping[match.group(0)], text)


@dataclass(frozen=True)
class MNTEntry:
    """One Macro Name Table row.

    Attributes:
        start: MDT index of the macro's ``MACRO`` header line.
        param_count: Number of formal parameters.

    """

    start: int
    param_count: int


@dataclass(frozen=True)
class MacroTables:
    """Read-only MNT and MDT handed from Pass I to Pass II."""

    mnt: Mapping[str, MNTEntry] = field(default_factory=lambda: MappingProxyType({}))
    mdt: tuple[str, ...] = ()

    def __contains__(self, name: object) -> bool:
        """Return True if *name* is a defined macro."""
        return name in self.mnt

    def lookup(self, name: str) -> MNTEntry | None:
        """Return the MNT entry for *name*, or None."""
        return self.mnt.get(name)

    def body(self, name: str) -> tuple[str, ...]:
        """Return the stored body lines of macro *name* (header and MEND excluded).

        Raises:
            KeyError: If *name* is not a defined macro.

        """
        entry = self.mnt[name]
        lines: list[str] = []
        for text in self.mdt[entry.start + 1 :]:
            if is_mend(text):
                break
            lines.append(text)
        return tuple(lines)


class MacroTablesBuilder:
    """Mutable MNT/MDT used while Pass I is running."""

    def __init__(self) -> None:
        """Create empty tables."""
        self._mnt: dict[str, MNTEntry] = {}
        self._mdt: list[str] = []

    @property
    def next_index(self) -> int:
        """Return the MDT index the next appended line will get."""
        return len(self._mdt)

    def append(self, text: str) -> None:
        """Append a line to the MDT."""
        self._mdt.append(text)

    def define(self, name: str, entry: MNTEntry) -> bool:
        """Add or replace an MNT entry.

        Returns:
            True if *name* was already defined (the entry is replaced).

        """
        existed = name in self._mnt
        self._mnt[name] = entry
        return existed

    def freeze(self) -> MacroTables:
        """Return an immutable snapshot of the tables."""
        return MacroTables(mnt=MappingProxyType(dict(self._mnt)), mdt=tuple(self._mdt))
