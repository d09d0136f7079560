"""Two-pass macroprocessor.

**Pass I — definition processing.**  Walk the source once.  A line whose
opcode is ``MACRO`` opens a definition named by the line's label; its
operand lists the formal parameters (``&A,&B``).  Every line up to the
matching ``MEND`` is stored in the MDT with the formal parameters
rewritten as positional placeholders (``&A`` → ``#0``).  At ``MEND`` the
definition closes and the MNT records where it starts and how many
parameters it takes.  Lines outside a definition are copied unchanged to
the intermediate list.  Definitions do not nest.

**Pass II — expansion.**  Walk the intermediate list.  A line whose
opcode names a macro is a call: its comma-separated operand supplies
the actual arguments, which replace the placeholders in each stored
body line until ``MEND``.  Every other line passes through unchanged.

Problems never stop a pass.  They are logged, and Pass II also writes
an ``** ERROR:`` marker into the expanded output where the call was.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from py_sysprog.logging import LogEntry, Logger
from py_sysprog.macro.tables import (
    MACRO,
    MEND,
    MacroTables,
    MacroTablesBuilder,
    MNTEntry,
    is_mend,
    placeholder,
    substitute,
)
from py_sysprog.source import SourceLine, parse_line, split_operands

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

_SOURCE = "macro"
_LABEL_AND_DIRECTIVE = 2

ERROR_MARKER = "** ERROR:"
INTERMEDIATE_FILE = "intermediate.txt"
OUTPUT_FILE = "output.txt"


def _parse(text: str) -> SourceLine:
    """Parse a line, treating a parameterless ``NAME MACRO`` header as label + directive."""
    tokens = text.split()
    if len(tokens) == _LABEL_AND_DIRECTIVE and tokens[1] == MACRO:
        return SourceLine(label=tokens[0], opcode=tokens[1])
    return parse_line(text)


@dataclass(frozen=True)
class PassOneOutput:
    """What Pass I hands to Pass II: the frozen tables and intermediate code."""

    tables: MacroTables
    intermediate: tuple[str, ...]


def pass_one(source: Iterable[str], *, logger: Logger | None = None) -> PassOneOutput:
    """Extract macro definitions and produce the intermediate code.

    Args:
        source: Raw source lines.
        logger: Where diagnostics go (a private logger if omitted).

    Returns:
        The frozen MNT/MDT and the source with definitions removed.

    """
    log = logger if logger is not None else Logger()
    builder = MacroTablesBuilder()
    intermediate: list[str] = []

    in_macro = False
    name = ""
    start = 0
    formals: dict[str, str] = {}

    for number, text in enumerate(source, start=1):
        line = _parse(text)
        if line.is_blank:
            continue

        if line.opcode == MACRO:
            if in_macro:
                log.error(
                    f"nested definition of '{line.label}' inside '{name}' is not supported",
                    source=_SOURCE,
                    line=number,
                )
                continue
            if not line.label:
                log.error("MACRO without a name", source=_SOURCE, line=number)
            in_macro = True
            name = line.label
            start = builder.next_index
            formals = {
                param: placeholder(index)
                for index, param in enumerate(split_operands(line.operand))
            }
            builder.append(text)

        elif line.opcode == MEND:
            if not in_macro:
                log.warning("MEND without an open definition ignored", source=_SOURCE, line=number)
                continue
            builder.append(text)
            if builder.define(name, MNTEntry(start=start, param_count=len(formals))):
                log.warning(
                    f"macro '{name}' redefined; the new definition replaces the old",
                    source=_SOURCE,
                    line=number,
                )
            in_macro = False

        elif in_macro:
            builder.append(substitute(text, formals))

        else:
            intermediate.append(text)

    if in_macro:
        log.error(
            f"definition of '{name}' has no MEND; macro not recorded",
            source=_SOURCE,
        )

    return PassOneOutput(tables=builder.freeze(), intermediate=tuple(intermediate))


def pass_two(
    intermediate: Sequence[str],
    tables: MacroTables,
    *,
    logger: Logger | None = None,
) -> tuple[str, ...]:
    """Expand every macro call in the intermediate code.

    Args:
        intermediate: Pass I output (source without definitions).
        tables: The read-only MNT/MDT built by Pass I.
        logger: Where diagnostics go (a private logger if omitted).

    Returns:
        The fully expanded source lines, with inline error markers.

    """
    log = logger if logger is not None else Logger()
    output: list[str] = []

    for number, text in enumerate(intermediate, start=1):
        line = _parse(text)
        entry = tables.lookup(line.opcode)
        if entry is None:
            output.append(text)
            continue

        name = line.opcode
        actuals = split_operands(line.operand)
        if len(actuals) != entry.param_count:
            message = (
                f"macro {name} expects {entry.param_count} argument(s), got {len(actuals)}"
            )
            output.append(f"{ERROR_MARKER} {message}")
            log.error(message, source=_SOURCE, line=number)
            continue
        if line.label:
            log.warning(
                f"label '{line.label}' on call to {name} is not carried into the expansion",
                source=_SOURCE,
                line=number,
            )

        arguments = {placeholder(index): actual for index, actual in enumerate(actuals)}
        index = entry.start + 1
        while True:
            if index >= len(tables.mdt):
                message = f"definition table overrun while expanding {name}"
                output.append(f"{ERROR_MARKER} {message}")
                log.error(message, source=_SOURCE, line=number)
                break
            body = tables.mdt[index]
            if is_mend(body):
                break
            output.append(substitute(body, arguments))
            index += 1

    return tuple(output)


@dataclass(frozen=True)
class MacroResult:
    """Both passes of one macroprocessor run.

    Attributes:
        tables: The MNT/MDT built by Pass I.
        intermediate: Pass I output (definitions removed).
        output: Pass II output (calls expanded).
        diagnostics: Everything logged during the run.

    """

    tables: MacroTables
    intermediate: tuple[str, ...]
    output: tuple[str, ...]
    diagnostics: tuple[LogEntry, ...] = ()

    @property
    def intermediate_text(self) -> str:
        """Return the intermediate code as file contents."""
        return "".join(f"{line}\n" for line in self.intermediate)

    @property
    def output_text(self) -> str:
        """Return the expanded code as file contents."""
        return "".join(f"{line}\n" for line in self.output)

    def save(self, directory: Path) -> tuple[Path, Path]:
        """Write ``intermediate.txt`` and ``output.txt`` into *directory*.

        Returns:
            The paths of the intermediate and output files.

        """
        directory.mkdir(parents=True, exist_ok=True)
        intermediate_path = directory / INTERMEDIATE_FILE
        output_path = directory / OUTPUT_FILE
        intermediate_path.write_text(self.intermediate_text)
        output_path.write_text(self.output_text)
        return intermediate_path, output_path


def process(source: Iterable[str], *, logger: Logger | None = None) -> MacroResult:
    """Run Pass I and Pass II over *source*.

    Args:
        source: Raw source lines.
        logger: Shared logger; diagnostics are also kept on the result.

    Returns:
        The tables, both text buffers and the run's diagnostics.

    """
    log = logger if logger is not None else Logger()
    before = len(log)
    first = pass_one(source, logger=log)
    expanded = pass_two(first.intermediate, first.tables, logger=log)
    return MacroResult(
        tables=first.tables,
        intermediate=first.intermediate,
        output=expanded,
        diagnostics=tuple(log.entries[before:]),
    )
