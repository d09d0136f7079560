"""Text reports for the four simulators.

Every function here is pure: it runs a simulation (or takes a finished
result) and returns a string.  Printing is left to the caller — the
``main`` entry point, the shell, or the web UI — which keeps the
reports testable and guarantees identical output on every run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_sysprog.assembler import assemble
from py_sysprog.macro import process
from py_sysprog.memory import ALGORITHMS
from py_sysprog.process import DEFAULT_QUANTUM, POLICIES
from py_sysprog.samples import (
    ASSEMBLY_SOURCE,
    FRAME_CAPACITY,
    MACRO_SOURCE,
    REFERENCE_STRING,
    processes,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from py_sysprog.assembler import AssemblyResult
    from py_sysprog.logging import LogEntry, Logger
    from py_sysprog.macro import MacroResult
    from py_sysprog.memory import PagingResult
    from py_sysprog.process import Process, ScheduleResult

_RULE = "-" * 40


def _title(text: str) -> str:
    return f"=== {text} ==="


def _diagnostics(entries: Sequence[LogEntry]) -> list[str]:
    if not entries:
        return ["Diagnostics: none"]
    return ["Diagnostics:", *(f"  {entry}" for entry in entries)]


# -- Page replacement ---------------------------------------------------------


def format_paging(result: PagingResult) -> str:
    """Render one page replacement run: a line per reference plus totals."""
    lines = [_title(f"{result.policy} Page Replacement ({result.capacity} frames)")]
    for step in result.steps:
        if not step.fault:
            lines.append(f"Page {step.page} -> No page fault")
            continue
        frames = " ".join(str(page) for page in step.frames)
        evicted = f"  (evicted {step.victim})" if step.victim is not None else ""
        lines.append(f"Page {step.page} -> {frames}{evicted}")
    lines.append(f"Total Page Faults = {result.faults}")
    lines.append(f"Hit ratio = {result.hit_ratio:.2f}")
    return "\n".join(lines)


def paging_report(
    reference: Sequence[int] = REFERENCE_STRING,
    capacity: int = FRAME_CAPACITY,
    algorithms: Iterable[str] = tuple(ALGORITHMS),
) -> str:
    """Run the named replacement algorithms and render each run."""
    return "\n\n".join(
        format_paging(ALGORITHMS[key](reference, capacity)) for key in algorithms
    )


# -- CPU scheduling -----------------------------------------------------------


def format_gantt(result: ScheduleResult) -> str:
    """Render the execution timeline as ``| P1 0-5 | P2 5-8 |``."""
    if not result.timeline:
        return "|"
    bars = " | ".join(f"P{s.pid} {s.start}-{s.end}" for s in result.timeline)
    return f"| {bars} |"


def format_schedule(result: ScheduleResult) -> str:
    """Render the per-process table, averages and Gantt chart."""
    header = f"{'PID':<5}{'AT':<5}{'BT':<5}{'PR':<5}{'CT':<5}{'TAT':<5}{'WT':<5}".rstrip()
    lines = [_title(f"{result.policy} Scheduling"), header]
    lines.extend(
        f"{p.pid:<5}{p.arrival:<5}{p.burst:<5}{p.priority:<5}"
        f"{p.completion:<5}{p.turnaround:<5}{p.waiting:<5}".rstrip()
        for p in result.processes
    )
    lines.append(f"Average TAT: {result.average_turnaround:.2f}")
    lines.append(f"Average WT : {result.average_waiting:.2f}")
    lines.append(f"Gantt: {format_gantt(result)}")
    return "\n".join(lines)


def scheduling_report(
    procs: Sequence[Process] | None = None,
    quantum: int = DEFAULT_QUANTUM,
    policies: Iterable[str] = tuple(POLICIES),
) -> str:
    """Run the named scheduling policies on one process set."""
    chosen = processes() if procs is None else procs
    return "\n\n".join(
        format_schedule(POLICIES[key](quantum).run(chosen)) for key in policies
    )


# -- Macroprocessor -----------------------------------------------------------


def format_macro_tables(result: MacroResult) -> str:
    """Render the MNT and MDT."""
    lines = ["MACRO NAME TABLE (MNT)", f"{'Name':<10}{'Start':<8}Params", _RULE]
    lines.extend(
        f"{name:<10}{entry.start:<8}{entry.param_count}"
        for name, entry in result.tables.mnt.items()
    )
    lines += ["", "MACRO DEFINITION TABLE (MDT)", f"{'Index':<8}Definition line", _RULE]
    lines.extend(f"{index:<8}{text}" for index, text in enumerate(result.tables.mdt))
    return "\n".join(lines)


def format_macro(result: MacroResult) -> str:
    """Render a full macroprocessor run: tables, both files, diagnostics."""
    lines = [_title("Macroprocessor"), format_macro_tables(result), ""]
    lines += ["--- intermediate.txt (Pass I) ---", *result.intermediate, ""]
    lines += ["--- output.txt (Pass II) ---", *result.output, ""]
    lines += _diagnostics(result.diagnostics)
    return "\n".join(lines)


def macro_report(source: Iterable[str] = MACRO_SOURCE, *, logger: Logger | None = None) -> str:
    """Run the macroprocessor on *source* and render the result."""
    return format_macro(process(source, logger=logger))


# -- Assembler ----------------------------------------------------------------


def format_symbols(result: AssemblyResult) -> str:
    """Render SYMTAB sorted by label."""
    lines = ["SYMTAB", f"{'Label':<10}Address", _RULE]
    lines.extend(
        f"{label:<10}{address:04X}" for label, address in sorted(result.first.symbols.items())
    )
    return "\n".join(lines)


def format_literals(result: AssemblyResult) -> str:
    """Render LITTAB in pool order."""
    lines = ["LITTAB", f"{'Literal':<12}{'Address':<9}Length", _RULE]
    for literal in result.first.literals.values():
        address = "----" if literal.address is None else f"{literal.address:04X}"
        lines.append(f"{literal.text:<12}{address:<9}{literal.length}")
    return "\n".join(lines)


def format_assembly(result: AssemblyResult) -> str:
    """Render a full assembler run: tables, intermediate file, object program."""
    first = result.first
    lines = [
        _title("Two-Pass Assembler"),
        f"START: LC set to {first.start:04X}",
        f"Pass I complete. Program length: {first.length:04X}",
        "",
        format_symbols(result),
        "",
        format_literals(result),
        "",
        "--- intermediate.txt (Pass I) ---",
    ]
    lines.extend(
        f"[{line.lc:04X}] {line.label} {line.opcode} {line.operand}".rstrip()
        for line in first.intermediate
    )
    lines += ["", "--- object program (Pass II) ---", *result.program.records(), ""]
    lines += _diagnostics(result.diagnostics)
    return "\n".join(lines)


def assembler_report(
    source: Iterable[str | tuple[str, str, str]] = ASSEMBLY_SOURCE,
    *,
    logger: Logger | None = None,
) -> str:
    """Assemble *source* and render the result."""
    return format_assembly(assemble(source, logger=logger))


# -- Everything ---------------------------------------------------------------


def full_report() -> str:
    """Return all four reports for the built-in samples."""
    sections = (paging_report(), macro_report(), assembler_report(), scheduling_report())
    return "\n\n".join(sections) + "\n"


def main() -> None:
    """Print every report for the built-in samples.

    This is the ``py-sysprog`` console entry point.
    """
    print(full_report(), end="")  # noqa: T201
