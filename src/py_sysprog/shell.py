"""The shell — command interpreter for the simulators.

The shell reads a command string, splits it into a command name and
arguments, dispatches to the matching handler, and returns a string
result.  Each simulator gets one command:

- ``paging <fifo|lru|optimal|all> [capacity] [page ...]``
- ``schedule <fcfs|sjf|priority|rr|all> [quantum]``
- ``macro [tables|intermediate|output|all]``
- ``assemble [symtab|littab|intermediate|object|all]``

Handlers return strings and never print; the REPL and the web UI decide
how to display them.  Diagnostics from every macro and assembler run
accumulate in the shell's logger, shown by ``log``.
"""

from collections.abc import Callable
from typing import TypeAlias

from py_sysprog import reports
from py_sysprog.assembler import assemble
from py_sysprog.logging import Logger
from py_sysprog.macro import process
from py_sysprog.memory import ALGORITHMS
from py_sysprog.process import DEFAULT_QUANTUM, POLICIES
from py_sysprog.samples import ASSEMBLY_SOURCE, FRAME_CAPACITY, MACRO_SOURCE, REFERENCE_STRING

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

PAGING_CHOICES: tuple[str, ...] = (*ALGORITHMS, "all")
SCHEDULE_CHOICES: tuple[str, ...] = (*POLICIES, "all")
MACRO_VIEWS: tuple[str, ...] = ("tables", "intermediate", "output", "all")
ASSEMBLE_VIEWS: tuple[str, ...] = ("symtab", "littab", "intermediate", "object", "all")


def _parse_ints(args: list[str]) -> list[int] | None:
    """Parse every argument as an int, or return None if any is invalid."""
    try:
        return [int(arg) for arg in args]
    except ValueError:
        return None


class Shell:
    """Command interpreter for the four simulators."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create a shell.

        Args:
            logger: Where run diagnostics accumulate (a fresh one if omitted).

        """
        self._logger = logger if logger is not None else Logger()
        self._history: list[str] = []

        # Command name -> handler.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "paging": self._cmd_paging,
            "schedule": self._cmd_schedule,
            "macro": self._cmd_macro,
            "assemble": self._cmd_assemble,
            "log": self._cmd_log,
            "history": self._cmd_history,
            "exit": self._cmd_exit,
        }

    @property
    def logger(self) -> Logger:
        """Return the logger collecting run diagnostics."""
        return self._logger

    @property
    def command_names(self) -> list[str]:
        """Return the sorted list of command names."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Parse and execute a shell command.

        Args:
            command: The raw command string (e.g. "paging lru 4").

        Returns:
            The command output as a string, or an error message.

        """
        stripped = command.strip()
        if not stripped:
            return ""
        self._history.append(stripped)

        name, *args = stripped.split()
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"
        return handler(args)

    # -- commands ---------------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "\n".join(
            [
                "Available commands: " + ", ".join(self.command_names),
                f"  paging <{'|'.join(PAGING_CHOICES)}> [capacity] [page ...]",
                f"  schedule <{'|'.join(SCHEDULE_CHOICES)}> [quantum]",
                f"  macro [{'|'.join(MACRO_VIEWS)}]",
                f"  assemble [{'|'.join(ASSEMBLE_VIEWS)}]",
            ]
        )

    def _cmd_paging(self, args: list[str]) -> str:
        """Replay a reference string under one or all replacement policies."""
        if not args or args[0] not in PAGING_CHOICES:
            return f"Usage: paging <{'|'.join(PAGING_CHOICES)}> [capacity] [page ...]"
        numbers = _parse_ints(args[1:])
        if numbers is None:
            return "Error: capacity and pages must be integers"
        capacity = numbers[0] if numbers else FRAME_CAPACITY
        reference = numbers[1:] or list(REFERENCE_STRING)
        algorithms = tuple(ALGORITHMS) if args[0] == "all" else (args[0],)
        try:
            return reports.paging_report(reference, capacity, algorithms)
        except ValueError as e:
            return f"Error: {e}"

    def _cmd_schedule(self, args: list[str]) -> str:
        """Run one or all scheduling policies on the sample processes."""
        if not args or args[0] not in SCHEDULE_CHOICES:
            return f"Usage: schedule <{'|'.join(SCHEDULE_CHOICES)}> [quantum]"
        numbers = _parse_ints(args[1:2])
        if numbers is None:
            return f"Error: invalid quantum '{args[1]}'"
        quantum = numbers[0] if numbers else DEFAULT_QUANTUM
        policies = tuple(POLICIES) if args[0] == "all" else (args[0],)
        try:
            return reports.scheduling_report(quantum=quantum, policies=policies)
        except ValueError as e:
            return f"Error: {e}"

    def _cmd_macro(self, args: list[str]) -> str:
        """Run the macroprocessor on the sample and show one view of it."""
        view = args[0] if args else "all"
        if view not in MACRO_VIEWS:
            return f"Usage: macro [{'|'.join(MACRO_VIEWS)}]"
        result = process(MACRO_SOURCE, logger=self._logger)
        match view:
            case "tables":
                return reports.format_macro_tables(result)
            case "intermediate":
                return "\n".join(result.intermediate)
            case "output":
                return "\n".join(result.output)
            case _:
                return reports.format_macro(result)

    def _cmd_assemble(self, args: list[str]) -> str:
        """Assemble the sample program and show one view of it."""
        view = args[0] if args else "all"
        if view not in ASSEMBLE_VIEWS:
            return f"Usage: assemble [{'|'.join(ASSEMBLE_VIEWS)}]"
        result = assemble(ASSEMBLY_SOURCE, logger=self._logger)
        match view:
            case "symtab":
                return reports.format_symbols(result)
            case "littab":
                return reports.format_literals(result)
            case "intermediate":
                return result.intermediate_text.rstrip("\n")
            case "object":
                return "\n".join(result.program.records())
            case _:
                return reports.format_assembly(result)

    def _cmd_log(self, _args: list[str]) -> str:
        """Show diagnostics collected so far."""
        entries = self._logger.entries
        return "\n".join(str(e) for e in entries) if entries else "No log entries."

    def _cmd_history(self, _args: list[str]) -> str:
        """Show command history."""
        if not self._history:
            return "No history."
        lines = [f"  {i + 1}  {cmd}" for i, cmd in enumerate(self._history)]
        return "\n".join(lines)

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to stop."""
        return self.EXIT_SENTINEL
