"""Tests for the tab-completion engine.

The Completer's logic is pure (no I/O) — it analyses the input line and
returns candidate strings, making it testable without a terminal.
"""

from unittest.mock import patch

from py_sysprog.completer import Completer
from py_sysprog.shell import Shell


def _completer() -> tuple[Shell, Completer]:
    shell = Shell()
    return shell, Completer(shell)


class TestCommandCompletion:
    """Verify completion of command names (first word on the line)."""

    def test_empty_line_returns_all_commands(self) -> None:
        """Pressing Tab on a blank line should list every command."""
        shell, completer = _completer()
        assert completer.completions("", "") == shell.command_names

    def test_partial_match(self) -> None:
        """A partial prefix should return only matching commands."""
        _shell, completer = _completer()
        assert completer.completions("h", "h") == ["help", "history"]

    def test_no_match_returns_empty(self) -> None:
        """An unrecognised prefix should return no candidates."""
        _shell, completer = _completer()
        assert completer.completions("zzz", "zzz") == []


class TestSubcommandCompletion:
    """Verify completion of the second word."""

    def test_paging_algorithms(self) -> None:
        """After 'paging ' every algorithm is offered."""
        _shell, completer = _completer()
        assert completer.completions("", "paging ") == ["all", "fifo", "lru", "optimal"]

    def test_partial_subcommand(self) -> None:
        """A partial second word narrows the candidates."""
        _shell, completer = _completer()
        assert completer.completions("s", "assemble s") == ["symtab"]

    def test_schedule_policies(self) -> None:
        """Scheduling policies are offered after 'schedule'."""
        _shell, completer = _completer()
        assert "rr" in completer.completions("", "schedule ")

    def test_third_word_has_no_candidates(self) -> None:
        """Numbers after the subcommand are not completed."""
        _shell, completer = _completer()
        assert completer.completions("", "paging fifo ") == []

    def test_command_without_subcommands(self) -> None:
        """Commands that take no subcommand offer nothing."""
        _shell, completer = _completer()
        assert completer.completions("", "history ") == []


class TestReadlineCallback:
    """Verify the readline-facing complete() method."""

    def test_complete_iterates_candidates(self) -> None:
        """complete() returns candidates by state, then None."""
        _shell, completer = _completer()
        with patch("readline.get_line_buffer", return_value="macro o"):
            assert completer.complete("o", 0) == "output"
            assert completer.complete("o", 1) is None
