"""Tests for the shell command interpreter.

The shell returns strings rather than printing, so every command can be
checked directly.
"""

from py_sysprog.logging import Logger
from py_sysprog.shell import Shell


class TestDispatch:
    """Verify parsing and dispatch."""

    def test_empty_command(self) -> None:
        """Blank input produces no output and no history."""
        shell = Shell()
        assert shell.execute("   ") == ""
        assert shell.execute("history") == "  1  history"

    def test_unknown_command(self) -> None:
        """Unknown commands are reported by name."""
        assert Shell().execute("frobnicate now") == "Unknown command: frobnicate"

    def test_help_lists_commands(self) -> None:
        """Help should mention every command."""
        shell = Shell()
        result = shell.execute("help")
        for name in shell.command_names:
            assert name in result

    def test_command_names_sorted(self) -> None:
        """command_names is sorted for display and completion."""
        names = Shell().command_names
        assert names == sorted(names)
        assert {"paging", "schedule", "macro", "assemble"} <= set(names)

    def test_exit_returns_sentinel(self) -> None:
        """exit tells the caller to stop."""
        assert Shell().execute("exit") == Shell.EXIT_SENTINEL


class TestPagingCommand:
    """Verify the paging command."""

    def test_default_sample(self) -> None:
        """With no numbers the sample reference string and 3 frames are used."""
        result = Shell().execute("paging fifo")
        assert "Total Page Faults = 10" in result

    def test_custom_capacity_and_pages(self) -> None:
        """The first number is the capacity, the rest the reference string."""
        result = Shell().execute("paging lru 1 4 4 5")
        assert "(1 frames)" in result
        assert "Total Page Faults = 2" in result

    def test_all(self) -> None:
        """'all' runs every algorithm."""
        result = Shell().execute("paging all")
        assert "FIFO" in result
        assert "LRU" in result
        assert "Optimal" in result

    def test_usage(self) -> None:
        """A missing or unknown algorithm prints usage."""
        assert Shell().execute("paging").startswith("Usage:")
        assert Shell().execute("paging clock").startswith("Usage:")

    def test_non_integer(self) -> None:
        """Numbers must be integers."""
        assert Shell().execute("paging fifo x").startswith("Error:")

    def test_zero_capacity(self) -> None:
        """Simulation errors come back as messages."""
        assert "at least 1" in Shell().execute("paging fifo 0")


class TestScheduleCommand:
    """Verify the schedule command."""

    def test_single_policy(self) -> None:
        """One policy renders one table."""
        result = Shell().execute("schedule sjf")
        assert "SJF (Preemptive)" in result
        assert "Average WT : 5.00" in result

    def test_quantum(self) -> None:
        """The optional number sets the Round Robin quantum."""
        assert "quantum=4" in Shell().execute("schedule rr 4")

    def test_bad_quantum(self) -> None:
        """Invalid quanta are errors, not exceptions."""
        shell = Shell()
        assert shell.execute("schedule rr two") == "Error: invalid quantum 'two'"
        assert shell.execute("schedule rr 0").startswith("Error:")

    def test_usage(self) -> None:
        """An unknown policy prints usage."""
        assert Shell().execute("schedule lottery").startswith("Usage:")


class TestTranslatorCommands:
    """Verify the macro and assemble commands."""

    def test_macro_views(self) -> None:
        """Each view shows one part of the run."""
        shell = Shell()
        assert "MACRO DEFINITION TABLE (MDT)" in shell.execute("macro tables")
        assert shell.execute("macro output").splitlines()[3] == "TEMP\tLOAD\tONE"
        assert "\tCALC\tX,Y" in shell.execute("macro intermediate")
        assert "Macroprocessor" in shell.execute("macro")

    def test_assemble_views(self) -> None:
        """Each view shows one part of the run."""
        shell = Shell()
        assert shell.execute("assemble object").splitlines()[0] == "HCOPY  00100000001B"
        assert "RESULT" in shell.execute("assemble symtab")
        assert "=C'EOF'" in shell.execute("assemble littab")
        assert shell.execute("assemble intermediate").startswith("1000\tCOPY\tSTART")

    def test_bad_view(self) -> None:
        """Unknown views print usage."""
        assert Shell().execute("assemble listing").startswith("Usage:")
        assert Shell().execute("macro listing").startswith("Usage:")


class TestLogAndHistory:
    """Verify the log and history commands."""

    def test_log_empty(self) -> None:
        """A clean run logs nothing."""
        shell = Shell()
        shell.execute("assemble")
        assert shell.execute("log") == "No log entries."

    def test_log_uses_given_logger(self) -> None:
        """Entries from the shell's logger are shown."""
        logger = Logger()
        logger.warning("something odd", source="macro", line=4)
        assert Shell(logger=logger).execute("log") == "[WARNING] macro (line 4): something odd"

    def test_history(self) -> None:
        """History numbers commands from 1."""
        shell = Shell()
        shell.execute("help")
        shell.execute("paging fifo")
        assert shell.execute("history").splitlines() == [
            "  1  help",
            "  2  paging fifo",
            "  3  history",
        ]
