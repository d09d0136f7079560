"""Context-aware tab completer for the py-sysprog shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which analyses the input
context and returns a list of candidate strings.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from py_sysprog.shell import ASSEMBLE_VIEWS, MACRO_VIEWS, PAGING_CHOICES, SCHEDULE_CHOICES

if TYPE_CHECKING:
    from py_sysprog.shell import Shell

# Commands that accept a subcommand as the second word.
_SUBCOMMANDS: dict[str, tuple[str, ...]] = {
    "paging": PAGING_CHOICES,
    "schedule": SCHEDULE_CHOICES,
    "macro": MACRO_VIEWS,
    "assemble": ASSEMBLE_VIEWS,
}

_SUBCOMMAND_POSITION = 2


class Completer:
    """Context-aware tab completer for the py-sysprog shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose command names are completed.

        """
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return self._complete_commands(text)

        cmd = words[0]
        typing_second = len(words) == 1 or (
            len(words) == _SUBCOMMAND_POSITION and not line.endswith(" ")
        )
        if cmd in _SUBCOMMANDS and typing_second:
            return self._complete_subcommands(cmd, text)
        return []

    def _complete_commands(self, text: str) -> list[str]:
        """Complete command names from the shell's dispatch table."""
        return [cmd for cmd in self._shell.command_names if cmd.startswith(text)]

    @staticmethod
    def _complete_subcommands(cmd: str, text: str) -> list[str]:
        return sorted(sub for sub in _SUBCOMMANDS[cmd] if sub.startswith(text))
