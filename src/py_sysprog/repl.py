"""Interactive REPL (Read-Eval-Print Loop) for the simulators.

The REPL creates a shell and enters the classic loop:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

This module keeps the I/O loop separate from the shell logic.  The
shell is fully testable (returns strings, no I/O); the REPL is the
thin I/O wrapper that connects it to ``stdin``/``stdout``.

The helper functions (``format_banner``, ``build_prompt``) are pure
and testable.  The ``run()`` function is the I/O entrypoint.
"""

import readline

from py_sysprog.completer import Completer
from py_sysprog.logging import LogLevel
from py_sysprog.shell import Shell

_BANNER_WIDTH = 38

PROMPT = "sysprog $ "


def format_banner(command_names: list[str]) -> str:
    """Format the start-up banner listing the available commands.

    Args:
        command_names: The shell's command names.

    Returns:
        A formatted string suitable for printing to the console.

    """
    border = "=" * _BANNER_WIDTH
    header = f"\n  {border}\n           py-sysprog\n    System programming simulators\n  {border}\n\n"
    body = "  Commands: " + ", ".join(command_names)
    footer = "\n\nType 'help' for usage, 'exit' to quit.\n"
    return header + body + footer


def build_prompt(shell: Shell) -> str:
    """Build the prompt, flagging errors logged by earlier commands.

    Returns:
        ``sysprog $ `` or, once any ERROR has been logged,
        ``sysprog [N errors] $ ``.

    """
    errors = len(shell.logger.filter(min_level=LogLevel.ERROR))
    if not errors:
        return PROMPT
    noun = "error" if errors == 1 else "errors"
    return f"sysprog [{errors} {noun}] $ "


def run() -> None:
    """Run the interactive REPL.

    This is the ``py-sysprog-shell`` entrypoint.  It handles:
    - Shell creation and tab completion.
    - The read-eval-print loop.
    - Graceful handling of Ctrl+C and Ctrl+D.
    """
    shell = Shell()

    # Wire up tab completion via readline.
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(shell.command_names))  # noqa: T201

    try:
        while True:
            try:
                command = input(build_prompt(shell))
            except EOFError:
                # Ctrl+D
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C
        print("\nInterrupted.")  # noqa: T201

    finally:
        print("Goodbye.")  # noqa: T201
