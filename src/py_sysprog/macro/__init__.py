"""Macroprocessor — two-pass macro definition and expansion.

Re-exports public symbols so callers can write::

    from py_sysprog.macro import process, MacroTables
"""

from py_sysprog.macro.processor import (
    ERROR_MARKER,
    MacroResult,
    PassOneOutput,
    pass_one,
    pass_two,
    process,
)
from py_sysprog.macro.tables import MacroTables, MNTEntry, placeholder, substitute

__all__ = [
    "ERROR_MARKER",
    "MNTEntry",
    "MacroResult",
    "MacroTables",
    "PassOneOutput",
    "pass_one",
    "pass_two",
    "placeholder",
    "process",
    "substitute",
]
