"""Symbol table, literal table and the intermediate file.

Pass I fills the tables while it walks the source; Pass II reads them
through the frozen snapshots returned by ``freeze()``, so nothing Pass
II does can change an address Pass I decided.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from py_sysprog.assembler.optab import literal_length

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class IntermediateLine:
    """One line of the intermediate file: the source line tagged with its LC.

    Attributes:
        lc: Location counter value at which the line was assembled.
        label: Label column (may be empty).
        opcode: Mnemonic or directive.
        operand: Operand column (may be empty).
        line: 1-based line number in the source program.

    """

    lc: int
    label: str
    opcode: str
    operand: str
    line: int = 0

    def __str__(self) -> str:
        """Format as ``LC<TAB>label<TAB>opcode<TAB>operand``."""
        return f"{self.lc:04X}\t{self.label}\t{self.opcode}\t{self.operand}"


@dataclass(frozen=True)
class Literal:
    """A LITTAB row.  ``address`` stays None until the pool is placed."""

    text: str
    length: int
    address: int | None = None


class SymbolTable:
    """Label → address, filled by Pass I."""

    def __init__(self) -> None:
        """Create an empty symbol table."""
        self._symbols: dict[str, int] = {}

    def define(self, label: str, address: int) -> bool:
        """Record *label* at *address*.

        A duplicate definition overwrites the previous address.

        Returns:
            True if the label was already defined.

        """
        duplicate = label in self._symbols
        self._symbols[label] = address
        return duplicate

    def __contains__(self, label: object) -> bool:
        """Return True if *label* has been defined."""
        return label in self._symbols

    def __len__(self) -> int:
        """Return the number of symbols."""
        return len(self._symbols)

    def freeze(self) -> Mapping[str, int]:
        """Return a read-only snapshot of the table."""
        return MappingProxyType(dict(self._symbols))


class LiteralTable:
    """Literal text → Literal, filled by Pass I.

    Entries keep the order in which literals were first referenced,
    which is also the order they are laid out in the literal pool.
    """

    def __init__(self) -> None:
        """Create an empty literal table."""
        self._literals: dict[str, Literal] = {}

    def register(self, text: str) -> bool:
        """Add literal *text* with no address if it is not already present.

        Returns:
            True if the literal was new.

        """
        if text in self._literals:
            return False
        self._literals[text] = Literal(text=text, length=literal_length(text))
        return True

    def assign_pool(self, lc: int) -> int:
        """Place every unaddressed literal starting at *lc*.

        Returns:
            The location counter after the pool.

        """
        for text, literal in self._literals.items():
            if literal.address is None:
                self._literals[text] = replace(literal, address=lc)
                lc += literal.length
        return lc

    def __contains__(self, text: object) -> bool:
        """Return True if *text* is a registered literal."""
        return text in self._literals

    def __len__(self) -> int:
        """Return the number of literals."""
        return len(self._literals)

    def freeze(self) -> Mapping[str, Literal]:
        """Return a read-only snapshot of the table."""
        return MappingProxyType(dict(self._literals))
