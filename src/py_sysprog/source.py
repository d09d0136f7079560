"""Source-line parsing shared by the macroprocessor and the assembler.

Both translators read the same column-free assembly syntax: a line is
split on whitespace, and the number of tokens decides which columns are
present::

    MEND                →  opcode
    SUB     &B          →  opcode, operand
    CALC    MACRO &A,&B →  label, opcode, operand

Anything after the third token is ignored.  Operand lists are comma
separated with empty items dropped.
"""

from __future__ import annotations

from typing import NamedTuple


class SourceLine(NamedTuple):
    """A parsed source line: label, opcode, operand (empty when absent)."""

    label: str = ""
    opcode: str = ""
    operand: str = ""

    @property
    def is_blank(self) -> bool:
        """Return True for a line with no tokens at all."""
        return not (self.label or self.opcode or self.operand)


def parse_line(text: str) -> SourceLine:
    """Split *text* into a SourceLine based on its token count."""
    tokens = text.split()
    match len(tokens):
        case 0:
            return SourceLine()
        case 1:
            return SourceLine(opcode=tokens[0])
        case 2:
            return SourceLine(opcode=tokens[0], operand=tokens[1])
        case _:
            return SourceLine(label=tokens[0], opcode=tokens[1], operand=tokens[2])


def as_source_line(line: str | SourceLine | tuple[str, str, str]) -> SourceLine:
    """Normalise a raw text line or a (label, opcode, operand) tuple."""
    if isinstance(line, str):
        return parse_line(line)
    label, opcode, operand = line
    return SourceLine(label=label.strip(), opcode=opcode.strip(), operand=operand.strip())


def split_operands(operand: str) -> list[str]:
    """Split a comma-separated operand field, dropping empty items."""
    return [item for item in (part.strip() for part in operand.split(",")) if item]
