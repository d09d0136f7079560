"""Operation table and constant decoding for the pseudo-machine.

Every machine instruction is three bytes: a one-byte opcode followed by
a two-byte address.  Directives generate data or reserve space:

======  ===============================  ======================
Name    Effect on the location counter   Object code
======  ===============================  ======================
START   sets it to the hex operand       none
END     none (literal pool follows)      none
WORD    +3                               operand as 3-byte int
BYTE    +decoded constant length         the constant's bytes
RESW    +3 × operand                     none (breaks a record)
RESB    +operand                         none (breaks a record)
======  ===============================  ======================

Constants come in two forms: ``C'EOF'`` (characters, one byte each)
and ``X'F1'`` (hex digits, two per byte).  Literals are the same forms
prefixed with ``=``; a literal in neither form is treated as a word.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType

START = "START"
END = "END"
WORD = "WORD"
BYTE = "BYTE"
RESW = "RESW"
RESB = "RESB"
DIRECTIVES: frozenset[str] = frozenset({START, END, WORD, BYTE, RESW, RESB})

WORD_LENGTH = 3
INSTRUCTION_LENGTH = 3
LITERAL_PREFIX = "="

_WORD_BITS = 24
_WORD_MIN = -(1 << (_WORD_BITS - 1))
_WORD_MAX = (1 << _WORD_BITS) - 1
_CONSTANT = re.compile(r"^([CcXx])'(.*)'$")
_HEX_DIGITS = re.compile(r"^[0-9A-Fa-f]*$")


@dataclass(frozen=True)
class Instruction:
    """An OPTAB row: mnemonic, one-byte opcode and instruction length."""

    mnemonic: str
    opcode: int
    length: int = INSTRUCTION_LENGTH


OPTAB = MappingProxyType(
    {
        ins.mnemonic: ins
        for ins in (
            Instruction("LDA", 0x00),
            Instruction("LDX", 0x04),
            Instruction("STA", 0x0C),
            Instruction("STX", 0x10),
            Instruction("ADD", 0x18),
            Instruction("SUB", 0x1C),
            Instruction("MUL", 0x20),
            Instruction("DIV", 0x24),
            Instruction("COMP", 0x28),
            Instruction("JMP", 0x30),
            Instruction("JGT", 0x34),
            Instruction("JLT", 0x38),
            Instruction("RSUB", 0x4C),
        )
    }
)


def _split_constant(operand: str) -> tuple[str, str] | None:
    """Return (kind, body) for ``C'..'`` / ``X'..'`` operands, else None."""
    match = _CONSTANT.match(operand.strip())
    if match is None:
        return None
    return match.group(1).upper(), match.group(2)


def constant_length(operand: str) -> int | None:
    """Return the byte length of a ``C'..'`` or ``X'..'`` constant.

    Hex constants with an odd number of digits round up to whole bytes.
    Returns None when *operand* is not a character or hex constant.
    """
    parts = _split_constant(operand)
    if parts is None:
        return None
    kind, body = parts
    if kind == "C":
        return len(body)
    return (len(body) + 1) // 2


def constant_bytes(operand: str) -> str | None:
    """Return the object code (hex text) for a ``C'..'`` or ``X'..'`` constant.

    Character constants keep their case, so ``C'eof'`` is ``656F66`` and
    not the upper-cased ``454F46``. Hex digits may be either case.
    Returns None when *operand* is malformed.
    """
    parts = _split_constant(operand)
    if parts is None:
        return None
    kind, body = parts
    if kind == "C":
        if not body.isascii():
            return None
        return "".join(f"{ord(char):02X}" for char in body)
    if not _HEX_DIGITS.match(body):
        return None
    digits = body.upper()
    return digits.zfill(len(digits) + len(digits) % 2)


def word_bytes(operand: str) -> str | None:
    """Return a decimal WORD operand as six hex digits (24-bit two's complement).

    Returns None when *operand* is not a decimal integer in range.
    """
    try:
        value = int(operand.strip(), 10)
    except ValueError:
        return None
    if not _WORD_MIN <= value <= _WORD_MAX:
        return None
    return f"{value & _WORD_MAX:06X}"


def is_literal(operand: str) -> bool:
    """Return True for ``=``-prefixed literal operands."""
    return operand.startswith(LITERAL_PREFIX)


def literal_length(literal: str) -> int:
    """Return the storage length of a literal (a word unless C/X form)."""
    length = constant_length(literal.removeprefix(LITERAL_PREFIX))
    return WORD_LENGTH if length is None else length


def literal_bytes(literal: str) -> str | None:
    """Return the object code for a literal's value, or None if malformed."""
    body = literal.removeprefix(LITERAL_PREFIX)
    if _split_constant(body) is not None:
        return constant_bytes(body)
    return word_bytes(body)
