"""Assembler — two-pass assembly into header/text/end object records.

Re-exports public symbols so callers can write::

    from py_sysprog.assembler import assemble, pass_one, pass_two
"""

from py_sysprog.assembler.optab import DIRECTIVES, OPTAB, Instruction
from py_sysprog.assembler.passes import (
    AssemblyResult,
    PassOneResult,
    assemble,
    pass_one,
    pass_two,
)
from py_sysprog.assembler.records import (
    MAX_TEXT_BYTES,
    EndRecord,
    HeaderRecord,
    ObjectProgram,
    TextRecord,
    TextRecordBuilder,
)
from py_sysprog.assembler.tables import IntermediateLine, Literal, LiteralTable, SymbolTable

__all__ = [
    "DIRECTIVES",
    "MAX_TEXT_BYTES",
    "OPTAB",
    "AssemblyResult",
    "EndRecord",
    "HeaderRecord",
    "Instruction",
    "IntermediateLine",
    "Literal",
    "LiteralTable",
    "ObjectProgram",
    "PassOneResult",
    "SymbolTable",
    "TextRecord",
    "TextRecordBuilder",
    "assemble",
    "pass_one",
    "pass_two",
]
