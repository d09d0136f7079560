"""Two-pass assembler for the pseudo-machine.

**Pass I — addresses.**  Keep a location counter (LC), starting at the
``START`` operand.  Record every label in the symbol table at the
current LC, tag each line with the LC in the intermediate file, and
advance the LC by the instruction length or the directive's size.
``=`` operands are registered in the literal table without an address;
at ``END`` the literal pool is laid out after the last line.

**Pass II — object code.**  Walk the intermediate file and turn each
line into bytes: an instruction becomes its opcode followed by the
operand's address (looked up in the symbol table, then the literal
table), ``WORD``/``BYTE`` become their data.  Bytes are packed into
text records between a header and an end record.

Pass I never looks an operand up; Pass II never changes a table.
Forward references therefore need no special handling: by the time
Pass II runs, every label has its address.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from py_sysprog.assembler.optab import (
    BYTE,
    END,
    OPTAB,
    RESB,
    RESW,
    START,
    WORD,
    WORD_LENGTH,
    constant_bytes,
    constant_length,
    is_literal,
    literal_bytes,
    word_bytes,
)
from py_sysprog.assembler.records import (
    MAX_TEXT_BYTES,
    EndRecord,
    HeaderRecord,
    ObjectProgram,
    TextRecordBuilder,
)
from py_sysprog.assembler.tables import IntermediateLine, Literal, LiteralTable, SymbolTable
from py_sysprog.logging import LogEntry, Logger
from py_sysprog.source import SourceLine, as_source_line

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

_SOURCE = "assembler"

INTERMEDIATE_FILE = "intermediate.txt"
OBJECT_FILE = "object.txt"


# ---------------------------------------------------------------------------
# Pass I
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PassOneResult:
    """Everything Pass II needs, frozen.

    Attributes:
        program_name: Label of the START line ("" if none).
        start: Start address from START (0 if absent).
        end: Location counter after the literal pool.
        symbols: Read-only label → address mapping.
        literals: Read-only literal → Literal mapping.
        intermediate: The intermediate file.

    """

    program_name: str
    start: int
    end: int
    symbols: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    literals: Mapping[str, Literal] = field(default_factory=lambda: MappingProxyType({}))
    intermediate: tuple[IntermediateLine, ...] = ()

    @property
    def length(self) -> int:
        """Return the program length in bytes (final LC − start)."""
        return self.end - self.start


def _parse_count(line: SourceLine, number: int, log: Logger) -> int:
    """Return the decimal RESW/RESB count, logging and returning 0 if invalid."""
    try:
        count = int(line.operand, 10)
    except ValueError:
        count = -1
    if count < 0:
        log.error(
            f"{line.opcode} needs a non-negative decimal count, got '{line.operand}'",
            source=_SOURCE,
            line=number,
        )
        return 0
    return count


def _advance(line: SourceLine, opcode: str, number: int, log: Logger) -> int:
    """Return how far the LC moves past *line*."""
    instruction = OPTAB.get(opcode)
    if instruction is not None:
        return instruction.length
    match opcode:
        case "WORD":
            return WORD_LENGTH
        case "RESW":
            return WORD_LENGTH * _parse_count(line, number, log)
        case "RESB":
            return _parse_count(line, number, log)
        case "BYTE":
            length = constant_length(line.operand)
            if length is None:
                log.error(f"invalid BYTE constant '{line.operand}'", source=_SOURCE, line=number)
                return 0
            if constant_bytes(line.operand) is None:
                # The space is still reserved so later labels keep their addresses.
                log.error(
                    f"BYTE constant '{line.operand}' has invalid data; no object code",
                    source=_SOURCE,
                    line=number,
                )
            return length
        case "END":
            return 0
        case _:
            log.error(f"unknown opcode '{line.opcode}'", source=_SOURCE, line=number)
            return 0


def _parse_start(line: SourceLine, number: int, log: Logger) -> int:
    """Return the START address (hex), or 0 when absent or invalid."""
    if not line.operand:
        return 0
    try:
        return int(line.operand, 16)
    except ValueError:
        log.error(
            f"START address '{line.operand}' is not hexadecimal; using 0",
            source=_SOURCE,
            line=number,
        )
        return 0


def pass_one(
    source: Iterable[str | SourceLine | tuple[str, str, str]],
    *,
    logger: Logger | None = None,
) -> PassOneResult:
    """Assign addresses and build SYMTAB, LITTAB and the intermediate file.

    Args:
        source: Source lines, as text or (label, opcode, operand) triples.
        logger: Where diagnostics go (a private logger if omitted).

    Returns:
        The frozen Pass I result.

    """
    log = logger if logger is not None else Logger()
    symbols = SymbolTable()
    literals = LiteralTable()
    intermediate: list[IntermediateLine] = []
    program_name = ""
    start = 0
    lc = 0
    saw_end = False

    for number, raw in enumerate(source, start=1):
        line = as_source_line(raw)
        if line.is_blank:
            continue
        opcode = line.opcode.upper()

        if opcode == START:
            if intermediate:
                log.warning("START after the first line resets the LC", source=_SOURCE, line=number)
            program_name = line.label
            start = _parse_start(line, number, log)
            lc = start
            intermediate.append(
                IntermediateLine(lc, line.label, opcode, line.operand, line=number),
            )
            continue

        if line.label and symbols.define(line.label, lc):
            log.warning(
                f"duplicate label '{line.label}' at {lc:04X}; previous address overwritten",
                source=_SOURCE,
                line=number,
            )

        if opcode != END:
            intermediate.append(
                IntermediateLine(lc, line.label, opcode, line.operand, line=number),
            )

        lc += _advance(line, opcode, number, log)

        if is_literal(line.operand) and literals.register(line.operand):
            if literal_bytes(line.operand) is None:
                log.error(
                    f"invalid literal '{line.operand}'; its pool slot gets no object code",
                    source=_SOURCE,
                    line=number,
                )

        if opcode == END:
            intermediate.append(
                IntermediateLine(lc, line.label, opcode, line.operand, line=number),
            )
            lc = literals.assign_pool(lc)
            saw_end = True
            break

    if not saw_end:
        log.warning("no END directive; literal pool placed after the last line", source=_SOURCE)
        lc = literals.assign_pool(lc)

    return PassOneResult(
        program_name=program_name,
        start=start,
        end=lc,
        symbols=symbols.freeze(),
        literals=literals.freeze(),
        intermediate=tuple(intermediate),
    )


# ---------------------------------------------------------------------------
# Pass II
# ---------------------------------------------------------------------------


def _resolve(line: IntermediateLine, first: PassOneResult, log: Logger) -> int:
    """Return the address an instruction's operand refers to."""
    operand = line.operand
    if not operand:
        return 0
    if operand in first.symbols:
        return first.symbols[operand]
    literal = first.literals.get(operand) if is_literal(operand) else None
    if literal is not None and literal.address is not None:
        return literal.address
    log.warning(
        f"symbol or literal '{operand}' not found; using address 0000",
        source=_SOURCE,
        line=line.line,
    )
    return 0


def _object_code(line: IntermediateLine, first: PassOneResult, log: Logger) -> str:
    """Return the object code for one intermediate line ("" if none)."""
    instruction = OPTAB.get(line.opcode)
    if instruction is not None:
        address = _resolve(line, first, log)
        return f"{instruction.opcode:02X}{address:04X}"
    if line.opcode == WORD:
        code = word_bytes(line.operand)
        if code is None:
            log.error(
                f"invalid WORD constant '{line.operand}'; assembled as 0",
                source=_SOURCE,
                line=line.line,
            )
            return "0" * (WORD_LENGTH * 2)
        return code
    if line.opcode == BYTE:
        # Malformed constants were reported by Pass I.
        return constant_bytes(line.operand) or ""
    return ""


def pass_two(
    first: PassOneResult,
    *,
    logger: Logger | None = None,
    max_text_bytes: int = MAX_TEXT_BYTES,
) -> ObjectProgram:
    """Generate the object program from the Pass I result.

    Args:
        first: The frozen Pass I result.
        logger: Where diagnostics go (a private logger if omitted).
        max_text_bytes: Byte budget of a single text record.

    Returns:
        The header, text and end records.

    """
    log = logger if logger is not None else Logger()
    builder = TextRecordBuilder(max_bytes=max_text_bytes)

    for line in first.intermediate:
        if line.opcode in (RESW, RESB):
            builder.flush()
            continue
        if line.opcode in (START, END):
            continue
        code = _object_code(line, first, log)
        if not code:
            # Nothing to emit; the next code starts its own record.
            builder.flush()
            continue
        builder.add(line.lc, code)

    pool = sorted(
        (lit for lit in first.literals.values() if lit.address is not None),
        key=lambda lit: lit.address or 0,
    )
    for literal in pool:
        code = literal_bytes(literal.text)
        if code is None:
            builder.flush()
            continue
        builder.add(literal.address or 0, code)
    builder.flush()

    return ObjectProgram(
        header=HeaderRecord(name=first.program_name, start=first.start, length=first.length),
        texts=builder.records,
        end=EndRecord(start=first.start),
    )


# ---------------------------------------------------------------------------
# Both passes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AssemblyResult:
    """Both passes of one assembler run.

    Attributes:
        first: The Pass I result (tables and intermediate file).
        program: The Pass II object program.
        diagnostics: Everything logged during the run.

    """

    first: PassOneResult
    program: ObjectProgram
    diagnostics: tuple[LogEntry, ...] = ()

    @property
    def intermediate_text(self) -> str:
        """Return the intermediate file contents."""
        return "".join(f"{line}\n" for line in self.first.intermediate)

    @property
    def object_text(self) -> str:
        """Return the object program file contents."""
        return self.program.text

    def save(self, directory: Path) -> tuple[Path, Path]:
        """Write ``intermediate.txt`` and ``object.txt`` into *directory*.

        Returns:
            The paths of the intermediate and object files.

        """
        directory.mkdir(parents=True, exist_ok=True)
        intermediate_path = directory / INTERMEDIATE_FILE
        object_path = directory / OBJECT_FILE
        intermediate_path.write_text(self.intermediate_text)
        object_path.write_text(self.object_text)
        return intermediate_path, object_path


def assemble(
    source: Iterable[str | SourceLine | tuple[str, str, str]],
    *,
    logger: Logger | None = None,
    max_text_bytes: int = MAX_TEXT_BYTES,
) -> AssemblyResult:
    """Run Pass I and Pass II over *source*.

    Args:
        source: Source lines, as text or (label, opcode, operand) triples.
        logger: Shared logger; diagnostics are also kept on the result.
        max_text_bytes: Byte budget of a single text record.

    Returns:
        The Pass I tables, the object program and the run's diagnostics.

    """
    log = logger if logger is not None else Logger()
    before = len(log)
    first = pass_one(source, logger=log)
    program = pass_two(first, logger=log, max_text_bytes=max_text_bytes)
    return AssemblyResult(first=first, program=program, diagnostics=tuple(log.entries[before:]))
