"""Object program records.

The object program is plain text, one record per line::

    H COPY   001000 00001B            header: name, start, length
    T 001000 12 00100F181012...       text: start, byte count, code
    E 001000                          end: first executable address

(shown with spaces for readability; the real records have none).
Every number is fixed-width upper-case hexadecimal.  A text record
holds at most ``MAX_TEXT_BYTES`` bytes of object code.
"""

from __future__ import annotations

from dataclasses import dataclass

MAX_TEXT_BYTES = 30
NAME_WIDTH = 6


@dataclass(frozen=True)
class HeaderRecord:
    """``H`` record: program name (6 chars, padded/truncated), start, length."""

    name: str
    start: int
    length: int

    def __str__(self) -> str:
        """Format as ``Hnnnnnnssssssllllll``."""
        return f"H{self.name[:NAME_WIDTH]:<{NAME_WIDTH}}{self.start:06X}{self.length:06X}"


@dataclass(frozen=True)
class TextRecord:
    """``T`` record: start address and a run of object code (hex text)."""

    start: int
    code: str

    @property
    def length(self) -> int:
        """Return the number of object-code bytes in the record."""
        return len(self.code) // 2

    def __str__(self) -> str:
        """Format as ``Tsssssslloooo...``."""
        return f"T{self.start:06X}{self.length:02X}{self.code}"


@dataclass(frozen=True)
class EndRecord:
    """``E`` record: the address where execution begins."""

    start: int

    def __str__(self) -> str:
        """Format as ``Essssss``."""
        return f"E{self.start:06X}"


class TextRecordBuilder:
    """Accumulate object code into size-bounded text records.

    ``add`` appends code to the open record, closing it first when the
    new code would push it past the byte budget; the next record then
    starts at the address of the code that didn't fit.  ``flush`` closes
    the open record, which is what ``RESW``/``RESB`` do since reserved
    space generates no bytes.
    """

    def __init__(self, *, max_bytes: int = MAX_TEXT_BYTES) -> None:
        """Create a builder with the given per-record byte budget.

        Raises:
            ValueError: If max_bytes is not positive.

        """
        if max_bytes <= 0:
            msg = f"Text record budget must be > 0 bytes (got {max_bytes})"
            raise ValueError(msg)
        self._max_bytes = max_bytes
        self._records: list[TextRecord] = []
        self._start: int = 0
        self._code: str = ""

    @property
    def records(self) -> tuple[TextRecord, ...]:
        """Return the records closed so far."""
        return tuple(self._records)

    @property
    def pending(self) -> str:
        """Return the object code of the open record."""
        return self._code

    def add(self, address: int, code: str) -> None:
        """Append *code* (hex text) assembled at *address*.

        Code larger than the whole budget is split across records.
        """
        while code:
            room = self._max_bytes - len(self._code) // 2
            if self._code and len(code) // 2 > room:
                self.flush()
                continue
            if not self._code:
                self._start = address
            chunk = code[: self._max_bytes * 2] if not self._code else code
            self._code += chunk
            code = code[len(chunk) :]
            address += len(chunk) // 2

    def flush(self) -> None:
        """Close the open record, if it holds any code."""
        if self._code:
            self._records.append(TextRecord(start=self._start, code=self._code))
        self._code = ""


@dataclass(frozen=True)
class ObjectProgram:
    """A complete object program: header, text records, end record."""

    header: HeaderRecord
    texts: tuple[TextRecord, ...]
    end: EndRecord

    def records(self) -> list[str]:
        """Return every record as text, in output order."""
        return [str(self.header), *(str(t) for t in self.texts), str(self.end)]

    @property
    def text(self) -> str:
        """Return the object program as file contents."""
        return "".join(f"{record}\n" for record in self.records())
