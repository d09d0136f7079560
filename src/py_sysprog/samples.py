"""Built-in sample inputs for the four simulators.

These are the fixed inputs the batch reports run on.  Every accessor
returns a fresh object so callers can't disturb each other's copies.
"""

from py_sysprog.process.pcb import Process

REFERENCE_STRING: tuple[int, ...] = (7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2)
FRAME_CAPACITY = 3

TIME_QUANTUM = 2

# (pid, arrival, burst, priority)
_PROCESS_TABLE: tuple[tuple[int, int, int, int], ...] = (
    (1, 0, 5, 2),
    (2, 1, 3, 1),
    (3, 2, 8, 3),
    (4, 3, 6, 2),
)

MACRO_SOURCE: tuple[str, ...] = (
    "MAIN\tSTART\t1000",
    "LOOP\tLOAD\tX",
    "CALC\tMACRO\t&A,&B",
    "&A\tADD\t&B",
    "\tSUB\t&B",
    "MEND",
    "\tSTORE\tY",
    "INIT\tMACRO\t&X,&Y,&Z",
    "&X\tLOAD\t&Y",
    "\tSTORE\t&Z",
    "MEND",
    "\tINIT\tTEMP,ONE,TWO",
    "\tCALC\tX,Y",
    "\tCALC\tY,Z",
    "X\tRESW\t1",
    "Y\tRESW\t1",
    "Z\tRESW\t1",
    "TEMP\tRESW\t1",
    "ONE\tWORD\t1",
    "TWO\tWORD\t2",
    "\tEND\t",
)

# (label, opcode, operand)
ASSEMBLY_SOURCE: tuple[tuple[str, str, str], ...] = (
    ("COPY", "START", "1000"),
    ("LOOP", "LDA", "TEN"),
    ("", "ADD", "ONE"),
    ("", "JLT", "LOOP"),
    ("", "STA", "RESULT"),
    ("", "LDA", "=C'EOF'"),
    ("TEN", "WORD", "10"),
    ("ONE", "RESW", "1"),
    ("RESULT", "RESB", "3"),
    ("", "END", ""),
)


def processes() -> list[Process]:
    """Return a fresh copy of the sample process set."""
    return [
        Process(pid=pid, arrival=arrival, burst=burst, priority=prio)
        for pid, arrival, burst, prio in _PROCESS_TABLE
    ]
