"""Memory subsystem — page replacement over a bounded frame set.

Re-exports public symbols so callers can write::

    from py_sysprog.memory import fifo, lru, optimal
"""

from py_sysprog.memory.replacement import (
    ALGORITHMS,
    FIFOPolicy,
    LRUPolicy,
    OptimalPolicy,
    PagingResult,
    PagingStep,
    ReplacementPolicy,
    compare,
    fifo,
    lru,
    optimal,
    simulate,
)

__all__ = [
    "ALGORITHMS",
    "FIFOPolicy",
    "LRUPolicy",
    "OptimalPolicy",
    "PagingResult",
    "PagingStep",
    "ReplacementPolicy",
    "compare",
    "fifo",
    "lru",
    "optimal",
    "simulate",
]
