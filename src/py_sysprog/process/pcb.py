"""Process records for the CPU scheduling simulator.

A process here is the scheduler's view of a job: when it arrives, how
much CPU it needs (its *burst*), and how important it is.  Running a
policy fills in the timing columns:

- **completion** — the clock value at which the last unit of work ran.
- **turnaround** — completion − arrival (time spent in the system).
- **waiting** — turnaround − burst (time spent ready but not running).

``remaining`` is the only field mutated while a preemptive policy runs;
it starts equal to ``burst`` and counts down to zero.

Policies never touch the caller's records: each run works on copies
made with ``Process.fresh()``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field


@dataclass
class Process:
    """A simulated process and its scheduling statistics.

    Attributes:
        pid: Unique process identifier.
        arrival: Time at which the process enters the ready queue.
        burst: Total CPU time the process needs.
        priority: Scheduling priority (lower value = more important).
        completion: Time the process finished (0 until scheduled).
        turnaround: completion − arrival.
        waiting: turnaround − burst.
        remaining: CPU time still needed during a preemptive run.

    """

    pid: int
    arrival: int
    burst: int
    priority: int = 0
    completion: int = 0
    turnaround: int = 0
    waiting: int = 0
    remaining: int = field(default=-1, repr=False)

    def __post_init__(self) -> None:
        """Validate the static fields and default ``remaining`` to ``burst``."""
        if self.arrival < 0:
            msg = f"Process {self.pid}: arrival time must be >= 0 (got {self.arrival})"
            raise ValueError(msg)
        if self.burst <= 0:
            msg = f"Process {self.pid}: burst time must be > 0 (got {self.burst})"
            raise ValueError(msg)
        if self.remaining < 0:
            self.remaining = self.burst

    @property
    def finished(self) -> bool:
        """Return True once no CPU time remains."""
        return self.remaining == 0

    def fresh(self) -> Process:
        """Return an unscheduled copy (timing columns cleared)."""
        return dataclasses.replace(
            self,
            completion=0,
            turnaround=0,
            waiting=0,
            remaining=self.burst,
        )

    def complete(self, at: int) -> None:
        """Record completion at time *at* and derive the metrics."""
        self.remaining = 0
        self.completion = at
        self.turnaround = at - self.arrival
        self.waiting = self.turnaround - self.burst
