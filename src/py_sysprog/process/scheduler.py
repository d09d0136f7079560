"""CPU scheduler — replay a fixed process set under a scheduling policy.

Each policy takes the same list of processes, simulates the CPU clock,
and fills in completion, turnaround and waiting time for every process.
Four policies ship out of the box:

- **FCFSPolicy** (First Come, First Served): processes run to completion
  in arrival order.  Simple, but a long job delays everyone behind it
  (convoy effect).
- **SJFPolicy** (Shortest Job First, preemptive — a.k.a. SRTF): every
  time unit, the arrived process with the least remaining work runs.
  Minimises average waiting time but can starve long jobs.
- **PriorityPolicy** (non-preemptive): whenever the CPU frees up, the
  arrived process with the smallest priority value is dispatched and
  runs to completion.
- **RoundRobinPolicy**: a FIFO ready queue where each dispatch runs for
  at most one time quantum before the process goes to the back.

Design: Strategy pattern
    Every policy implements ``SchedulingPolicy.run``.  The caller's
    process list is never mutated: each run starts from fresh copies,
    so the same input can be fed to every policy in turn.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from py_sysprog.process.pcb import Process

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


class SchedulingPolicy(Protocol):
    """Interface that every scheduling algorithm must satisfy."""

    @property
    def name(self) -> str:
        """Return a human-readable policy label."""
        ...  # pragma: no cover

    def run(self, processes: Sequence[Process]) -> ScheduleResult:
        """Simulate *processes* and return their completed statistics."""
        ...  # pragma: no cover


@dataclass(frozen=True)
class Slice:
    """A contiguous stretch of CPU time given to one process (Gantt bar)."""

    pid: int
    start: int
    end: int

    @property
    def length(self) -> int:
        """Return the number of time units in this slice."""
        return self.end - self.start


@dataclass(frozen=True)
class ScheduleResult:
    """The outcome of one policy run.

    Attributes:
        policy: Label of the policy that produced this result.
        processes: Completed process copies, in the policy's table order.
        timeline: CPU slices in execution order.

    """

    policy: str
    processes: tuple[Process, ...]
    timeline: tuple[Slice, ...]

    @property
    def average_turnaround(self) -> float:
        """Return the arithmetic mean of the turnaround times."""
        if not self.processes:
            return 0.0
        return sum(p.turnaround for p in self.processes) / len(self.processes)

    @property
    def average_waiting(self) -> float:
        """Return the arithmetic mean of the waiting times."""
        if not self.processes:
            return 0.0
        return sum(p.waiting for p in self.processes) / len(self.processes)

    @property
    def makespan(self) -> int:
        """Return the time at which the last process completed."""
        return max((p.completion for p in self.processes), default=0)

    def completion_times(self) -> dict[int, int]:
        """Return a PID → completion time mapping."""
        return {p.pid: p.completion for p in self.processes}

    def order(self) -> list[int]:
        """Return the PID of every slice in execution order."""
        return [s.pid for s in self.timeline]


def _prepare(processes: Sequence[Process]) -> list[Process]:
    """Validate the input and return fresh, unscheduled copies."""
    pids = [p.pid for p in processes]
    if len(pids) != len(set(pids)):
        msg = f"Duplicate process ids in {pids}"
        raise ValueError(msg)
    return [p.fresh() for p in processes]


class FCFSPolicy:
    """First Come, First Served — run each process to completion by arrival.

    A stable sort keeps input order for processes that arrive together.
    """

    @property
    def name(self) -> str:
        """Return the policy label."""
        return "FCFS"

    def run(self, processes: Sequence[Process]) -> ScheduleResult:
        """Dispatch in arrival order; the CPU idles until the next arrival."""
        procs = sorted(_prepare(processes), key=lambda p: p.arrival)
        timeline: list[Slice] = []
        clock = 0
        for proc in procs:
            clock = max(clock, proc.arrival)
            timeline.append(Slice(pid=proc.pid, start=clock, end=clock + proc.burst))
            clock += proc.burst
            proc.complete(clock)
        return ScheduleResult(policy=self.name, processes=tuple(procs), timeline=tuple(timeline))


class SJFPolicy:
    """Shortest remaining time first — preemptive SJF.

    The simulation advances one time unit at a time.  At each unit the
    arrived, unfinished process with the smallest remaining time runs;
    ties go to the process listed first.  Consecutive units of the same
    process are merged into one timeline slice.
    """

    @property
    def name(self) -> str:
        """Return the policy label."""
        return "SJF (Preemptive)"

    def run(self, processes: Sequence[Process]) -> ScheduleResult:
        """Simulate unit by unit until every process has finished."""
        procs = _prepare(processes)
        timeline: list[Slice] = []
        clock = 0
        done = 0
        while done < len(procs):
            chosen: Process | None = None
            for proc in procs:
                if proc.arrival > clock or proc.finished:
                    continue
                if chosen is None or proc.remaining < chosen.remaining:
                    chosen = proc
            if chosen is None:
                clock += 1
                continue

            chosen.remaining -= 1
            if timeline and timeline[-1].pid == chosen.pid and timeline[-1].end == clock:
                timeline[-1] = Slice(pid=chosen.pid, start=timeline[-1].start, end=clock + 1)
            else:
                timeline.append(Slice(pid=chosen.pid, start=clock, end=clock + 1))
            clock += 1
            if chosen.finished:
                chosen.complete(clock)
                done += 1
        return ScheduleResult(policy=self.name, processes=tuple(procs), timeline=tuple(timeline))


class PriorityPolicy:
    """Non-preemptive priority scheduling — lower value wins.

    Processes are first ordered by arrival.  Whenever the CPU is free,
    the arrived and not-yet-dispatched process with the smallest
    priority value is dispatched and runs to completion.  Equal
    priorities fall back to arrival order.  If nothing has arrived the
    clock idles forward one unit.
    """

    @property
    def name(self) -> str:
        """Return the policy label."""
        return "Priority (Non-Preemptive)"

    def run(self, processes: Sequence[Process]) -> ScheduleResult:
        """Dispatch by priority among the processes that have arrived."""
        procs = sorted(_prepare(processes), key=lambda p: p.arrival)
        timeline: list[Slice] = []
        dispatched: set[int] = set()
        clock = 0
        while len(dispatched) < len(procs):
            chosen: Process | None = None
            for proc in procs:
                if proc.pid in dispatched or proc.arrival > clock:
                    continue
                if chosen is None or proc.priority < chosen.priority:
                    chosen = proc
            if chosen is None:
                clock += 1
                continue

            timeline.append(Slice(pid=chosen.pid, start=clock, end=clock + chosen.burst))
            clock += chosen.burst
            chosen.complete(clock)
            dispatched.add(chosen.pid)
        return ScheduleResult(policy=self.name, processes=tuple(procs), timeline=tuple(timeline))


class RoundRobinPolicy:
    """Round Robin — each dispatch runs for at most one time quantum.

    Newly arrived processes join the ready queue before every dispatch
    and again right after the slice runs, so a process that arrived
    mid-slice lines up *ahead of* the process that was just preempted.
    A process that finishes inside its slice leaves the queue for good.
    """

    def __init__(self, *, quantum: int) -> None:
        """Create a Round Robin policy with the given time quantum.

        Args:
            quantum: Maximum time units per dispatch.

        Raises:
            ValueError: If the quantum is not positive.

        """
        if quantum <= 0:
            msg = f"Time quantum must be > 0 (got {quantum})"
            raise ValueError(msg)
        self._quantum = quantum

    @property
    def quantum(self) -> int:
        """Return the time quantum (units per slice)."""
        return self._quantum

    @property
    def name(self) -> str:
        """Return the policy label."""
        return f"Round Robin (quantum={self._quantum})"

    @staticmethod
    def _admit(
        procs: list[Process],
        admitted: set[int],
        ready: deque[Process],
        clock: int,
    ) -> None:
        """Append every process that has arrived by *clock* to the queue."""
        for proc in procs:
            if proc.pid not in admitted and proc.arrival <= clock:
                ready.append(proc)
                admitted.add(proc.pid)

    def run(self, processes: Sequence[Process]) -> ScheduleResult:
        """Cycle through the ready queue one quantum at a time."""
        procs = _prepare(processes)
        timeline: list[Slice] = []
        ready: deque[Process] = deque()
        admitted: set[int] = set()
        clock = 0
        done = 0
        while done < len(procs):
            self._admit(procs, admitted, ready, clock)
            if not ready:
                clock += 1
                continue

            proc = ready.popleft()
            run_for = min(self._quantum, proc.remaining)
            timeline.append(Slice(pid=proc.pid, start=clock, end=clock + run_for))
            proc.remaining -= run_for
            clock += run_for

            self._admit(procs, admitted, ready, clock)
            if proc.finished:
                proc.complete(clock)
                done += 1
            else:
                ready.append(proc)
        return ScheduleResult(policy=self.name, processes=tuple(procs), timeline=tuple(timeline))


DEFAULT_QUANTUM = 2


def fcfs(processes: Sequence[Process]) -> ScheduleResult:
    """Schedule *processes* First Come, First Served."""
    return FCFSPolicy().run(processes)


def sjf(processes: Sequence[Process]) -> ScheduleResult:
    """Schedule *processes* with preemptive Shortest Job First."""
    return SJFPolicy().run(processes)


def priority(processes: Sequence[Process]) -> ScheduleResult:
    """Schedule *processes* with non-preemptive priority."""
    return PriorityPolicy().run(processes)


def round_robin(processes: Sequence[Process], quantum: int = DEFAULT_QUANTUM) -> ScheduleResult:
    """Schedule *processes* Round Robin with the given quantum."""
    return RoundRobinPolicy(quantum=quantum).run(processes)


# Policy factories keyed by their shell name; each takes the RR quantum.
POLICIES: dict[str, Callable[[int], SchedulingPolicy]] = {
    "fcfs": lambda _quantum: FCFSPolicy(),
    "sjf": lambda _quantum: SJFPolicy(),
    "priority": lambda _quantum: PriorityPolicy(),
    "rr": lambda quantum: RoundRobinPolicy(quantum=quantum),
}


def run_all(
    processes: Sequence[Process],
    *,
    quantum: int = DEFAULT_QUANTUM,
) -> dict[str, ScheduleResult]:
    """Run every policy on the same process set.

    Returns:
        A mapping of policy key (``fcfs``, ``sjf``, ``priority``, ``rr``)
        to its result, in that order.

    """
    return {key: factory(quantum).run(processes) for key, factory in POLICIES.items()}
