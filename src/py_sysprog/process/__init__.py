"""Process subsystem — process records and CPU scheduling policies.

Re-exports public symbols so callers can write::

    from py_sysprog.process import Process, RoundRobinPolicy
"""

from py_sysprog.process.pcb import Process
from py_sysprog.process.scheduler import (
    DEFAULT_QUANTUM,
    POLICIES,
    FCFSPolicy,
    PriorityPolicy,
    RoundRobinPolicy,
    ScheduleResult,
    SchedulingPolicy,
    SJFPolicy,
    Slice,
    fcfs,
    priority,
    round_robin,
    run_all,
    sjf,
)

__all__ = [
    "DEFAULT_QUANTUM",
    "POLICIES",
    "FCFSPolicy",
    "PriorityPolicy",
    "Process",
    "RoundRobinPolicy",
    "SJFPolicy",
    "ScheduleResult",
    "SchedulingPolicy",
    "Slice",
    "fcfs",
    "priority",
    "round_robin",
    "run_all",
    "sjf",
]
