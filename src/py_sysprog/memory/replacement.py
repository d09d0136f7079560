"""Page replacement — replay a reference string against a frame set.

When every physical frame is occupied and a process touches a page
that isn't resident, the OS must pick a **victim page** to evict.  The
choice of victim is the page replacement problem:

    - **FIFO** — evict the page that has been resident the longest.
      Simple, but can suffer from Belady's anomaly (more frames → more
      faults for some reference strings).
    - **LRU** — evict the page whose last reference is oldest.  Each
      page carries a "last referenced" timestamp; eviction scans the
      resident frames for the smallest one.
    - **Optimal** — evict the page whose next use lies farthest in the
      future (or that is never used again).  Needs the whole reference
      string, so it is only a yardstick for the other two.

Replacement Policies (Strategy pattern, like the scheduler):
    Every policy implements ``ReplacementPolicy``.  The ``simulate``
    engine owns the frame set and asks the policy for a victim; the
    policy only keeps the bookkeeping it needs (a queue, timestamps,
    or the reference string).

Design choices:
    - **Replacement in place** — the victim's slot in the frame list
      receives the new page, so frames keep their positions between
      steps and the printed frame contents line up column by column.
    - **Fresh policy per run** — ``fifo``, ``lru`` and ``optimal`` build
      their own policy and frame set, so the functions are stateless
      from the caller's point of view.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

# ---------------------------------------------------------------------------
# Replacement Policy Protocol (Strategy pattern)
# ---------------------------------------------------------------------------


class ReplacementPolicy(Protocol):
    """Interface for page replacement algorithms.

    ``time`` is the 0-based index of the current reference in the
    reference string.  Policies that don't care about time ignore it.
    """

    name: str

    def add_page(self, page: int, *, time: int) -> None:
        """Record that a page was loaded into a frame."""
        ...  # pragma: no cover

    def remove_page(self, page: int) -> None:
        """Record that a page was evicted."""
        ...  # pragma: no cover

    def record_access(self, page: int, *, time: int) -> None:
        """Record that a page was referenced (hit or freshly loaded)."""
        ...  # pragma: no cover

    def select_victim(self, frames: Sequence[int], *, time: int) -> int:
        """Choose which resident page to evict.

        Returns:
            The page number of the victim.

        Raises:
            IndexError: If no pages are resident.

        """
        ...  # pragma: no cover


# ---------------------------------------------------------------------------
# FIFO Policy
# ---------------------------------------------------------------------------


class FIFOPolicy:
    """First In, First Out — evict the earliest-loaded page.

    Uses a simple list as a queue.  The first element is always the
    oldest (earliest added).
    """

    name = "FIFO"

    def __init__(self) -> None:
        """Create an empty FIFO policy."""
        self._queue: list[int] = []

    def add_page(self, page: int, *, time: int) -> None:  # noqa: ARG002
        """Record that a page was loaded (appended to the queue)."""
        self._queue.append(page)

    def remove_page(self, page: int) -> None:
        """Remove a page from the queue."""
        self._queue.remove(page)

    def record_access(self, page: int, *, time: int) -> None:
        """FIFO ignores accesses — order is purely by load time."""

    def select_victim(self, frames: Sequence[int], *, time: int) -> int:  # noqa: ARG002
        """Return the oldest page (front of the queue).

        Raises:
            IndexError: If no pages are tracked.

        """
        if not self._queue:
            msg = "No pages to evict"
            raise IndexError(msg)
        return self._queue[0]


# ---------------------------------------------------------------------------
# LRU Policy
# ---------------------------------------------------------------------------


class LRUPolicy:
    """Least Recently Used — evict the page referenced longest ago.

    Keeps a last-referenced timestamp per page.  Victim selection scans
    every resident frame for the smallest timestamp; on a tie the page
    in the lower frame slot wins.
    """

    name = "LRU"

    def __init__(self) -> None:
        """Create an empty LRU policy."""
        self._last_used: dict[int, int] = {}

    def add_page(self, page: int, *, time: int) -> None:
        """Record that a page was loaded (most recently used)."""
        self._last_used[page] = time

    def remove_page(self, page: int) -> None:
        """Forget an evicted page."""
        self._last_used.pop(page, None)

    def record_access(self, page: int, *, time: int) -> None:
        """Stamp the page with the current reference time."""
        self._last_used[page] = time

    def select_victim(self, frames: Sequence[int], *, time: int) -> int:  # noqa: ARG002
        """Return the resident page with the oldest timestamp.

        Raises:
            IndexError: If no pages are resident.

        """
        if not frames:
            msg = "No pages to evict"
            raise IndexError(msg)
        victim = frames[0]
        for page in frames[1:]:
            if self._last_used.get(page, -1) < self._last_used.get(victim, -1):
                victim = page
        return victim


# ---------------------------------------------------------------------------
# Optimal Policy
# ---------------------------------------------------------------------------


class OptimalPolicy:
    """Belady's optimal algorithm — evict the page needed farthest ahead.

    The policy is given the full reference string up front.  For each
    resident page it scans forward from the current position: a page
    that never appears again is evicted immediately, otherwise the page
    whose next occurrence is farthest away loses its frame.
    """

    name = "Optimal"

    def __init__(self, reference: Sequence[int]) -> None:
        """Create an optimal policy for a known reference string.

        Args:
            reference: The complete reference string being replayed.

        """
        self._reference = tuple(reference)

    def add_page(self, page: int, *, time: int) -> None:
        """Optimal keeps no per-page state."""

    def remove_page(self, page: int) -> None:
        """Optimal keeps no per-page state."""

    def record_access(self, page: int, *, time: int) -> None:
        """Optimal keeps no per-page state."""

    def next_use(self, page: int, *, time: int) -> int | None:
        """Return the index of the next reference to *page* after *time*."""
        for index in range(time + 1, len(self._reference)):
            if self._reference[index] == page:
                return index
        return None

    def select_victim(self, frames: Sequence[int], *, time: int) -> int:
        """Return the resident page whose next use is farthest away.

        Raises:
            IndexError: If no pages are resident.

        """
        if not frames:
            msg = "No pages to evict"
            raise IndexError(msg)
        victim = frames[0]
        farthest = -1
        for page in frames:
            upcoming = self.next_use(page, time=time)
            if upcoming is None:
                return page
            if upcoming > farthest:
                farthest = upcoming
                victim = page
        return victim


# ---------------------------------------------------------------------------
# Simulation engine
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PagingStep:
    """One reference replayed against the frame set.

    Attributes:
        page: The referenced page number.
        fault: True when the page was not resident.
        frames: Frame contents after the reference was served.
        victim: The evicted page, or None when nothing was evicted.

    """

    page: int
    fault: bool
    frames: tuple[int, ...]
    victim: int | None = None


@dataclass(frozen=True)
class PagingResult:
    """The outcome of replaying a reference string under one policy."""

    policy: str
    capacity: int
    reference: tuple[int, ...]
    steps: tuple[PagingStep, ...]

    @property
    def faults(self) -> int:
        """Return the total number of page faults."""
        return sum(1 for step in self.steps if step.fault)

    @property
    def hits(self) -> int:
        """Return the number of references served without a fault."""
        return len(self.steps) - self.faults

    @property
    def hit_ratio(self) -> float:
        """Return hits as a fraction of all references (0.0 when empty)."""
        if not self.steps:
            return 0.0
        return self.hits / len(self.steps)

    @property
    def final_frames(self) -> tuple[int, ...]:
        """Return the resident pages after the last reference."""
        if not self.steps:
            return ()
        return self.steps[-1].frames


def simulate(
    reference: Iterable[int],
    capacity: int,
    policy: ReplacementPolicy,
) -> PagingResult:
    """Replay *reference* against *capacity* frames using *policy*.

    Args:
        reference: The page reference string.
        capacity: Number of physical frames.
        policy: The replacement algorithm deciding each eviction.

    Returns:
        A PagingResult with one step per reference.

    Raises:
        ValueError: If capacity is less than one frame.

    """
    if capacity < 1:
        msg = f"Frame capacity must be at least 1 (got {capacity})"
        raise ValueError(msg)

    pages = tuple(reference)
    frames: list[int] = []
    steps: list[PagingStep] = []

    for time, page in enumerate(pages):
        if page in frames:
            policy.record_access(page, time=time)
            steps.append(PagingStep(page=page, fault=False, frames=tuple(frames)))
            continue

        victim: int | None = None
        if len(frames) < capacity:
            frames.append(page)
        else:
            victim = policy.select_victim(frames, time=time)
            policy.remove_page(victim)
            frames[frames.index(victim)] = page
        policy.add_page(page, time=time)
        policy.record_access(page, time=time)
        steps.append(PagingStep(page=page, fault=True, frames=tuple(frames), victim=victim))

    return PagingResult(
        policy=policy.name,
        capacity=capacity,
        reference=pages,
        steps=tuple(steps),
    )


def fifo(reference: Sequence[int], capacity: int) -> PagingResult:
    """Replay *reference* under FIFO replacement."""
    return simulate(reference, capacity, FIFOPolicy())


def lru(reference: Sequence[int], capacity: int) -> PagingResult:
    """Replay *reference* under LRU replacement."""
    return simulate(reference, capacity, LRUPolicy())


def optimal(reference: Sequence[int], capacity: int) -> PagingResult:
    """Replay *reference* under optimal (Belady) replacement."""
    return simulate(reference, capacity, OptimalPolicy(reference))


# Dispatch table used by compare() and the shell's ``paging`` command.
ALGORITHMS: dict[str, Callable[[Sequence[int], int], PagingResult]] = {
    "fifo": fifo,
    "lru": lru,
    "optimal": optimal,
}


def compare(reference: Sequence[int], capacity: int) -> dict[str, PagingResult]:
    """Run every replacement algorithm on the same input.

    Returns:
        A mapping of algorithm key (``fifo``, ``lru``, ``optimal``) to
        its result, in that order.

    """
    pages = tuple(reference)
    return {key: algorithm(pages, capacity) for key, algorithm in ALGORITHMS.items()}
