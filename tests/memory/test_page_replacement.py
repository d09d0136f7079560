"""Tests for the page replacement simulator.

When every frame is full and a process touches a page that isn't
resident, one resident page must be evicted.  These tests replay the
classic textbook reference string against three frames:

    7 0 1 2 0 3 0 4 2 3 0 3 2

and check each policy's fault count, final frame contents and the
victim chosen at each eviction.
"""

import pytest

from py_sysprog.memory import (
    ALGORITHMS,
    FIFOPolicy,
    LRUPolicy,
    OptimalPolicy,
    compare,
    fifo,
    lru,
    optimal,
    simulate,
)

REFERENCE = (7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2)
CAPACITY = 3


# -- FIFO ---------------------------------------------------------------------


class TestFIFO:
    """Verify First In, First Out replacement."""

    def test_fault_count(self) -> None:
        """The textbook string should give 10 faults under FIFO."""
        expected_faults = 10
        assert fifo(REFERENCE, CAPACITY).faults == expected_faults

    def test_final_frames(self) -> None:
        """Replacement is in place, so frame slots keep their positions."""
        assert fifo(REFERENCE, CAPACITY).final_frames == (0, 2, 3)

    def test_frame_contents_per_step(self) -> None:
        """Every fault should show the frames after the new page is loaded."""
        result = fifo(REFERENCE, CAPACITY)
        frames = [step.frames for step in result.steps if step.fault]
        assert frames == [
            (7,),
            (7, 0),
            (7, 0, 1),
            (2, 0, 1),
            (2, 3, 1),
            (2, 3, 0),
            (4, 3, 0),
            (4, 2, 0),
            (4, 2, 3),
            (0, 2, 3),
        ]

    def test_hits_do_not_reorder(self) -> None:
        """A hit on the oldest page must not save it from eviction."""
        result = fifo([1, 2, 1, 3], 2)
        assert result.steps[-1].victim == 1
        assert result.final_frames == (3, 2)

    def test_belady_anomaly(self) -> None:
        """FIFO can fault more with four frames than with three."""
        reference = [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5]
        assert fifo(reference, 4).faults > fifo(reference, 3).faults


class TestFIFOPolicy:
    """Verify the FIFO bookkeeping directly."""

    def test_victim_is_oldest(self) -> None:
        """The first page added is the first victim."""
        policy = FIFOPolicy()
        policy.add_page(5, time=0)
        policy.add_page(9, time=1)
        assert policy.select_victim([5, 9], time=2) == 5

    def test_empty_raises(self) -> None:
        """Asking an empty policy for a victim is an error."""
        with pytest.raises(IndexError, match="No pages to evict"):
            FIFOPolicy().select_victim([], time=0)


# -- LRU ----------------------------------------------------------------------


class TestLRU:
    """Verify Least Recently Used replacement."""

    def test_fault_count(self) -> None:
        """The textbook string should give 9 faults under LRU."""
        expected_faults = 9
        assert lru(REFERENCE, CAPACITY).faults == expected_faults

    def test_final_frames(self) -> None:
        """The final frame set after the last reference."""
        assert lru(REFERENCE, CAPACITY).final_frames == (0, 3, 2)

    def test_victims(self) -> None:
        """Each eviction picks the least recently referenced page."""
        result = lru(REFERENCE, CAPACITY)
        assert [s.victim for s in result.steps if s.victim is not None] == [7, 1, 2, 3, 0, 4]

    def test_hit_refreshes_recency(self) -> None:
        """A hit makes the page most recently used."""
        result = lru([1, 2, 1, 3], 2)
        assert result.steps[-1].victim == 2
        assert result.final_frames == (1, 3)


class TestLRUPolicy:
    """Verify LRU timestamps directly."""

    def test_tie_goes_to_lower_slot(self) -> None:
        """Pages with equal timestamps: the earlier frame slot loses."""
        policy = LRUPolicy()
        policy.add_page(4, time=0)
        policy.add_page(8, time=0)
        assert policy.select_victim([8, 4], time=1) == 8

    def test_empty_raises(self) -> None:
        """Asking for a victim with no frames is an error."""
        with pytest.raises(IndexError):
            LRUPolicy().select_victim([], time=0)


# -- Optimal ------------------------------------------------------------------


class TestOptimal:
    """Verify Belady's optimal replacement."""

    def test_fault_count(self) -> None:
        """The textbook string should give 7 faults under Optimal."""
        expected_faults = 7
        assert optimal(REFERENCE, CAPACITY).faults == expected_faults

    def test_final_frames(self) -> None:
        """The final frame set after the last reference."""
        assert optimal(REFERENCE, CAPACITY).final_frames == (2, 0, 3)

    def test_victims(self) -> None:
        """Pages never used again go first, else the farthest next use."""
        result = optimal(REFERENCE, CAPACITY)
        assert [s.victim for s in result.steps if s.victim is not None] == [7, 1, 0, 4]

    def test_never_worse_than_fifo_or_lru(self) -> None:
        """Optimal is a lower bound on the fault count."""
        results = compare(REFERENCE, CAPACITY)
        assert results["optimal"].faults <= results["lru"].faults <= results["fifo"].faults

    def test_single_frame(self) -> None:
        """With one frame every distinct reference faults."""
        result = optimal([1, 2, 1, 2], 1)
        assert result.faults == 4
        assert result.final_frames == (2,)


class TestOptimalPolicy:
    """Verify the look-ahead directly."""

    def test_next_use(self) -> None:
        """next_use looks strictly after the current position."""
        policy = OptimalPolicy([3, 1, 3, 2])
        assert policy.next_use(3, time=0) == 2
        assert policy.next_use(1, time=1) is None

    def test_farthest_next_use_loses(self) -> None:
        """When every page is used again, the farthest next use is evicted."""
        policy = OptimalPolicy([1, 2, 3, 2, 1])
        assert policy.select_victim([1, 2], time=2) == 1

    def test_first_dead_page_in_frame_order(self) -> None:
        """Among pages never used again, the earliest frame slot loses."""
        policy = OptimalPolicy([1, 2, 3])
        assert policy.select_victim([2, 1], time=2) == 2


# -- Engine -------------------------------------------------------------------


class TestSimulate:
    """Verify the shared simulation engine."""

    def test_zero_capacity_rejected(self) -> None:
        """At least one frame is required."""
        with pytest.raises(ValueError, match="at least 1"):
            simulate([1, 2], 0, FIFOPolicy())

    def test_empty_reference(self) -> None:
        """An empty string gives no steps, no faults and empty frames."""
        result = fifo([], CAPACITY)
        assert result.faults == 0
        assert result.hit_ratio == 0.0
        assert result.final_frames == ()

    def test_faults_plus_hits_is_length(self) -> None:
        """Every reference is either a hit or a fault."""
        for key, algorithm in ALGORITHMS.items():
            result = algorithm(REFERENCE, CAPACITY)
            assert result.faults + result.hits == len(REFERENCE), key

    def test_never_more_than_capacity_frames(self) -> None:
        """The frame set never outgrows the capacity."""
        result = lru(REFERENCE, 2)
        assert all(len(step.frames) <= 2 for step in result.steps)

    def test_cold_start_faults_have_no_victim(self) -> None:
        """Filling empty frames evicts nothing."""
        result = fifo(REFERENCE, CAPACITY)
        assert [s.victim for s in result.steps[:CAPACITY]] == [None, None, None]

    def test_large_capacity_faults_once_per_distinct_page(self) -> None:
        """With room for everything only cold misses remain."""
        result = lru(REFERENCE, 10)
        assert result.faults == len(set(REFERENCE))

    def test_compare_runs_every_algorithm(self) -> None:
        """compare returns one result per algorithm, in table order."""
        results = compare(REFERENCE, CAPACITY)
        assert list(results) == ["fifo", "lru", "optimal"]
        assert [r.policy for r in results.values()] == ["FIFO", "LRU", "Optimal"]
