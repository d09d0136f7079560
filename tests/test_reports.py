"""Tests for the batch text reports."""

import pytest

from py_sysprog import reports
from py_sysprog.memory import fifo
from py_sysprog.process import round_robin
from py_sysprog.samples import REFERENCE_STRING, processes


class TestPagingReport:
    """Verify the page replacement report."""

    def test_fault_and_hit_lines(self) -> None:
        """Faults show the frames; hits say so."""
        text = reports.format_paging(fifo(REFERENCE_STRING, 3))
        lines = text.splitlines()
        assert lines[0] == "=== FIFO Page Replacement (3 frames) ==="
        assert lines[1] == "Page 7 -> 7"
        assert lines[4] == "Page 2 -> 2 0 1  (evicted 7)"
        assert lines[5] == "Page 0 -> No page fault"
        assert "Total Page Faults = 10" in lines

    def test_all_algorithms(self) -> None:
        """The default report covers FIFO, LRU and Optimal."""
        text = reports.paging_report()
        assert "Total Page Faults = 10" in text
        assert "Total Page Faults = 9" in text
        assert "Total Page Faults = 7" in text

    def test_selected_algorithm(self) -> None:
        """Only the requested algorithms are reported."""
        text = reports.paging_report(algorithms=("lru",))
        assert "LRU" in text
        assert "FIFO" not in text


class TestSchedulingReport:
    """Verify the CPU scheduling report."""

    def test_table_and_averages(self) -> None:
        """The table lists every process; averages have two decimals."""
        text = reports.format_schedule(round_robin(processes(), 2))
        assert text.splitlines()[0] == "=== Round Robin (quantum=2) Scheduling ==="
        assert "Average TAT: 15.25" in text
        assert "Average WT : 9.75" in text

    def test_gantt(self) -> None:
        """The Gantt chart lists slices in execution order."""
        text = reports.scheduling_report(policies=("fcfs",))
        assert "Gantt: | P1 0-5 | P2 5-8 | P3 8-16 | P4 16-22 |" in text

    def test_invalid_quantum(self) -> None:
        """A bad quantum surfaces as ValueError."""
        with pytest.raises(ValueError, match="quantum"):
            reports.scheduling_report(quantum=0, policies=("rr",))


class TestTranslatorReports:
    """Verify the macroprocessor and assembler reports."""

    def test_macro_report_sections(self) -> None:
        """Both tables and both files appear."""
        text = reports.macro_report()
        assert "MACRO NAME TABLE (MNT)" in text
        assert "--- output.txt (Pass II) ---" in text
        assert "Diagnostics: none" in text

    def test_assembler_report_sections(self) -> None:
        """LC trace, tables and object program appear."""
        text = reports.assembler_report()
        assert "START: LC set to 1000" in text
        assert "Pass I complete. Program length: 001B" in text
        assert "[1000] LOOP LDA TEN" in text
        assert "HCOPY  00100000001B" in text

    def test_diagnostics_listed(self) -> None:
        """Problems in the source are listed at the end of the report."""
        text = reports.assembler_report(["P START 0", "LDA MISSING", "END"])
        assert "[WARNING] assembler (line 2):" in text


class TestFullReport:
    """Verify the combined report and entry point."""

    def test_deterministic(self) -> None:
        """Two runs give byte-identical output."""
        assert reports.full_report() == reports.full_report()

    def test_main_prints_report(self, capsys: pytest.CaptureFixture[str]) -> None:
        """main prints the full report to stdout."""
        reports.main()
        assert capsys.readouterr().out == reports.full_report()
