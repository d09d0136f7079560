"""Tests for source-line parsing shared by both translators."""

from py_sysprog.source import SourceLine, as_source_line, parse_line, split_operands


class TestParseLine:
    """The token count decides which columns are present."""

    def test_blank_line(self) -> None:
        """Whitespace only should give an empty, blank line."""
        line = parse_line("   \t ")
        assert line == SourceLine()
        assert line.is_blank

    def test_single_token_is_opcode(self) -> None:
        """One token is the opcode."""
        assert parse_line("MEND") == SourceLine(opcode="MEND")

    def test_two_tokens_are_opcode_and_operand(self) -> None:
        """Two tokens are opcode then operand."""
        assert parse_line("\tSUB\t&B") == SourceLine(opcode="SUB", operand="&B")

    def test_three_tokens_are_label_opcode_operand(self) -> None:
        """Three tokens fill every column."""
        assert parse_line("CALC MACRO &A,&B") == SourceLine("CALC", "MACRO", "&A,&B")

    def test_extra_tokens_are_ignored(self) -> None:
        """Anything after the third token is dropped."""
        assert parse_line("A B C D E") == SourceLine("A", "B", "C")


class TestAsSourceLine:
    """Text and tuples normalise to the same SourceLine."""

    def test_text(self) -> None:
        """Strings are parsed."""
        assert as_source_line("LOOP LDA TEN") == SourceLine("LOOP", "LDA", "TEN")

    def test_tuple_is_stripped(self) -> None:
        """Tuple columns are taken as-is apart from surrounding spaces."""
        assert as_source_line((" ", "ADD ", "ONE")) == SourceLine("", "ADD", "ONE")

    def test_source_line_passes_through(self) -> None:
        """An existing SourceLine is returned unchanged."""
        line = SourceLine("X", "RESW", "1")
        assert as_source_line(line) == line


class TestSplitOperands:
    """Comma-separated operand lists."""

    def test_splits_and_strips(self) -> None:
        """Items are split on commas and stripped."""
        assert split_operands("A, B ,C") == ["A", "B", "C"]

    def test_drops_empty_items(self) -> None:
        """Empty items vanish, so an empty field gives no operands."""
        assert split_operands("A,,B,") == ["A", "B"]
        assert split_operands("") == []
