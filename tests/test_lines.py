"""
Tests for the line splitter and the top-level parse/stringify API.

We need to:
1. Accept LF, CRLF and CR terminators, even mixed
2. Never keep a phantom empty last line
3. Normalize output to LF with a single trailing newline
"""

import pytest
from proplines.lines import parse, split_lines, stringify
from proplines.model import Document, InvalidDocumentError


class TestSplitLines:
    """Test line splitting."""

    def test_empty_input(self):
        assert split_lines("") == []

    def test_single_line_without_terminator(self):
        assert split_lines("a=1") == ["a=1"]

    def test_trailing_terminator_dropped(self):
        assert split_lines("a=1\n") == ["a=1"]

    @pytest.mark.parametrize("terminator", ["\n", "\r\n", "\r"])
    def test_each_terminator(self, terminator):
        text = terminator.join(["a=1", "b=2", "c=3"]) + terminator
        assert split_lines(text) == ["a=1", "b=2", "c=3"]

    def test_mixed_terminators(self):
        assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_crlf_is_one_break(self):
        """CRLF must not produce an empty line between."""
        assert split_lines("a\r\n\r\nb") == ["a", "", "b"]

    def test_only_last_empty_line_dropped(self):
        assert split_lines("a\n\n") == ["a", ""]

    def test_single_terminator(self):
        """One terminator is one empty line."""
        assert split_lines("\n") == [""]


class TestParse:
    """Test parse()."""

    def test_returns_document(self):
        doc = parse("# c\na=1\n")
        assert isinstance(doc, Document)
        assert doc.lines == ["# c", "a=1"]

    def test_malformed_text_never_fails(self):
        doc = parse("=\\\n:::\n\\")
        assert doc.lines == ["=\\", ":::", "\\"]


class TestStringify:
    """Test stringify()."""

    def test_empty_document(self):
        assert stringify(Document()) == ""

    def test_adds_single_trailing_newline(self):
        assert stringify(Document(lines=["a=1", "b=2"])) == "a=1\nb=2\n"

    def test_strips_leading_empty_lines(self):
        assert stringify(Document(lines=["", "", "a=1"])) == "a=1\n"

    def test_keeps_inner_blank_lines(self):
        assert stringify(Document(lines=["a=1", "", "b=2"])) == "a=1\n\nb=2\n"

    def test_existing_trailing_empty_line_not_doubled(self):
        assert stringify(Document(lines=["a=1", ""])) == "a=1\n"

    def test_only_empty_lines(self):
        assert stringify(Document(lines=["", ""])) == ""

    def test_does_not_mutate_document(self):
        doc = Document(lines=["", "a=1"])
        stringify(doc)
        assert doc.lines == ["", "a=1"]

    def test_rejects_non_document(self):
        with pytest.raises(InvalidDocumentError):
            stringify(None)


class TestRoundTrip:
    """Parse then stringify only normalizes terminators."""

    def test_lf_text_unchanged(self):
        text = "# header\n\na = 1\nb:2\nc \\\n  d\n"
        assert stringify(parse(text)) == text

    def test_crlf_normalized(self):
        assert stringify(parse("a=1\r\nb=2\r\n")) == "a=1\nb=2\n"

    def test_missing_final_newline_added(self):
        assert stringify(parse("a=1")) == "a=1\n"
