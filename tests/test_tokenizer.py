"""
Tests for the tokenizer state machine.

We need to:
1. Skip comments and blank lines
2. Split key / separator / value with the exact separator spelling
3. Follow line continuations for keys and values
4. Decode escapes, including escaped separators inside keys
5. Drop unterminated trailing fragments without raising
"""

import types

from proplines.model import Entry
from proplines.tokenizer import (
    EOL,
    ScanContext,
    ScanState,
    iter_chars,
    iter_entries,
)


def entries(lines, **kwargs):
    return list(iter_entries(lines, **kwargs))


class TestIterChars:
    """Test the character stream."""

    def test_eol_after_every_line(self):
        assert list(iter_chars(["ab", ""])) == [("a", 0), ("b", 0), (EOL, 0), (EOL, 1)]

    def test_empty_lines_list(self):
        assert list(iter_chars([])) == []

    def test_eol_never_a_character(self):
        assert [c for c, _ in iter_chars(["EOL"])] == ["E", "O", "L", EOL]
        assert "E" != EOL


class TestScanContext:
    """Test the per-entry state value."""

    def test_fresh_context(self):
        ctx = ScanContext()
        assert ctx.state is ScanState.START
        assert ctx.start == -1
        assert (ctx.key, ctx.separator, ctx.value) == ("", "", "")
        assert ctx.skip_space is True
        assert ctx.escaped_next is False
        assert ctx.unicode_digits is None


class TestSeparators:
    """Separator styles are kept verbatim."""

    def test_end_to_end_example(self):
        assert entries(["a=1", "b = 2", "c: 3"]) == [
            Entry(key="a", value="1", start_line=0, line_span=1, separator="="),
            Entry(key="b", value="2", start_line=1, line_span=1, separator=" = "),
            Entry(key="c", value="3", start_line=2, line_span=1, separator=": "),
        ]

    def test_space_separator(self):
        [entry] = entries(["key value"])
        assert (entry.key, entry.separator, entry.value) == ("key", " ", "value")

    def test_spaces_around_colon(self):
        [entry] = entries(["key :value"])
        assert (entry.separator, entry.value) == (" :", "value")

    def test_second_equals_starts_value(self):
        [entry] = entries(["a==b"])
        assert (entry.separator, entry.value) == ("=", "=b")

    def test_second_separator_after_spaces_starts_value(self):
        [entry] = entries(["a = =b"])
        assert (entry.separator, entry.value) == (" = ", "=b")

    def test_colon_after_equals_starts_value(self):
        [entry] = entries(["a=:b"])
        assert (entry.separator, entry.value) == ("=", ":b")

    def test_value_keeps_inner_and_trailing_spaces(self):
        [entry] = entries(["k = a b  "])
        assert entry.value == "a b  "

    def test_empty_key(self):
        [entry] = entries(["=v"])
        assert (entry.key, entry.separator, entry.value) == ("", "=", "v")


class TestValuelessKeys:
    """Keys without a value."""

    def test_bare_key(self):
        assert entries(["lonely"]) == [Entry(key="lonely", value="", start_line=0, line_span=1, separator="")]

    def test_key_with_trailing_spaces(self):
        [entry] = entries(["trailing   "])
        assert (entry.key, entry.separator, entry.value) == ("trailing", "   ", "")

    def test_key_with_separator_only(self):
        [entry] = entries(["k ="])
        assert (entry.key, entry.separator, entry.value) == ("k", " =", "")


class TestCommentsAndBlanks:
    """Comments and blank lines produce nothing."""

    def test_comment_markers(self):
        result = entries(["# hash", "! bang", "   # indented", "a=1"])
        assert result == [Entry(key="a", value="1", start_line=3, line_span=1, separator="=")]

    def test_blank_and_space_only_lines(self):
        result = entries(["", "    ", "a=1", ""])
        assert [(e.key, e.start_line) for e in result] == [("a", 2)]

    def test_indented_key_after_blank_line(self):
        [entry] = entries(["", "  key=v"])
        assert (entry.key, entry.value, entry.start_line) == ("key", "v", 1)

    def test_escaped_comment_char_starts_key(self):
        [entry] = entries(["\\#notcomment=1"])
        assert entry.key == "#notcomment"

    def test_comment_char_inside_value(self):
        [entry] = entries(["k=a # b"])
        assert entry.value == "a # b"

    def test_comment_only_document(self):
        assert entries(["# a", "! b"]) == []


class TestContinuations:
    """Line continuations."""

    def test_value_continuation(self):
        assert entries(["key=val\\", "ue"]) == [
            Entry(key="key", value="value", start_line=0, line_span=2, separator="="),
        ]

    def test_leading_spaces_skipped_after_continuation(self):
        [entry] = entries(["a = one \\", "    two"])
        assert entry.value == "one two"

    def test_three_line_value(self):
        [entry] = entries(["x", "a=1\\", "  2\\", "  3", "b=4"])[1:2]
        assert (entry.value, entry.start_line, entry.line_span) == ("123", 1, 3)

    def test_key_continuation(self):
        [entry] = entries(["ke\\", "  y=v"])
        assert (entry.key, entry.value, entry.line_span) == ("key", "v", 2)

    def test_continued_line_is_not_a_comment(self):
        [entry] = entries(["a=1\\", "# not a comment"])
        assert entry.value == "1# not a comment"

    def test_escaped_backslash_is_not_continuation(self):
        result = entries(["a=1\\\\", "b=2"])
        assert [(e.key, e.value) for e in result] == [("a", "1\\"), ("b", "2")]

    def test_continuation_into_blank_line_ends_value(self):
        [entry] = entries(["a=1\\", ""])
        assert (entry.value, entry.line_span) == ("1", 2)

    def test_unterminated_trailing_continuation_dropped(self):
        result = entries(["a=1", "b=2\\"])
        assert [e.key for e in result] == ["a"]


class TestEscapes:
    """Escapes inside keys and values."""

    def test_escaped_equals_in_key(self):
        [entry] = entries(["a\\=b=c"])
        assert (entry.key, entry.value) == ("a=b", "c")

    def test_escaped_colon_in_key(self):
        [entry] = entries(["a\\:b:c"])
        assert (entry.key, entry.value) == ("a:b", "c")

    def test_escaped_space_in_key(self):
        [entry] = entries(["a\\ b c"])
        assert (entry.key, entry.separator, entry.value) == ("a b", " ", "c")

    def test_escaped_backslash_in_key(self):
        [entry] = entries(["a\\\\b=c"])
        assert entry.key == "a\\b"

    def test_control_escapes_in_value(self):
        [entry] = entries(["k=a\\tb\\nc"])
        assert entry.value == "a\tb\nc"

    def test_escape_right_after_separator(self):
        [entry] = entries(["k=\\ lead"])
        assert entry.value == " lead"

    def test_unknown_escape_degrades(self):
        [entry] = entries(["k=\\q"])
        assert entry.value == "q"


class TestUnicode:
    """\\uXXXX handling."""

    def test_not_decoded_by_default(self):
        [entry] = entries(["k=caf\\u00e9"])
        assert entry.value == "cafu00e9"

    def test_decoded_in_value(self):
        [entry] = entries(["k=caf\\u00e9"], decode_unicode=True)
        assert entry.value == "café"

    def test_decoded_in_key(self):
        [entry] = entries(["caf\\u00e9=1"], decode_unicode=True)
        assert (entry.key, entry.value) == ("café", "1")

    def test_partial_escape_before_separator(self):
        [entry] = entries(["\\u12=x"], decode_unicode=True)
        assert (entry.key, entry.value) == ("u12", "x")

    def test_partial_escape_at_end_of_line(self):
        [entry] = entries(["k=\\u00"], decode_unicode=True)
        assert entry.value == "u00"

    def test_surrogate_pair(self):
        [entry] = entries(["k=\\ud83d\\ude00"], decode_unicode=True)
        assert entry.value == "\U0001F600"

    def test_raw_non_ascii_kept(self):
        [entry] = entries(["stadt=Zürich"])
        assert entry.value == "Zürich"


class TestLaziness:
    """The scan is a lazy, single-use generator."""

    def test_is_generator(self):
        assert isinstance(iter_entries(["a=1"]), types.GeneratorType)

    def test_not_restartable(self):
        scan = iter_entries(["a=1", "b=2"])
        assert len(list(scan)) == 2
        assert list(scan) == []

    def test_reads_current_lines(self):
        lines = ["a=1"]
        first = entries(lines)
        lines.append("b=2")
        assert len(first) == 1
        assert len(entries(lines)) == 2

    def test_empty_input(self):
        assert entries([]) == []

    def test_duplicates_all_yielded(self):
        result = entries(["k=1", "k=2"])
        assert [(e.key, e.value, e.start_line) for e in result] == [("k", "1", 0), ("k", "2", 1)]
