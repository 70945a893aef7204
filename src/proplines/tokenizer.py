"""
Tokenizer for .properties lines (character-level state machine).

Consumes a Document's lines character by character, followed after each
line by a synthetic EOL marker, and lazily yields Entry records.

States:
    START      first non-space character of a logical line
    COMMENT    '#' or '!' up to the end of the line
    KEY        key characters, escapes and key continuations
    SEPARATOR  spaces plus at most one '=' or ':'
    VALUE      value characters, escapes and value continuations

Treating EOL as an ordinary input character keeps the continuation logic
identical for every line: a pending backslash followed by EOL simply
continues the current key or value on the next line.

The scanner is permissive. It never raises for malformed input; a
continuation left open at end of input is dropped without an entry.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from proplines.escapes import join_surrogates, unescape_char
from proplines.model import Entry


# Synthetic end-of-line marker. Never equal to a single character.
EOL = "EOL"

COMMENT_CHARS = frozenset("#!")
KEY_TERMINATORS = frozenset(" =:")
SEPARATOR_CHARS = frozenset("=:")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class ScanState(Enum):
    """Tokenizer states."""

    START = "start"
    COMMENT = "comment"
    KEY = "key"
    SEPARATOR = "separator"
    VALUE = "value"


@dataclass
class ScanContext:
    """
    Parse state for exactly one in-flight entry.

    A fresh instance is built on every reset, so nothing leaks from one
    entry into the next.

    Properties:
        state: Current ScanState
        start: Index of the entry's first line (-1 before START is left)
        key: Unescaped key accumulated so far
        separator: Separator spelling accumulated so far
        value: Unescaped value accumulated so far
        skip_space: Drop plain spaces (armed on reset and after a continuation)
        escaped_next: A backslash is pending
        unicode_digits: Hex digits of a pending \\uXXXX unit, or None
    """

    state: ScanState = ScanState.START
    start: int = -1
    key: str = ""
    separator: str = ""
    value: str = ""
    skip_space: bool = True
    escaped_next: bool = False
    unicode_digits: Optional[str] = None


def iter_chars(lines: List[str]) -> Iterator[Tuple[str, int]]:
    """Yield (char, line_index) for every character, plus EOL after each line."""
    for index, line in enumerate(lines):
        for char in line:
            yield char, index
        yield EOL, index


def _append(ctx: ScanContext, text: str) -> None:
    if ctx.state is ScanState.KEY:
        ctx.key += text
    else:
        ctx.value += text


def _toggle_escape(ctx: ScanContext) -> None:
    if ctx.escaped_next:
        # Escaped \ char
        ctx.escaped_next = False
        _append(ctx, "\\")
    else:
        # Escaped next char
        ctx.escaped_next = True


def _append_char(ctx: ScanContext, char: str, decode_unicode: bool) -> None:
    if ctx.escaped_next:
        ctx.escaped_next = False
        if decode_unicode and char == "u":
            ctx.unicode_digits = ""
            return
        char = unescape_char(char)
    _append(ctx, char)


def _feed_unicode(ctx: ScanContext, char: str) -> bool:
    """
    Feed one character to a pending \\uXXXX unit.

    Returns True if the character was consumed as a hex digit. Otherwise
    the partial unit is flushed literally (like an unknown escape) and the
    caller processes the character as usual.
    """
    if char != EOL and char in HEX_DIGITS:
        ctx.unicode_digits += char
        if len(ctx.unicode_digits) == 4:
            _append(ctx, chr(int(ctx.unicode_digits, 16)))
            ctx.unicode_digits = None
        return True

    _append(ctx, "u" + ctx.unicode_digits)
    ctx.unicode_digits = None
    return False


def _emit(ctx: ScanContext, line: int, decode_unicode: bool) -> Entry:
    key, value = ctx.key, ctx.value
    if decode_unicode:
        key, value = join_surrogates(key), join_surrogates(value)
    return Entry(
        key=key,
        value=value,
        start_line=ctx.start,
        line_span=line - ctx.start + 1,
        separator=ctx.separator,
    )


def iter_entries(lines: List[str], decode_unicode: bool = False) -> Iterator[Entry]:
    """
    Iterate over all entries found in the given lines.

    Comments, blank lines and an unterminated trailing continuation are
    skipped. Each call starts a fresh scan of the lines' current state.

    Args:
        lines: Document lines
        decode_unicode: Decode \\uXXXX units in keys and values

    Yields:
        Entry records in file order (duplicates included)
    """
    ctx = ScanContext()

    for char, line in iter_chars(lines):
        # Simply ignore spaces
        if ctx.skip_space and char == " ":
            continue
        ctx.skip_space = False

        # First char on the line
        if ctx.state is ScanState.START:
            if char == EOL:
                # Blank line
                ctx = ScanContext()
                continue
            ctx.state = ScanState.COMMENT if char in COMMENT_CHARS else ScanState.KEY
            ctx.start = line

        if ctx.state is ScanState.COMMENT:
            if char == EOL:
                ctx = ScanContext()
            continue

        if ctx.unicode_digits is not None and _feed_unicode(ctx, char):
            continue

        if ctx.state is ScanState.KEY:
            if char == EOL:
                if ctx.escaped_next:
                    # Multi-line key
                    ctx.escaped_next = False
                    ctx.skip_space = True
                else:
                    # Value-less key
                    yield _emit(ctx, line, decode_unicode)
                    ctx = ScanContext()
                continue
            elif char in KEY_TERMINATORS:
                if ctx.escaped_next:
                    # Part of the key
                    ctx.escaped_next = False
                    ctx.key += char
                else:
                    # Start of the separator, handled below
                    ctx.state = ScanState.SEPARATOR
            elif char == "\\":
                _toggle_escape(ctx)
            else:
                _append_char(ctx, char, decode_unicode)

        if ctx.state is ScanState.SEPARATOR:
            if char == EOL:
                # Value-less key
                yield _emit(ctx, line, decode_unicode)
                ctx = ScanContext()
                continue
            elif char == " ":
                ctx.separator += char
            elif char in SEPARATOR_CHARS:
                # Only one non-space separator char is allowed
                if any(c in SEPARATOR_CHARS for c in ctx.separator):
                    ctx.state = ScanState.VALUE
                else:
                    ctx.separator += char
            else:
                # Value start, handled below
                ctx.state = ScanState.VALUE

        if ctx.state is ScanState.VALUE:
            if char == EOL:
                if ctx.escaped_next:
                    # Multi-line value
                    ctx.escaped_next = False
                    ctx.skip_space = True
                else:
                    # Value end
                    yield _emit(ctx, line, decode_unicode)
                    ctx = ScanContext()
            elif char == "\\":
                _toggle_escape(ctx)
            else:
                _append_char(ctx, char, decode_unicode)


__all__ = [
    "EOL",
    "ScanState",
    "ScanContext",
    "iter_chars",
    "iter_entries",
]
