"""
Line splitter and top-level read/write API.

Converts raw text to a Document and back:
    - parse(): text → Document
    - stringify(): Document → text

Every line terminator convention is accepted on input (LF, CRLF, CR),
even mixed in one file. Output always uses LF.
"""

import re
from typing import List

from proplines.model import Document, InvalidDocumentError


_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """
    Split text on any line terminator.

    A trailing terminator does not produce a phantom empty last line,
    and empty input yields an empty list.
    """
    lines = _LINE_BREAK_RE.split(text)

    # Remove last line, if empty
    if lines and lines[-1] == "":
        lines.pop()

    return lines


def parse(text: str) -> Document:
    """
    Parse .properties file contents.

    This never fails: malformed lines are kept verbatim and simply
    ignored by the tokenizer later on.

    Args:
        text: Decoded file contents

    Returns:
        Document holding the split lines
    """
    return Document(lines=split_lines(text))


def stringify(document: Document) -> str:
    """
    Format a Document back to .properties text.

    Leading empty lines are dropped and a single trailing newline is
    added when the result is non-empty.

    Args:
        document: Document to format

    Returns:
        Text joined with LF terminators
    """
    if not isinstance(document, Document):
        raise InvalidDocumentError(f"Expected Document, got {type(document).__name__}")

    lines = document.lines

    # Remove leading empty lines, keeping at least the last one
    start = 0
    while start < len(lines) - 1 and lines[start] == "":
        start += 1
    lines = lines[start:]

    # Add trailing newline
    if lines and lines[-1] != "":
        lines = lines + [""]

    return "\n".join(lines)


__all__ = [
    "split_lines",
    "parse",
    "stringify",
]
