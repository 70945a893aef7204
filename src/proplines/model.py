"""
Core Document Model Objects

Defines the data structures shared by every layer of proplines:
    - Document (the line array backing one .properties file)
    - Entry (a decoded key/value record plus its source location)
    - KeyValuePair (the plain view handed to callers)

ARCHITECTURAL RULE:
    Document.lines is the ONLY persisted state.
    Entries are never stored; they are recomputed by scanning the lines.
    Nothing in here knows how to tokenize or escape text.
"""

from dataclasses import dataclass, field
from typing import List


class PropertiesError(Exception):
    """Base class for proplines errors."""
    pass


class InvalidDocumentError(PropertiesError, TypeError):
    """Raised when an operation receives something that is not a Document."""
    pass


class DocumentFormatError(PropertiesError):
    """Raised when a serialized document payload cannot be loaded."""
    pass


class PropertiesWarning(UserWarning):
    """Category for diagnostics raised by the analyzer."""
    pass


@dataclass
class Document:
    """
    Wrapper for .properties file contents.

    Properties:
        lines:
            Plain, unparsed text lines with terminators stripped.
            Comments, blank lines and spacing are kept exactly as read.

    INVARIANTS:
        - No element contains a line terminator
        - Joining the lines with newlines (plus one trailing newline when
          non-empty) reproduces the file contents
    """

    lines: List[str] = field(default_factory=list)


@dataclass
class Entry:
    """
    A single key/value record found by the tokenizer.

    Properties:
        key:
            Unescaped key
        value:
            Unescaped value ("" for value-less keys)
        start_line:
            Index of the first source line
        line_span:
            Number of source lines covered (more than one for continuations)
        separator:
            Exact separator spelling, e.g. "=", " = ", ": " or " "
            ("" for value-less keys)
    """

    key: str
    value: str
    start_line: int
    line_span: int
    separator: str = ""

    @property
    def end_line(self) -> int:
        """Index one past the last source line."""
        return self.start_line + self.line_span


@dataclass
class KeyValuePair:
    """Key and value pair."""

    key: str
    value: str


def empty_document() -> Document:
    """Returns an empty document."""
    return Document()
