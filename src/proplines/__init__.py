"""
proplines: format-preserving .properties editing

Parses Java-style .properties text into a line-oriented Document that keeps
comments, blank lines, separator style and spacing exactly as written, and
allows key lookup and in-place edits.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - File I/O or encodings (callers pass decoded text)
    - Value types (every value is a string)
    - Variable substitution

Lines are the single source of truth. Entries are always recomputed.
"""

from proplines.model import (
    Document,
    DocumentFormatError,
    Entry,
    InvalidDocumentError,
    KeyValuePair,
    PropertiesError,
    PropertiesWarning,
    empty_document,
)
from proplines.lines import parse, stringify
from proplines.escapes import escape_key, escape_value, unescape
from proplines.editor import (
    get_value,
    list_entries,
    remove_value,
    set_value,
    to_mapping,
)

__version__ = "0.1.0"

__all__ = [
    "Document",
    "DocumentFormatError",
    "Entry",
    "InvalidDocumentError",
    "KeyValuePair",
    "PropertiesError",
    "PropertiesWarning",
    "empty_document",
    "parse",
    "stringify",
    "escape_key",
    "escape_value",
    "unescape",
    "get_value",
    "list_entries",
    "remove_value",
    "set_value",
    "to_mapping",
]
