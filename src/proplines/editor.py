"""
Entry index and mutator.

Read and edit a Document through the tokenizer while leaving every line
that is not being changed untouched.

READ vs WRITE ON DUPLICATE KEYS:
    Reads (get_value, to_mapping) let the LAST duplicate win.
    Writes (set_value, remove_value) act on the FIRST duplicate only,
    keeping its original line position.
    These two policies are intentionally different. Do not unify them.
"""

from typing import Dict, Iterator, Optional, Tuple

from proplines.escapes import escape_key, escape_value
from proplines.model import Document, Entry, InvalidDocumentError, KeyValuePair
from proplines.tokenizer import iter_entries


DEFAULT_SEPARATOR = "="


def _require_document(document) -> Document:
    if not isinstance(document, Document):
        raise InvalidDocumentError(f"Expected Document, got {type(document).__name__}")
    return document


def find_entry(document: Document, key: str) -> Tuple[Optional[Entry], str]:
    """
    Find the first entry for the given key.

    Args:
        document: Document to scan
        key: Unescaped key

    Returns:
        (entry, separator) where entry is the first match or None, and
        separator is the most recently observed separator style up to the
        match (up to the end of the document when not found),
        DEFAULT_SEPARATOR if none was seen
    """
    _require_document(document)

    separator = DEFAULT_SEPARATOR
    for entry in iter_entries(document.lines):
        # Remember separator
        if entry.separator:
            separator = entry.separator
        if entry.key == key:
            return entry, separator

    # Not found
    return None, separator


def list_entries(document: Document, decode_unicode: bool = False) -> Iterator[KeyValuePair]:
    """
    Iterate over all key-value pairs.

    Malformed lines are ignored, no error is raised.
    """
    _require_document(document)
    for entry in iter_entries(document.lines, decode_unicode=decode_unicode):
        yield KeyValuePair(key=entry.key, value=entry.value)


def get_value(
    document: Document,
    key: str,
    default: Optional[str] = None,
    decode_unicode: bool = False,
) -> Optional[str]:
    """
    Find the value for the given key.

    This scans the whole document (O(n)). To read many keys, use
    to_mapping() instead.

    Args:
        document: Document to scan
        key: Unescaped key
        default: Returned when the key is not defined
        decode_unicode: Decode \\uXXXX units

    Returns:
        Unescaped value of the LAST entry with this key, or default
    """
    _require_document(document)

    found = default
    for entry in iter_entries(document.lines, decode_unicode=decode_unicode):
        if entry.key == key:
            found = entry.value
    return found


def to_mapping(document: Document, decode_unicode: bool = False) -> Dict[str, str]:
    """
    Load all defined keys into a dict.

    If duplicate keys are found, the last one is used.
    """
    _require_document(document)

    result: Dict[str, str] = {}
    for entry in iter_entries(document.lines, decode_unicode=decode_unicode):
        result[entry.key] = entry.value
    return result


def set_value(
    document: Document,
    key: str,
    value: Optional[str],
    separator: Optional[str] = None,
) -> None:
    """
    Set or remove the value for the given key, in place.

    An existing entry is replaced by exactly one new line at the same
    position, reusing its separator. A new key is appended at the end.

    Args:
        document: Document to modify
        key: Unescaped key
        value: Unescaped value; None removes the key
        separator: Separator for a newly appended line. Defaults to the
            last separator observed in the document, else "="
    """
    _require_document(document)
    if not isinstance(key, str):
        raise TypeError(f"Key must be str, got {type(key).__name__}")
    if value is not None and not isinstance(value, str):
        raise TypeError(f"Value must be str or None, got {type(value).__name__}")

    entry, observed = find_entry(document, key)

    if entry is not None:
        sep = entry.separator or DEFAULT_SEPARATOR
    else:
        sep = separator or observed

    items = [] if value is None else [f"{escape_key(key)}{sep}{escape_value(value)}"]

    if entry is not None:
        # Replace the whole source range, continuations included
        document.lines[entry.start_line:entry.end_line] = items
    else:
        # Not found, append
        document.lines.extend(items)


def remove_value(document: Document, key: str) -> None:
    """
    Remove the value for the given key.

    Alias for set_value(document, key, None).
    """
    set_value(document, key, None)


__all__ = [
    "DEFAULT_SEPARATOR",
    "find_entry",
    "list_entries",
    "get_value",
    "to_mapping",
    "set_value",
    "remove_value",
]
