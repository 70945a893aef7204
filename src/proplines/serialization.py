"""
Serialization helpers for proplines objects (Document, Entry).

Provides lossless JSON/YAML round-trip of a Document via an intermediate
dict representation, plus read-only exports of the resolved key/value view.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

import yaml

from proplines.editor import DEFAULT_SEPARATOR, set_value, to_mapping
from proplines.model import Document, DocumentFormatError, Entry, InvalidDocumentError
from proplines.tokenizer import iter_entries


def entry_to_dict(e: Entry) -> Dict[str, Any]:
    return {
        "key": e.key,
        "value": e.value,
        "start_line": e.start_line,
        "line_span": e.line_span,
        "separator": e.separator,
    }


def entry_from_dict(d: Dict[str, Any]) -> Entry:
    try:
        return Entry(
            key=d["key"],
            value=d.get("value", ""),
            start_line=d["start_line"],
            line_span=d.get("line_span", 1),
            separator=d.get("separator", ""),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise DocumentFormatError(f"Invalid entry payload: {e}") from e


def document_to_dict(doc: Document) -> Dict[str, Any]:
    if not isinstance(doc, Document):
        raise InvalidDocumentError(f"Expected Document, got {type(doc).__name__}")
    return {"lines": list(doc.lines)}


def document_from_dict(d: Any) -> Document:
    if not isinstance(d, dict):
        raise DocumentFormatError(f"Expected a mapping, got {type(d).__name__}")
    lines = d.get("lines", [])
    if not isinstance(lines, list):
        raise DocumentFormatError(f"'lines' must be a list, got {type(lines).__name__}")
    for index, line in enumerate(lines):
        if not isinstance(line, str):
            raise DocumentFormatError(f"Line {index} is not a string: {line!r}")
        if "\n" in line or "\r" in line:
            raise DocumentFormatError(f"Line {index} contains a line terminator")
    return Document(lines=list(lines))


def document_to_json(doc: Document) -> str:
    return json.dumps(document_to_dict(doc), sort_keys=True)


def document_from_json(s: str) -> Document:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"Invalid JSON: {e}") from e
    return document_from_dict(d)


def document_to_yaml(doc: Document) -> str:
    return yaml.safe_dump(document_to_dict(doc), allow_unicode=True)


def document_from_yaml(s: str) -> Document:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise DocumentFormatError(f"Invalid YAML: {e}") from e
    return document_from_dict(d)


def entries_to_dicts(doc: Document) -> List[Dict[str, Any]]:
    """Full entry records (line span and separator included), in file order."""
    if not isinstance(doc, Document):
        raise InvalidDocumentError(f"Expected Document, got {type(doc).__name__}")
    return [entry_to_dict(e) for e in iter_entries(doc.lines)]


def mapping_to_json(doc: Document) -> str:
    return json.dumps(to_mapping(doc), sort_keys=True)


def mapping_to_yaml(doc: Document) -> str:
    return yaml.safe_dump(to_mapping(doc), allow_unicode=True)


def document_from_mapping(mapping: Mapping[str, Optional[str]], separator: str = DEFAULT_SEPARATOR) -> Document:
    """
    Build a new Document holding one line per item.

    Items are written in iteration order; None values are skipped.
    """
    doc = Document()
    for key, value in mapping.items():
        if value is None:
            continue
        set_value(doc, key, value, separator=separator)
    return doc
