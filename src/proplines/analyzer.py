"""
Document Analyzer: diagnostics and inventory of .properties documents.

This module provides lightweight analysis of Document objects:
    - Line inventory (blank, comment, entry lines)
    - Duplicate and value-less keys
    - Separator style usage
    - Trailing fragments the tokenizer dropped

IMPORTANT: This is read-only. It does NOT modify the document.
The tokenizer stays silent on malformed input; this is the place where
such conditions get reported.
"""

from __future__ import annotations

import warnings
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from proplines.model import Document, InvalidDocumentError, PropertiesWarning
from proplines.tokenizer import COMMENT_CHARS, iter_entries


@dataclass
class DocumentReport:
    """Analysis report for a document."""

    total_lines: int = 0
    blank_lines: int = 0
    comment_lines: int = 0

    # Entries
    total_entries: int = 0
    unique_keys: int = 0
    multiline_entries: int = 0
    valueless_keys: List[str] = field(default_factory=list)
    duplicate_keys: Dict[str, List[int]] = field(default_factory=dict)  # key -> start lines

    # Formatting
    separator_usage: Dict[str, int] = field(default_factory=dict)
    dropped_fragment_start: Optional[int] = None  # First line of an unterminated continuation

    # Warnings and flags
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _is_blank(line: str) -> bool:
    return line.strip(" ") == ""


def _is_comment(line: str) -> bool:
    stripped = line.lstrip(" ")
    return stripped != "" and stripped[0] in COMMENT_CHARS


def analyze_document(document: Document, emit_warnings: bool = False) -> DocumentReport:
    """
    Perform analysis of a Document.

    Args:
        document: Document to inspect
        emit_warnings: Also issue every report warning via warnings.warn
            with category PropertiesWarning

    Returns a DocumentReport with metrics and warnings.
    """
    if not isinstance(document, Document):
        raise InvalidDocumentError(f"Expected Document, got {type(document).__name__}")

    report = DocumentReport(total_lines=len(document.lines))

    # =========================================================================
    # 1. ENTRY INVENTORY
    # =========================================================================

    covered = set()
    starts_by_key: Dict[str, List[int]] = defaultdict(list)
    separators: Dict[str, int] = defaultdict(int)

    for entry in iter_entries(document.lines):
        report.total_entries += 1
        covered.update(range(entry.start_line, entry.end_line))
        starts_by_key[entry.key].append(entry.start_line)

        if entry.line_span > 1:
            report.multiline_entries += 1
        if entry.separator:
            separators[entry.separator] += 1
        else:
            report.valueless_keys.append(entry.key)

    report.unique_keys = len(starts_by_key)
    report.duplicate_keys = {key: starts for key, starts in starts_by_key.items() if len(starts) > 1}
    report.separator_usage = dict(separators)

    # =========================================================================
    # 2. LINE INVENTORY
    # =========================================================================

    # Lines outside every entry are blank, comments, or the start of a
    # fragment that runs to the end of input.
    for index, line in enumerate(document.lines):
        if index in covered:
            continue
        if report.dropped_fragment_start is not None:
            continue
        if _is_blank(line):
            report.blank_lines += 1
        elif _is_comment(line):
            report.comment_lines += 1
        else:
            report.dropped_fragment_start = index

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    for key, starts in sorted(report.duplicate_keys.items()):
        report.add_warning(
            f"Duplicate key {key!r} at lines: {', '.join(str(s + 1) for s in starts)}"
        )

    if report.dropped_fragment_start is not None:
        report.add_warning(
            f"Unterminated continuation dropped at line {report.dropped_fragment_start + 1}"
        )

    if len(report.separator_usage) > 1:
        styles = ", ".join(repr(s) for s in sorted(report.separator_usage))
        report.add_warning(f"Inconsistent separator styles: {styles}")

    if emit_warnings:
        for msg in report.warnings:
            warnings.warn(msg, PropertiesWarning)

    return report
