#!/usr/bin/env python3
"""
Round-trip Demo: text → Document → edits → text

Shows the full workflow:
1. Parse the example .properties text
2. List entries and resolve values
3. Analyze the document
4. Edit values in place
5. Serialize back to text
"""

from proplines import get_value, list_entries, remove_value, set_value, stringify, to_mapping
from proplines.analyzer import analyze_document
from proplines.examples import build_example_document
from proplines.serialization import mapping_to_yaml


def main():
    print("=" * 80)
    print("ROUND-TRIP DEMO: text → Document → edits → text")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Parse
    # =========================================================================
    print("\n1. PARSING...")
    doc = build_example_document()
    print(f"   ✓ Lines: {len(doc.lines)}")

    # =========================================================================
    # STEP 2: Read
    # =========================================================================
    print("\n2. ENTRIES:")
    for pair in list_entries(doc):
        print(f"   {pair.key!r} = {pair.value!r}")
    print(f"\n   app.version resolves to {get_value(doc, 'app.version')!r} (last wins)")

    # =========================================================================
    # STEP 3: Analyze
    # =========================================================================
    print("\n3. ANALYZING...")
    report = analyze_document(doc)
    print(f"   ✓ Entries: {report.total_entries} ({report.unique_keys} unique)")
    print(f"   ✓ Comments: {report.comment_lines}, blank lines: {report.blank_lines}")
    print(f"   ✓ Separators: {report.separator_usage}")
    if report.warnings:
        print(f"\n   Warnings ({len(report.warnings)}):")
        for warning in report.warnings:
            print(f"      - {warning}")

    # =========================================================================
    # STEP 4: Edit
    # =========================================================================
    print("\n4. EDITING...")
    set_value(doc, "app.owner", "platform team")
    set_value(doc, "app.description", "Single line now")
    remove_value(doc, "app.debug")
    set_value(doc, "app.mode", " leading space")
    print("   ✓ app.owner replaced, app.description collapsed, app.debug removed, app.mode added")

    # =========================================================================
    # STEP 5: Serialize
    # =========================================================================
    print("\n5. RESULT:")
    print("-" * 80)
    print(stringify(doc), end="")
    print("-" * 80)
    print("\nResolved mapping as YAML:")
    print(mapping_to_yaml(doc))
    print(f"Keys: {len(to_mapping(doc))}")
    print("=" * 80)


if __name__ == "__main__":
    main()
