"""
Example document used by the demo and the tests.

Covers both comment markers, blank lines, every separator style, a value
continuation, escaped backslashes and spaces, a \\u escape, a value-less
key and a duplicate key.
"""
from proplines.lines import parse
from proplines.model import Document


EXAMPLE_LINES = [
    "# Application settings",
    "! maintained by hand",
    "",
    "app.name=Demo Application",
    "app.version = 1.2",
    "app.owner: ops team",
    "app.debug true",
    "app.description = First line \\",
    "    continues here",
    "path.windows=C:\\\\Program Files\\\\Demo",
    "key\\ with\\ spaces = spaced",
    "greeting=caf\\u00e9",
    "feature.enabled",
    "",
    "app.version=2.0",
]

EXAMPLE_PROPERTIES = "\n".join(EXAMPLE_LINES) + "\n"


def build_example_document() -> Document:
    return parse(EXAMPLE_PROPERTIES)
