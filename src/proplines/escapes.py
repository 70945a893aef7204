"""
Escape codec for .properties keys and values.

Bidirectional mapping between the escaped textual spelling stored in a
file and the logical characters callers work with.

    unescape("a\\tb")    → "a<TAB>b"
    escape_key("a b")    → "a\\ b"
    escape_value(" a b") → "\\ a b"

KNOWN LIMITATION:
    unescape() does not decode \\uXXXX by default. The escape is treated
    like any other unknown escape and degrades to "uXXXX".
    Pass decode_unicode=True to opt in to decoding.
"""

import re


_ESCAPE_RE = re.compile(r"\\([^\n\r\u2028\u2029])")
_ESCAPE_UNICODE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|[^\n\r\u2028\u2029])")

_UNESCAPED = {
    "r": "\r",
    "t": "\t",
    "n": "\n",
    "f": "\f",
}

_ESCAPED = {
    "\\": "\\\\",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


def unescape_char(char: str) -> str:
    """Return the logical character for the escape unit ``\\<char>``."""
    return _UNESCAPED.get(char, char)


def join_surrogates(text: str) -> str:
    """Combine UTF-16 surrogate pairs into single characters."""
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def unescape(text: str, decode_unicode: bool = False) -> str:
    """
    Unescape key or value.

    Every two-character unit ``\\X`` becomes unescape_char(X); unknown
    escapes degrade to X itself, never to an error.

    Args:
        text: Escaped string
        decode_unicode: Also decode \\uXXXX units (and join surrogate pairs)

    Returns:
        Actual string
    """
    if not decode_unicode:
        return _ESCAPE_RE.sub(lambda m: unescape_char(m.group(1)), text)

    def replace(match):
        unit = match.group(1)
        if len(unit) == 5:
            return chr(int(unit[1:], 16))
        return unescape_char(unit)

    return join_surrogates(_ESCAPE_UNICODE_RE.sub(replace, text))


def _unicode_escape(code_point: int) -> str:
    if code_point > 0xFFFF:
        # Outside the BMP: emit the UTF-16 surrogate pair
        offset = code_point - 0x10000
        return _unicode_escape(0xD800 + (offset >> 10)) + _unicode_escape(0xDC00 + (offset & 0x3FF))
    return "\\u" + format(code_point, "04x")


def escape(text: str, escape_space: bool, escape_unicode: bool = True) -> str:
    """
    Produce the canonical escaped spelling of a key or value.

    Args:
        text: Text to be escaped
        escape_space: Whether all spaces should be escaped
            (a leading space is always escaped)
        escape_unicode: Whether chars below 0x0020 and above 0x007e
            are written as \\uXXXX

    Returns:
        Escaped string
    """
    result = []

    for index, char in enumerate(text):
        if char == " ":
            # Escape space if required, or if it is first character
            result.append("\\ " if escape_space or index == 0 else " ")
        elif char in _ESCAPED:
            result.append(_ESCAPED[char])
        elif escape_unicode and (ord(char) < 0x20 or ord(char) > 0x7E):
            result.append(_unicode_escape(ord(char)))
        else:
            result.append(char)

    return "".join(result)


def escape_key(text: str, escape_unicode: bool = True) -> str:
    """Escape property key. Every space is escaped."""
    return escape(text, True, escape_unicode)


def escape_value(text: str, escape_unicode: bool = True) -> str:
    """Escape property value. Only a leading space is escaped."""
    return escape(text, False, escape_unicode)


__all__ = [
    "unescape_char",
    "unescape",
    "escape",
    "escape_key",
    "escape_value",
]
