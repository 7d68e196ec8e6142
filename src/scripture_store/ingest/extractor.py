"""
Narrow field scanner for translation documents.

Pulls single string/integer fields out of a JSON-like fragment and finds
the closing brace of an object, without decoding the whole document.
Every function here is pure and returns an "absent" value instead of
raising when the input is malformed.
"""

import re
from functools import lru_cache


_ESCAPES = {
    '"': '"',
    "/": "/",
    "\\": "\\",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_NUMERIC_CHARS = frozenset("0123456789-.")
_DIGITS_RE = re.compile(r"[0-9]+")


@lru_cache(maxsize=64)
def _marker(key: str) -> re.Pattern[str]:
    # "key" followed by a colon; an escaped quote is string content, not a marker
    return re.compile(r'(?<!\\)"' + re.escape(key) + r'"\s*:\s*')


def value_start(fragment: str, key: str) -> int:
    """
    Index of the first character of the value for `key`, or -1.

    Only the first occurrence of the field marker is considered.
    """
    match = _marker(key).search(fragment)
    if match is None:
        return -1
    return match.end()


def _read_quoted(fragment: str, start: int) -> str | None:
    """Read a quoted value whose opening quote is at `start`, unescaping as we go."""
    chars: list[str] = []
    n = len(fragment)
    i = start + 1

    while i < n:
        c = fragment[i]
        if c == '"':
            return "".join(chars)
        if c == "\\" and i + 1 < n:
            nxt = fragment[i + 1]
            if nxt == "u":
                digits = fragment[i + 2 : i + 6]
                if len(digits) == 4 and all(d in _HEX_DIGITS for d in digits):
                    chars.append(chr(int(digits, 16)))
                    i += 6
                    continue
            chars.append(_ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        chars.append(c)
        i += 1

    # Unterminated string
    return None


def extract_string(fragment: str, key: str) -> str | None:
    """
    Extract the value of a string field.

    Quoted values are read up to the first unescaped quote and the
    standard backslash escapes are decoded. When the value is not quoted,
    the leading numeric token (digits, minus, decimal point) is returned
    as a string instead, so numeric fields such as a year can share this
    call. Empty values count as absent.
    """
    pos = value_start(fragment, key)
    if pos < 0 or pos >= len(fragment):
        return None

    if fragment[pos] == '"':
        value = _read_quoted(fragment, pos)
        return value or None

    end = pos
    while end < len(fragment) and fragment[end] in _NUMERIC_CHARS:
        end += 1
    return fragment[pos:end] or None


def extract_int(fragment: str, key: str) -> int:
    """
    Extract a non-negative integer field.

    Returns -1 when the marker is missing or no digits follow it. -1 is
    never a valid chapter or verse number.
    """
    pos = value_start(fragment, key)
    if pos < 0:
        return -1

    match = _DIGITS_RE.match(fragment, pos)
    if match is None:
        return -1
    return int(match.group())


def find_matching_close(fragment: str, open_index: int) -> int | None:
    """
    Find the brace that closes the object opened at `open_index`.

    Braces inside quoted strings are ignored; an escaped quote does not
    end a string. Returns None when `open_index` is not an opening brace
    or the fragment ends before the object does.
    """
    n = len(fragment)
    if not 0 <= open_index < n or fragment[open_index] != "{":
        return None

    depth = 0
    in_string = False
    i = open_index

    while i < n:
        c = fragment[i]
        if in_string:
            if c == "\\":
                i += 2
                continue
            if c == '"':
                in_string = False
        elif c == '"':
            in_string = True
        elif c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1

    return None
