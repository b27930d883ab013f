"""Scalar handling: inference, quoted-string unescaping, key splitting."""

from __future__ import annotations

import re

from .errors import UnexpectedToken, UnterminatedQuote
from .scanner import opens_scalar
from .values import Null, Value, VBool, VFloat, VInt, VText

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][-+]?[0-9]+)?")
_BLOCK_SCALAR_RE = re.compile(r"[|>][-+]?[0-9]?[-+]?")
_NODE_PROPERTY_RE = re.compile(r"[&*!]\S")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
    "r": "\r",
}


# ---------------------------------------------------------------------------
# Scalar inference
# ---------------------------------------------------------------------------

def atom_to_value(text: str, line: int = 0) -> Value:
    """Convert the text of a scalar to a Value.

    Quoted text is always a VText.  Plain text is tried as null, bool,
    int and float, in that order, and falls back to VText.
    """
    if text[:1] in ("'", '"'):
        unquoted, end = read_quoted(text, 0, line)
        if text[end:].strip():
            raise UnexpectedToken(line, text[end:].strip())
        return VText(unquoted)
    reject_unsupported(text, line)

    lowered = text.lower()
    if text in ("", "~") or lowered == "null":
        return Null
    if lowered == "true":
        return VBool(True)
    if lowered == "false":
        return VBool(False)
    if _INT_RE.fullmatch(text):
        number = int(text)
        if _INT64_MIN <= number <= _INT64_MAX:
            return VInt(number)
        return VFloat(float(text))
    if _FLOAT_RE.fullmatch(text):
        return VFloat(float(text))
    return VText(text)


def reject_unsupported(text: str, line: int) -> None:
    """Raise UnexpectedToken for YAML syntax outside the block subset."""
    if text[:1] in ("[", "{"):
        raise UnexpectedToken(line, text[:1])
    if _BLOCK_SCALAR_RE.fullmatch(text):
        raise UnexpectedToken(line, text)
    if _NODE_PROPERTY_RE.match(text):
        raise UnexpectedToken(line, text.split()[0])


def read_quoted(text: str, start: int, line: int) -> tuple[str, int]:
    """Read the quoted scalar opening at ``text[start]``.

    Returns the unescaped string and the index just past the closing quote.
    """
    quote = text[start]
    out: list[str] = []
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if quote == '"' and ch == "\\" and i + 1 < n:
            nxt = text[i + 1]
            if nxt in _ESCAPES:
                out.append(_ESCAPES[nxt])
            else:
                out.append(ch + nxt)
            i += 2
            continue
        if ch == quote:
            if quote == "'" and i + 1 < n and text[i + 1] == "'":
                out.append("'")
                i += 2
                continue
            return "".join(out), i + 1
        out.append(ch)
        i += 1
    raise UnterminatedQuote(line)


# ---------------------------------------------------------------------------
# Line shape helpers
# ---------------------------------------------------------------------------

def is_sequence_item(content: str) -> bool:
    return content == "-" or content.startswith("- ")


def split_key(content: str, line: int) -> tuple[str, str] | None:
    """Split ``key: value`` / ``key:`` into ``(key, value)``.

    The separator is the first unquoted ``:`` followed by a space or the
    end of the line.  Returns None when *content* is not a mapping entry.
    """
    i = 0
    n = len(content)
    while i < n:
        ch = content[i]
        if ch in ("'", '"') and opens_scalar(content, i):
            _, i = read_quoted(content, i, line)
            continue
        if ch == ":" and (i + 1 == n or content[i + 1] in " \t"):
            raw_key = content[:i].strip()
            rest = content[i + 1:].strip()
            return _read_key(raw_key, line), rest
        i += 1
    return None


def _read_key(raw_key: str, line: int) -> str:
    if not raw_key:
        raise UnexpectedToken(line, ":")
    if raw_key[:1] in ("'", '"'):
        key, end = read_quoted(raw_key, 0, line)
        if end != len(raw_key):
            raise UnexpectedToken(line, raw_key[end:])
        return key
    if raw_key[:1] in ("[", "{", "?"):
        raise UnexpectedToken(line, raw_key[:1])
    return raw_key
