"""Scanner: turns raw text into indented logical lines.

Comments and blank lines are removed here so the parser only ever sees
structural content.  Quote state is tracked character by character so a
``#`` inside a quoted scalar survives.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import TabIndentation, UnterminatedQuote

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

# Leading sequence markers: "-", "- -", "  -  -" ...
_DASHES_RE = re.compile(r"[ \t]*-(?:[ \t]+-)*")


@dataclass(frozen=True, slots=True)
class ScannedLine:
    indent: int
    content: str
    line: int  # 1-based source line number


def scan(text: str) -> list[ScannedLine]:
    """Split *text* into ScannedLines, dropping blank and comment-only lines."""
    lines: list[ScannedLine] = []
    for number, raw in enumerate(_LINE_BREAK_RE.split(text), 1):
        content = strip_comment(raw, number).rstrip()
        body = content.lstrip(" \t")
        if not body:
            continue
        leading = content[: len(content) - len(body)]
        if "\t" in leading:
            raise TabIndentation(number)
        lines.append(ScannedLine(indent=len(leading), content=body, line=number))
    return lines


def strip_comment(raw: str, line: int) -> str:
    """Return *raw* without its trailing unquoted ``#`` comment.

    A ``#`` opens a comment only at the start of the text or after
    whitespace, so ``a#b`` stays intact.  Raises UnterminatedQuote if a
    quoted scalar is still open at the end of the line.
    """
    quote: str | None = None
    i = 0
    n = len(raw)
    while i < n:
        ch = raw[i]
        if quote is None:
            if ch == "#" and (i == 0 or raw[i - 1] in " \t"):
                return raw[:i]
            if ch in "\"'" and opens_scalar(raw, i):
                quote = ch
        elif quote == '"':
            if ch == "\\":
                i += 1
            elif ch == '"':
                quote = None
        else:
            if ch == "'":
                if i + 1 < n and raw[i + 1] == "'":
                    i += 1
                else:
                    quote = None
        i += 1
    if quote is not None:
        raise UnterminatedQuote(line)
    return raw


def opens_scalar(raw: str, pos: int) -> bool:
    """True if a scalar (key or value) starts at *pos*.

    That is the first non-blank column, the column after a ``key:``
    separator, or the column after a ``-`` sequence marker.  A quote
    anywhere else (``it's``, ``5" wide``) is plain text.
    """
    prefix = raw[:pos]
    trimmed = prefix.rstrip(" \t")
    if not trimmed.strip():
        return True
    if len(trimmed) == len(prefix):
        return False
    return trimmed.endswith(":") or _DASHES_RE.fullmatch(trimmed) is not None
