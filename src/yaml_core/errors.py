"""Error taxonomy for YAML Core.

Three families share one base class so callers can catch everything with
``except YamlCoreError``:

- ``LexError``: raised by the scanner, carries the source ``line``
- ``ParseError``: raised by the parser, carries the source ``line``
- ``DeserError``: raised while deserializing, carries a ``FieldPath``
"""

from __future__ import annotations

from .path import FieldPath


class YamlCoreError(Exception):
    """Base class for every error raised by yaml_core."""


# ---------------------------------------------------------------------------
# Lexer errors
# ---------------------------------------------------------------------------

class LexError(YamlCoreError):
    def __init__(self, line: int) -> None:
        super().__init__(line)
        self.line = line

    def describe(self) -> str:
        return "lexical error"

    def __str__(self) -> str:
        return f"line {self.line}: {self.describe()}"


class TabIndentation(LexError):
    def describe(self) -> str:
        return "tab character used for indentation"


class UnterminatedQuote(LexError):
    def describe(self) -> str:
        return "unterminated quoted string"


# ---------------------------------------------------------------------------
# Parser errors
# ---------------------------------------------------------------------------

class ParseError(YamlCoreError):
    def __init__(self, line: int) -> None:
        super().__init__(line)
        self.line = line

    def describe(self) -> str:
        return "parse error"

    def __str__(self) -> str:
        return f"line {self.line}: {self.describe()}"


class InconsistentIndentation(ParseError):
    def describe(self) -> str:
        return "inconsistent indentation"


class DuplicateKey(ParseError):
    def __init__(self, key: str, line: int) -> None:
        super().__init__(line)
        self.key = key

    def describe(self) -> str:
        return f"duplicate key {self.key!r}"


class UnexpectedToken(ParseError):
    def __init__(self, line: int, found: str) -> None:
        super().__init__(line)
        self.found = found

    def describe(self) -> str:
        return f"unexpected {self.found!r}"


class TooDeeplyNested(ParseError):
    def describe(self) -> str:
        return "document is nested too deeply"


# ---------------------------------------------------------------------------
# Deserialization errors
# ---------------------------------------------------------------------------

class DeserError(YamlCoreError):
    """Base for errors raised while converting a Value into a typed result.

    ``path`` starts out relative to the value the error was raised on and
    grows one segment at a time (see ``push``) as the error propagates out
    of nested ``field`` / sequence conversions.
    """

    def __init__(self, path: FieldPath | None = None) -> None:
        super().__init__()
        self.path = path if path is not None else FieldPath()

    def push(self, segment: str | int) -> None:
        """Prefix the path with the segment of the enclosing container."""
        self.path = self.path.prepend(segment)

    def describe(self) -> str:
        return "deserialization error"

    def __str__(self) -> str:
        where = str(self.path)
        return f"{where}: {self.describe()}" if where else self.describe()


class MissingKey(DeserError):
    def __init__(self, key: str, path: FieldPath | None = None) -> None:
        super().__init__(path)
        self.key = key

    def describe(self) -> str:
        return f"missing key {self.key!r}"


class TypeMismatch(DeserError):
    def __init__(
        self, expected: str, found: str, path: FieldPath | None = None
    ) -> None:
        super().__init__(path)
        self.expected = expected
        self.found = found

    def describe(self) -> str:
        return f"expected {self.expected}, found {self.found}"
