"""FieldPath: the chain of keys / indices leading to a value."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Union

Segment = Union[str, int]

_TOKEN_RE = re.compile(r"\[(\d+)\]|([^.\[\]]+)")


@dataclass(frozen=True, slots=True)
class FieldPath:
    """Immutable sequence of mapping keys (str) and sequence indices (int)."""

    segments: tuple[Segment, ...] = ()

    def child(self, segment: Segment) -> FieldPath:
        return FieldPath(self.segments + (segment,))

    def prepend(self, segment: Segment) -> FieldPath:
        return FieldPath((segment,) + self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __str__(self) -> str:
        out: list[str] = []
        for seg in self.segments:
            if isinstance(seg, int):
                out.append(f"[{seg}]")
            elif out:
                out.append(f".{seg}")
            else:
                out.append(seg)
        return "".join(out)

    @classmethod
    def parse(cls, text: str) -> FieldPath:
        """Parse ``a.b[2].c`` (or ``a.b.2.c``) into a FieldPath.

        All-digit dotted segments become indices.  Raises ``ValueError``
        for empty segments or stray brackets.
        """
        if not text:
            return cls()
        segments: list[Segment] = []
        pos = 0
        expect_name = True
        while pos < len(text):
            if text[pos] == "." and not expect_name:
                pos += 1
                expect_name = True
                if pos == len(text):
                    raise ValueError(f"trailing '.' in path {text!r}")
                continue
            m = _TOKEN_RE.match(text, pos)
            if m is None:
                raise ValueError(f"malformed path {text!r} at offset {pos}")
            index, name = m.groups()
            if index is not None:
                segments.append(int(index))
            else:
                if not expect_name:
                    raise ValueError(f"malformed path {text!r} at offset {pos}")
                segments.append(int(name) if name.isdigit() else name)
            expect_name = False
            pos = m.end()
        return cls(tuple(segments))
