"""Parser configuration."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Knobs for ``parse``.

    max_depth: deepest allowed block nesting; deeper documents raise
        TooDeeplyNested instead of exhausting the interpreter stack.
    """

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
