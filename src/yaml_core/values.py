"""Value types for YAML Core.

Every parsed document is a tree of these immutable objects.  Each variant
answers the ``as_*`` accessors: the matching accessor returns a plain
Python view, every other accessor returns ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator, Union


class _Accessors:
    """Default (mismatching) accessors shared by all variants."""

    __slots__ = ()

    kind: ClassVar[str] = "value"

    def is_null(self) -> bool:
        return False

    def as_mapping(self) -> "VDict | None":
        return None

    def as_sequence(self) -> "tuple[Value, ...] | None":
        return None

    def as_str(self) -> str | None:
        return None

    def as_int(self) -> int | None:
        return None

    def as_float(self) -> float | None:
        return None

    def as_bool(self) -> bool | None:
        return None


class _NullType(_Accessors):
    """Singleton for ``~`` / ``null`` / empty values."""

    __slots__ = ()

    kind = "null"
    _instance: ClassVar["_NullType | None"] = None

    def __new__(cls) -> "_NullType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def is_null(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "null"

    def __reduce__(self) -> str:
        return "Null"


Null = _NullType()


@dataclass(frozen=True, slots=True)
class VBool(_Accessors):
    value: bool

    kind = "bool"

    def as_bool(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass(frozen=True, slots=True)
class VInt(_Accessors):
    value: int

    kind = "int"

    def as_int(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class VFloat(_Accessors):
    value: float

    kind = "float"

    def as_float(self) -> float:
        return self.value

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class VText(_Accessors):
    value: str

    kind = "string"

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class VList(_Accessors):
    items: tuple["Value", ...] = ()

    kind = "sequence"

    def as_sequence(self) -> tuple["Value", ...]:
        return self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


@dataclass(frozen=True, slots=True)
class VDict(_Accessors):
    """Ordered mapping of text keys to values.

    Keys are unique; the parser rejects duplicates before a VDict is built.
    """

    entries: tuple[tuple[str, "Value"], ...] = ()
    _index: dict[str, "Value"] = field(
        init=False, repr=False, compare=False, hash=False
    )

    kind = "mapping"

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", dict(self.entries))

    def as_mapping(self) -> "VDict":
        return self

    def get(self, key: str) -> "Value | None":
        return self._index.get(key)

    def keys(self) -> list[str]:
        return [k for k, _ in self.entries]

    def values(self) -> list["Value"]:
        return [v for _, v in self.entries]

    def items(self) -> list[tuple[str, "Value"]]:
        return list(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __getitem__(self, key: str) -> "Value":
        return self._index[key]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.entries) + "}"


Value = Union[_NullType, VBool, VInt, VFloat, VText, VList, VDict]

VALUE_TYPES = (_NullType, VBool, VInt, VFloat, VText, VList, VDict)


def to_python(value: Value) -> Any:
    """Convert a value tree into plain Python objects."""
    if isinstance(value, _NullType):
        return None
    if isinstance(value, VList):
        return [to_python(v) for v in value.items]
    if isinstance(value, VDict):
        return {k: to_python(v) for k, v in value.entries}
    return value.value
