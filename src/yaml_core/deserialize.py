"""Deserialization: typed results from value trees.

A target type is anything ``deserialize`` knows how to build:

- ``str``, ``int``, ``float``, ``bool``
- ``Optional[T]`` / ``T | None``: ``Null`` becomes ``None``
- ``list[T]``, ``tuple[T, ...]``, ``dict[str, T]``
- ``Value`` (the tree itself) or one of the value classes
- a class implementing ``FromValue`` (a ``from_value`` classmethod)
- a dataclass, built field by field

No coercion happens here: ``VText("30")`` is not an ``int``.  The one
widening allowed is ``VInt`` into ``float``.

Errors raised while converting a nested value are re-raised with the key
or index of every enclosing container pushed onto ``DeserError.path``.
"""

from __future__ import annotations

import dataclasses
import logging
import types
from typing import (
    Any,
    Protocol,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    runtime_checkable,
)

from .errors import DeserError, MissingKey, TypeMismatch
from .options import ParseOptions
from .parser import parse
from .values import VALUE_TYPES, Value, VBool, VDict, VFloat, VInt, VList, VText

LOG = logging.getLogger(__name__)

_ABSENT = object()
_NONE_TYPE = type(None)

_SCALAR_NAMES: dict[type, str] = {
    str: VText.kind,
    int: VInt.kind,
    float: VFloat.kind,
    bool: VBool.kind,
}


@runtime_checkable
class FromValue(Protocol):
    """A type that knows how to build itself from a Value.

    Implementations usually compose ``field`` / ``optional_field``::

        @dataclass
        class Server:
            host: str
            port: int

            @classmethod
            def from_value(cls, value: Value) -> "Server":
                return cls(
                    host=field(value, "host", str),
                    port=optional_field(value, "port", int, default=80),
                )
    """

    @classmethod
    def from_value(cls, value: Value) -> Any:
        ...


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def deserialize(value: Value, target: Any) -> Any:
    """Convert *value* into an instance of *target*."""
    if target is Any:
        return value

    origin = get_origin(target)
    if origin is Union or origin is types.UnionType:
        return _from_union(value, target)
    if origin in (list, tuple) or target in (list, tuple):
        return _from_sequence(value, target, origin or target)
    if origin is dict or target is dict:
        return _from_mapping(value, target)
    if origin is not None:
        raise TypeError(f"cannot deserialize into {target!r}")

    if target in _SCALAR_NAMES:
        return _from_scalar(value, target)
    if isinstance(target, type) and issubclass(target, VALUE_TYPES):
        if not isinstance(value, target):
            raise TypeMismatch(target.kind, value.kind)
        return value
    if hasattr(target, "from_value"):
        return target.from_value(value)
    if dataclasses.is_dataclass(target):
        return _from_dataclass(value, target)
    raise TypeError(f"cannot deserialize into {target!r}")


def field(value: Value, key: str, target: Any = Value) -> Any:
    """Return ``value[key]`` converted to *target*.

    Raises TypeMismatch if *value* is not a mapping and MissingKey if the
    key is absent.  An explicit ``null`` is passed on to *target*, so it
    only succeeds for optional targets.
    """
    mapping = value.as_mapping()
    if mapping is None:
        raise TypeMismatch("mapping", value.kind)
    entry = mapping.get(key)
    if entry is None:
        raise MissingKey(key)
    return _descend(entry, key, target)


def optional_field(
    value: Value, key: str, target: Any = Value, default: Any = None
) -> Any:
    """Like ``field``, but an absent key or explicit ``null`` gives *default*."""
    mapping = value.as_mapping()
    if mapping is None:
        raise TypeMismatch("mapping", value.kind)
    entry = mapping.get(key)
    if entry is None or entry.is_null():
        return default
    return _descend(entry, key, target)


def parse_to(text: str, target: Any, options: ParseOptions | None = None) -> Any:
    """Parse *text* and deserialize the tree into *target*."""
    tree = parse(text, options)
    LOG.debug("deserializing %s into %r", tree.kind, target)
    return deserialize(tree, target)


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def _descend(value: Value, segment: str | int, target: Any) -> Any:
    try:
        return deserialize(value, target)
    except DeserError as exc:
        exc.push(segment)
        raise


def _from_scalar(value: Value, target: type) -> Any:
    if target is str:
        got: Any = value.as_str()
    elif target is bool:
        got = value.as_bool()
    elif target is int:
        got = value.as_int()
    else:
        got = value.as_float()
        if got is None:
            as_int = value.as_int()
            got = float(as_int) if as_int is not None else None
    if got is None:
        raise TypeMismatch(_SCALAR_NAMES[target], value.kind)
    return got


def _from_union(value: Value, target: Any) -> Any:
    args = get_args(target)
    members = [a for a in args if a is not _NONE_TYPE]
    optional = len(members) != len(args)
    if optional and value.is_null():
        return None
    if set(members) == set(VALUE_TYPES):
        return value
    if len(members) != 1:
        raise TypeError(f"only Optional[T] unions are supported, got {target!r}")
    if not optional:
        raise TypeError(f"cannot deserialize into {target!r}")
    return deserialize(value, members[0])


def _from_sequence(value: Value, target: Any, container: type) -> Any:
    items = value.as_sequence()
    if items is None:
        raise TypeMismatch(VList.kind, value.kind)
    args = get_args(target)
    if container is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
        raise TypeError(f"only variable-length tuples are supported, got {target!r}")
    item_type = args[0] if args else Value
    out = [_descend(item, i, item_type) for i, item in enumerate(items)]
    return tuple(out) if container is tuple else out


def _from_mapping(value: Value, target: Any) -> dict[str, Any]:
    mapping = value.as_mapping()
    if mapping is None:
        raise TypeMismatch(VDict.kind, value.kind)
    args = get_args(target)
    if args and args[0] is not str:
        raise TypeError(f"mapping keys are always str, got {target!r}")
    value_type = args[1] if args else Value
    return {k: _descend(v, k, value_type) for k, v in mapping.entries}


def _from_dataclass(value: Value, cls: type) -> Any:
    """Build dataclass *cls*; fields with defaults or Optional hints may be absent.

    A field's key defaults to its name; ``metadata={"key": ...}`` overrides it.
    """
    if value.as_mapping() is None:
        raise TypeMismatch(VDict.kind, value.kind)
    try:
        hints = get_type_hints(cls)
    except NameError as exc:
        raise TypeError(f"cannot resolve annotations of {cls!r}") from exc
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        key = f.metadata.get("key", f.name)
        hint = hints[f.name]
        has_default = (
            f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING
        )
        if has_default or _is_optional(hint):
            got = optional_field(value, key, hint, default=_ABSENT)
            if got is not _ABSENT:
                kwargs[f.name] = got
            elif not has_default:
                kwargs[f.name] = None
        else:
            kwargs[f.name] = field(value, key, hint)
    return cls(**kwargs)


def _is_optional(hint: Any) -> bool:
    origin = get_origin(hint)
    return (origin is Union or origin is types.UnionType) and _NONE_TYPE in get_args(hint)

