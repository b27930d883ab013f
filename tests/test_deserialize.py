"""Tests for the deserialization layer."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dc_field
from typing import Optional

import pytest

from yaml_core import (
    FromValue,
    MissingKey,
    TypeMismatch,
    Value,
    deserialize,
    field,
    optional_field,
    parse,
    parse_to,
)
from yaml_core.values import Null, VBool, VDict, VFloat, VInt, VList, VText


# ---------------------------------------------------------------------------
# Hand-written FromValue implementations
# ---------------------------------------------------------------------------

@dataclass
class Database:
    host: str
    port: int

    @classmethod
    def from_value(cls, value: Value) -> Database:
        return cls(host=field(value, "host", str), port=field(value, "port", int))


@dataclass
class Server:
    port: int

    @classmethod
    def from_value(cls, value: Value) -> Server:
        return cls(port=field(value, "port", int))


@dataclass
class Config:
    database: Database
    server: Server

    @classmethod
    def from_value(cls, value: Value) -> Config:
        return cls(
            database=field(value, "database", Database),
            server=field(value, "server", Server),
        )


class Host:
    def __init__(self, host: str, email: str | None) -> None:
        self.host = host
        self.email = email

    @classmethod
    def from_value(cls, value: Value) -> Host:
        return cls(field(value, "host", str), optional_field(value, "email", str))


# ---------------------------------------------------------------------------
# Derived (dataclass) targets
# ---------------------------------------------------------------------------

@dataclass
class Listener:
    port: int
    name: str = "default"


@dataclass
class ServerSpec:
    listeners: list[Listener]
    timeout: Optional[float]
    max_connections: int = dc_field(default=100, metadata={"key": "max-connections"})
    tags: list[str] = dc_field(default_factory=list)


# ---------------------------------------------------------------------------
# Built-in targets
# ---------------------------------------------------------------------------

def test_scalars():
    assert deserialize(VText("hi"), str) == "hi"
    assert deserialize(VInt(42), int) == 42
    assert deserialize(VFloat(1.5), float) == 1.5
    assert deserialize(VBool(True), bool) is True

def test_int_widens_to_float():
    got = deserialize(VInt(3), float)
    assert got == 3.0
    assert isinstance(got, float)

def test_float_does_not_narrow_to_int():
    with pytest.raises(TypeMismatch):
        deserialize(VFloat(3.0), int)

def test_bool_is_not_int():
    with pytest.raises(TypeMismatch) as exc:
        deserialize(VBool(True), int)
    assert exc.value.expected == "int"
    assert exc.value.found == "bool"

def test_no_string_coercion():
    with pytest.raises(TypeMismatch) as exc:
        deserialize(VText("30"), int)
    assert exc.value.expected == "int"
    assert exc.value.found == "string"
    assert str(exc.value.path) == ""

def test_optional():
    assert deserialize(Null, Optional[int]) is None
    assert deserialize(VInt(1), Optional[int]) == 1
    assert deserialize(Null, int | None) is None

def test_null_into_required_type():
    with pytest.raises(TypeMismatch) as exc:
        deserialize(Null, str)
    assert exc.value.found == "null"

def test_list():
    assert deserialize(parse("- 1\n- 2\n- 3"), list[int]) == [1, 2, 3]

def test_tuple():
    assert deserialize(parse("- a\n- b"), tuple[str, ...]) == ("a", "b")

def test_list_element_error_has_index():
    with pytest.raises(TypeMismatch) as exc:
        deserialize(parse("- 1\n- x\n- 3"), list[int])
    assert exc.value.path.segments == (1,)
    assert str(exc.value) == "[1]: expected int, found string"

def test_list_from_mapping():
    with pytest.raises(TypeMismatch) as exc:
        deserialize(parse("a: 1"), list[int])
    assert exc.value.expected == "sequence"
    assert exc.value.found == "mapping"

def test_dict_of_values():
    got = deserialize(parse("a: 1\nb: x"), dict[str, Value])
    assert got == {"a": VInt(1), "b": VText("x")}

def test_dict_of_typed_values():
    with pytest.raises(TypeMismatch) as exc:
        deserialize(parse("a: 1\nb: x"), dict[str, int])
    assert str(exc.value.path) == "b"

def test_value_target_is_identity():
    tree = parse("a: 1")
    assert deserialize(tree, Value) is tree

def test_value_variant_target():
    tree = parse("a: 1")
    assert deserialize(tree, VDict) is tree
    with pytest.raises(TypeMismatch) as exc:
        deserialize(tree, VList)
    assert exc.value.expected == "sequence"

def test_unsupported_target_is_type_error():
    with pytest.raises(TypeError):
        deserialize(VInt(1), set[int])
    with pytest.raises(TypeError):
        deserialize(VInt(1), int | str)


# ---------------------------------------------------------------------------
# field / optional_field
# ---------------------------------------------------------------------------

def test_field_missing_key_at_root():
    with pytest.raises(MissingKey) as exc:
        field(VDict(), "host", str)
    assert exc.value.key == "host"
    assert str(exc.value.path) == ""

def test_field_on_non_mapping():
    with pytest.raises(TypeMismatch) as exc:
        field(VList(), "host")
    assert exc.value.expected == "mapping"
    assert exc.value.found == "sequence"

def test_field_default_target_returns_value():
    assert field(parse("a: 1"), "a") == VInt(1)

def test_field_explicit_null_is_not_missing():
    with pytest.raises(TypeMismatch) as exc:
        field(parse("host: null"), "host", str)
    assert str(exc.value.path) == "host"

def test_optional_field_absent_or_null():
    assert optional_field(VDict(), "email", str) is None
    assert optional_field(parse("email: ~"), "email", str) is None
    assert optional_field(VDict(), "port", int, default=80) == 80

def test_optional_field_present():
    assert optional_field(parse("email: a@b.c"), "email", str) == "a@b.c"

def test_optional_field_wrong_type_still_fails():
    with pytest.raises(TypeMismatch) as exc:
        optional_field(parse("port: high"), "port", int)
    assert str(exc.value.path) == "port"

def test_optional_field_on_non_mapping():
    with pytest.raises(TypeMismatch):
        optional_field(VInt(1), "x")


# ---------------------------------------------------------------------------
# User types
# ---------------------------------------------------------------------------

def test_config_scenario():
    text = "database:\n  host: localhost\n  port: 5432\nserver:\n  port: 8080"
    cfg = parse_to(text, Config)
    assert cfg.database.host == "localhost"
    assert cfg.database.port == 5432
    assert cfg.server.port == 8080

def test_missing_required_field_in_empty_mapping():
    with pytest.raises(MissingKey) as exc:
        deserialize(VDict(), Host)
    assert exc.value.key == "host"
    assert str(exc.value.path) == ""

def test_optional_field_absent_in_user_type():
    host = parse_to("host: db", Host)
    assert host.host == "db"
    assert host.email is None

def test_nested_missing_key_path():
    with pytest.raises(MissingKey) as exc:
        parse_to("database:\n  port: 1\nserver:\n  port: 2", Config)
    assert exc.value.key == "host"
    assert str(exc.value.path) == "database"
    assert str(exc.value) == "database: missing key 'host'"

def test_nested_type_mismatch_path():
    with pytest.raises(TypeMismatch) as exc:
        parse_to("database:\n  host: h\n  port: \"5432\"\nserver:\n  port: 2", Config)
    assert str(exc.value.path) == "database.port"

def test_user_type_satisfies_protocol():
    assert isinstance(Config, FromValue)
    assert not isinstance(int, FromValue)


# ---------------------------------------------------------------------------
# Dataclass derivation
# ---------------------------------------------------------------------------

def test_dataclass_derivation():
    text = (
        "listeners:\n"
        "  - port: 80\n"
        "    name: http\n"
        "  - port: 443\n"
        "timeout: 2\n"
        "max-connections: 5\n"
    )
    spec = parse_to(text, ServerSpec)
    assert spec.listeners == [Listener(port=80, name="http"), Listener(port=443)]
    assert spec.timeout == 2.0
    assert spec.max_connections == 5
    assert spec.tags == []

def test_dataclass_optional_without_default():
    spec = parse_to("listeners:\n  - port: 1", ServerSpec)
    assert spec.timeout is None
    assert spec.max_connections == 100

def test_dataclass_deep_error_path():
    text = (
        "listeners:\n"
        "  - port: 80\n"
        "  - port: 81\n"
        "  - port: eighty-two\n"
    )
    with pytest.raises(TypeMismatch) as exc:
        parse_to(text, ServerSpec)
    assert str(exc.value.path) == "listeners[2].port"

def test_dataclass_missing_required():
    with pytest.raises(MissingKey) as exc:
        parse_to("timeout: 1.5", ServerSpec)
    assert exc.value.key == "listeners"

def test_dataclass_from_scalar():
    with pytest.raises(TypeMismatch) as exc:
        parse_to("just text", Listener)
    assert exc.value.expected == "mapping"
    assert exc.value.found == "string"

@dataclass
class Plugin:
    name: str
    extra: Value | None = None

def test_optional_value_target():
    assert deserialize(VInt(1), Optional[Value]) == VInt(1)
    assert deserialize(Null, Optional[Value]) is None
    assert deserialize(Null, Value) is Null

def test_dataclass_optional_value_field():
    plugin = parse_to("name: a\nextra:\n  k: 1", Plugin)
    assert plugin.extra == VDict((("k", VInt(1)),))
    assert parse_to("name: b", Plugin).extra is None

def test_dataclass_unresolvable_annotation():
    class Local:
        pass

    @dataclass
    class Holder:
        inner: Local

    with pytest.raises(TypeError, match="cannot resolve annotations"):
        parse_to("inner: 1", Holder)
