"""YAML Core: block-style YAML subset parser with typed deserialization."""

from .deserialize import FromValue, deserialize, field, optional_field, parse_to
from .errors import (
    DeserError,
    DuplicateKey,
    InconsistentIndentation,
    LexError,
    MissingKey,
    ParseError,
    TabIndentation,
    TooDeeplyNested,
    TypeMismatch,
    UnexpectedToken,
    UnterminatedQuote,
    YamlCoreError,
)
from .getter import get_path
from .options import ParseOptions
from .parser import parse, parse_file
from .path import FieldPath
from .scanner import ScannedLine, scan
from .values import (
    Null,
    Value,
    VBool,
    VDict,
    VFloat,
    VInt,
    VList,
    VText,
    _NullType,
    to_python,
)

__all__ = [
    "parse",
    "parse_file",
    "parse_to",
    "deserialize",
    "field",
    "optional_field",
    "get_path",
    "to_python",
    "scan",
    "ScannedLine",
    "FromValue",
    "FieldPath",
    "ParseOptions",
    "Null",
    "Value",
    "VBool",
    "VDict",
    "VFloat",
    "VInt",
    "VList",
    "VText",
    "YamlCoreError",
    "LexError",
    "TabIndentation",
    "UnterminatedQuote",
    "ParseError",
    "InconsistentIndentation",
    "DuplicateKey",
    "UnexpectedToken",
    "TooDeeplyNested",
    "DeserError",
    "MissingKey",
    "TypeMismatch",
]
