"""Command-line inspector for YAML Core documents.

Provides the ``yaml-core`` entry point via ``main()``::

    yaml-core config.yaml                 # indented tree
    yaml-core config.yaml --get db.port   # one value
    yaml-core - --json < config.yaml      # JSON on stdout
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import IO, Sequence

from .errors import YamlCoreError
from .getter import get_path
from .options import DEFAULT_MAX_DEPTH, ParseOptions
from .parser import parse, parse_file
from .values import Value, VDict, VList, VText, _NullType, to_python

LOG = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value) -> str:
    """Format a single value for compact one-line display."""
    if isinstance(value, VText):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, VList):
        return "[" + ", ".join(_fmt_inline(v) for v in value.items) + "]"
    if isinstance(value, VDict):
        return "{" + ", ".join(f"{k}: {_fmt_inline(v)}" for k, v in value.entries) + "}"
    return str(value)


def _fmt_inspect(value: Value, indent: int = 0) -> str:
    """Pretty-print a value tree, one scalar per line."""
    pad = "  " * indent
    if isinstance(value, VDict):
        if not value.entries:
            return pad + "{}"
        lines = []
        for k, v in value.entries:
            if isinstance(v, (VDict, VList)) and len(v):
                lines.append(f"{pad}{k}:")
                lines.append(_fmt_inspect(v, indent + 1))
            else:
                lines.append(f"{pad}{k}: {_fmt_inline(v)}")
        return "\n".join(lines)

    if isinstance(value, VList):
        if not value.items:
            return pad + "[]"
        lines = []
        for i, v in enumerate(value.items):
            if isinstance(v, (VDict, VList)) and len(v):
                lines.append(f"{pad}[{i}]")
                lines.append(_fmt_inspect(v, indent + 1))
            else:
                lines.append(f"{pad}[{i}] {_fmt_inline(v)}")
        return "\n".join(lines)

    if isinstance(value, _NullType):
        return pad + "null"
    return pad + _fmt_inline(value)


def _render(value: Value, as_json: bool) -> str:
    if as_json:
        return json.dumps(to_python(value), indent=2, ensure_ascii=False)
    return _fmt_inspect(value)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="yaml-core",
        description="Parse a block-style YAML document and print its value tree.",
    )
    p.add_argument("file", nargs="?", default="-", help="Document path, or '-' for stdin (default)")
    p.add_argument("--get", metavar="PATH", default=None, help="Print only the value at PATH, e.g. server.listeners[0].port")
    p.add_argument("--json", action="store_true", help="Print JSON instead of the indented tree")
    p.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, help=f"Maximum nesting depth (default: {DEFAULT_MAX_DEPTH})")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return p


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def run(
    argv: Sequence[str] | None = None,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
) -> int:
    """Run the command and return its exit status."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)
    label = "<stdin>" if args.file == "-" else args.file

    try:
        options = ParseOptions(max_depth=args.max_depth)
        if args.file == "-":
            tree = parse(stdin.read(), options)
        else:
            tree = parse_file(args.file, options)
        if args.get is not None:
            tree = get_path(tree, args.get)
    except OSError as exc:
        print(f"Error reading '{label}': {exc}", file=stderr)
        return 1
    except (YamlCoreError, ValueError) as exc:
        LOG.debug("failed to process %s", label, exc_info=True)
        print(f"{label}: {exc}", file=stderr)
        return 1

    print(_render(tree, args.json), file=stdout)
    return 0


def main() -> None:
    """``yaml-core`` / ``python -m yaml_core.cli``."""
    sys.exit(run())


if __name__ == "__main__":
    main()
