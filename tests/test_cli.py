"""Tests for CLI helpers: _fmt_inline, _fmt_inspect, run."""

import io
import json

import pytest

from yaml_core import Null, VBool, VDict, VFloat, VInt, VList, VText
from yaml_core.cli import _fmt_inline, _fmt_inspect, run


# ---------------------------------------------------------------------------
# _fmt_inline
# ---------------------------------------------------------------------------

def test_fmt_inline_text():
    assert _fmt_inline(VText("hello")) == '"hello"'

def test_fmt_inline_scalars():
    assert _fmt_inline(VInt(42)) == "42"
    assert _fmt_inline(VFloat(3.14)) == "3.14"
    assert _fmt_inline(VBool(False)) == "false"
    assert _fmt_inline(Null) == "null"

def test_fmt_inline_collections():
    value = VDict((("a", VList((VInt(1), VText("x")))),))
    assert _fmt_inline(value) == '{a: [1, "x"]}'


# ---------------------------------------------------------------------------
# _fmt_inspect
# ---------------------------------------------------------------------------

def test_fmt_inspect_nested():
    value = VDict((
        ("name", VText("Joe")),
        ("ports", VList((VInt(80), VInt(443)))),
        ("empty", VList()),
    ))
    assert _fmt_inspect(value) == (
        'name: "Joe"\n'
        "ports:\n"
        "  [0] 80\n"
        "  [1] 443\n"
        "empty: []"
    )

def test_fmt_inspect_sequence_of_mappings():
    value = VList((VDict((("a", VInt(1)),)),))
    assert _fmt_inspect(value) == "[0]\n  a: 1"

def test_fmt_inspect_scalar():
    assert _fmt_inspect(VText("hi")) == '"hi"'
    assert _fmt_inspect(Null) == "null"

def test_fmt_inspect_empty_mapping():
    assert _fmt_inspect(VDict()) == "{}"


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

def _run(argv, stdin_text=""):
    out, err = io.StringIO(), io.StringIO()
    code = run(argv, stdin=io.StringIO(stdin_text), stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


def test_run_stdin_inspect():
    code, out, err = _run([], "a: 1\nb:\n  - x\n")
    assert code == 0
    assert out == 'a: 1\nb:\n  [0] "x"\n'
    assert err == ""

def test_run_file_json(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("server:\n  port: 8080\n  debug: true\n", encoding="utf-8")
    code, out, _ = _run([str(path), "--json"])
    assert code == 0
    assert json.loads(out) == {"server": {"port": 8080, "debug": True}}

def test_run_get():
    code, out, _ = _run(["-", "--get", "server.ports[1]"], "server:\n  ports:\n    - 80\n    - 443\n")
    assert code == 0
    assert out.strip() == "443"

def test_run_parse_error():
    code, out, err = _run(["-"], "a: 1\na: 2\n")
    assert code == 1
    assert out == ""
    assert err.strip() == "<stdin>: line 2: duplicate key 'a'"

def test_run_max_depth():
    code, _, err = _run(["--max-depth", "1"], "a:\n  b: 1\n")
    assert code == 1
    assert "nested too deeply" in err

def test_run_bad_path_expression():
    code, _, err = _run(["--get", "a..b"], "a: 1\n")
    assert code == 1
    assert "malformed path" in err

def test_run_missing_file(tmp_path):
    code, _, err = _run([str(tmp_path / "nope.yaml")])
    assert code == 1
    assert "Error reading" in err

def test_run_invalid_max_depth():
    code, _, err = _run(["--max-depth", "0"], "a: 1\n")
    assert code == 1
    assert "max_depth" in err

def test_run_file_parse_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("a: 1\n\tb: 2\n", encoding="utf-8")
    code, _, err = _run([str(path)])
    assert code == 1
    assert str(path) in err
