"""Parser: rebuilds the block structure of a document from its indentation.

``parse`` scans the text into lines and walks them with a recursive-descent
``_Parser``.  Each ``_parse_block`` call owns exactly one indentation level;
the first line of a block fixes its indent and its shape (sequence, mapping
or scalar).
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import (
    DuplicateKey,
    InconsistentIndentation,
    TooDeeplyNested,
    UnexpectedToken,
)
from .options import ParseOptions
from .scalars import atom_to_value, is_sequence_item, split_key
from .scanner import ScannedLine, scan
from .values import Null, Value, VDict, VList

LOG = logging.getLogger(__name__)

_DOCUMENT_START = "---"
_DOCUMENT_END = "..."


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def parse(text: str, options: ParseOptions | None = None) -> Value:
    """Parse *text* and return its value tree.

    Raises LexError or ParseError on the first problem found.
    """
    lines = scan(text)
    LOG.debug("scanned %d structural lines", len(lines))
    return _Parser(lines, options or ParseOptions()).parse_document()


def parse_file(
    path: Path | str,
    options: ParseOptions | None = None,
    encoding: str = "utf-8",
) -> Value:
    """Read *path* and parse its contents."""
    path_obj = Path(path)
    LOG.debug("parsing %s", path_obj)
    return parse(path_obj.read_text(encoding=encoding), options)


# ---------------------------------------------------------------------------
# _Parser
# ---------------------------------------------------------------------------

class _Parser:
    def __init__(self, lines: list[ScannedLine], options: ParseOptions) -> None:
        # Copied: compact "- key: v" items rewrite the current line in place.
        self.lines = list(lines)
        self.pos = 0
        self.max_depth = options.max_depth

    # -- Cursor ---------------------------------------------------------

    def _peek(self) -> ScannedLine | None:
        if self.pos < len(self.lines):
            return self.lines[self.pos]
        return None

    # -- Document -------------------------------------------------------

    def parse_document(self) -> Value:
        first = self._peek()
        if first is not None and first.content == _DOCUMENT_START and first.indent == 0:
            self.pos += 1
        first = self._peek()
        if first is None:
            return Null

        root = self._parse_block(depth=1)

        leftover = self._peek()
        if leftover is not None:
            if leftover.content in (_DOCUMENT_START, _DOCUMENT_END):
                raise UnexpectedToken(leftover.line, leftover.content)
            if isinstance(root, (VDict, VList)):
                raise InconsistentIndentation(leftover.line)
            raise UnexpectedToken(leftover.line, leftover.content)
        return root

    # -- Blocks ---------------------------------------------------------

    def _parse_block(self, depth: int) -> Value:
        """Parse the block starting at the current line."""
        line = self.lines[self.pos]
        if depth > self.max_depth:
            raise TooDeeplyNested(line.line)
        if is_sequence_item(line.content):
            return self._parse_sequence(line.indent, depth, in_mapping=False)
        if split_key(line.content, line.line) is not None:
            return self._parse_mapping(line.indent, depth)
        return self._parse_scalar_line(line)

    def _parse_scalar_line(self, line: ScannedLine) -> Value:
        self.pos += 1
        nxt = self._peek()
        if nxt is not None and nxt.indent == line.indent:
            raise UnexpectedToken(nxt.line, nxt.content)
        return atom_to_value(line.content, line.line)

    def _parse_mapping(self, indent: int, depth: int) -> VDict:
        entries: list[tuple[str, Value]] = []
        seen: set[str] = set()
        while (line := self._peek()) is not None:
            if line.indent < indent:
                break
            if line.indent > indent:
                raise InconsistentIndentation(line.line)
            if is_sequence_item(line.content):
                raise UnexpectedToken(line.line, "-")
            kv = split_key(line.content, line.line)
            if kv is None:
                raise UnexpectedToken(line.line, line.content)
            key, rest = kv
            if key in seen:
                raise DuplicateKey(key, line.line)
            seen.add(key)
            self.pos += 1
            if rest:
                value = atom_to_value(rest, line.line)
            else:
                value = self._parse_nested(indent, depth, in_mapping=True)
            entries.append((key, value))
        return VDict(tuple(entries))

    def _parse_sequence(self, indent: int, depth: int, in_mapping: bool) -> VList:
        items: list[Value] = []
        while (line := self._peek()) is not None:
            if line.indent < indent:
                break
            if line.indent > indent:
                raise InconsistentIndentation(line.line)
            if not is_sequence_item(line.content):
                if in_mapping:
                    # "key:\n- a\nnext: b": the sequence ends, the mapping goes on
                    break
                raise UnexpectedToken(line.line, line.content)
            items.append(self._parse_item(line, depth))
        return VList(tuple(items))

    def _parse_item(self, line: ScannedLine, depth: int) -> Value:
        rest = line.content[1:].lstrip(" ")
        if not rest:
            self.pos += 1
            return self._parse_nested(line.indent, depth, in_mapping=False)
        if is_sequence_item(rest) or split_key(rest, line.line) is not None:
            # Compact form: re-read the remainder as the first line of a
            # block indented at the column where it starts.
            column = line.indent + len(line.content) - len(rest)
            self.lines[self.pos] = ScannedLine(indent=column, content=rest, line=line.line)
            if depth + 1 > self.max_depth:
                raise TooDeeplyNested(line.line)
            if is_sequence_item(rest):
                return self._parse_sequence(column, depth + 1, in_mapping=False)
            return self._parse_mapping(column, depth + 1)
        self.pos += 1
        return atom_to_value(rest, line.line)

    def _parse_nested(self, parent_indent: int, depth: int, in_mapping: bool) -> Value:
        """Value of a ``key:`` or ``-`` whose content continues on the next lines."""
        nxt = self._peek()
        if nxt is None:
            return Null
        if nxt.indent > parent_indent:
            return self._parse_block(depth + 1)
        if in_mapping and nxt.indent == parent_indent and is_sequence_item(nxt.content):
            if depth + 1 > self.max_depth:
                raise TooDeeplyNested(nxt.line)
            return self._parse_sequence(parent_indent, depth + 1, in_mapping=True)
        return Null
