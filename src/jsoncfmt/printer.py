from __future__ import annotations
from typing import List

from .document import Comment, Document, Layout, Mark, Member, Node, NodeKind, Placement

INDENT_SIZE = 2

# ------------------------------ Output buffer ------------------------------
class _Out:
    """Text buffer that defers line breaks until the next piece of text.

    Deferring lets the indentation of a line follow the depth at the time its
    first text is written, and lets a blank-line request upgrade a pending
    break. Breaks requested before any text are dropped.
    """

    def __init__(self, indent: int):
        self.parts: List[str] = []
        self.indent = indent
        self.depth = 0
        self.pending = 0

    def newline(self, blank: bool = False) -> None:
        self.pending = max(self.pending, 2 if blank else 1)

    def blank_if_breaking(self, blank: bool) -> None:
        if blank and self.pending:
            self.pending = 2

    def column(self) -> int:
        return self.depth * self.indent if self.parts else 0

    def text(self, s: str, space: bool = False) -> None:
        if self.pending:
            if self.parts:
                self.parts.append("\n" * self.pending + " " * self.column())
            self.pending = 0
        elif space and self.parts:
            self.parts.append(" ")
        self.parts.append(s)

# ------------------------------ Layout engine ------------------------------
def _reindent(comment: Comment, column: int) -> str:
    lines = comment.text.split("\n")
    if len(lines) == 1:
        return comment.text
    delta = column - comment.column
    out = [lines[0].rstrip()]
    for line in lines[1:]:
        line = line.rstrip()
        if delta >= 0:
            out.append(" " * delta + line if line else line)
        else:
            spaces = len(line) - len(line.lstrip(" "))
            out.append(line[min(spaces, -delta):])
    return "\n".join(out)

class Printer:
    def __init__(self, indent: int = INDENT_SIZE):
        self._out = _Out(indent)

    def print(self, document: Document) -> str:
        self._value(document.root)
        self._comments(document.comments)
        return "".join(self._out.parts) + "\n"

    # ---- comments ----------------------------------------------------------
    def _comments(self, comments: List[Comment]) -> None:
        for c in comments:
            if c.placement is Placement.TRAILING:
                self._trailing(c)
            else:
                self._leading(c)

    def _leading(self, c: Comment) -> None:
        self._out.newline(c.blank_before)
        self._out.text(_reindent(c, self._out.column()))
        self._out.newline()

    def _trailing(self, c: Comment) -> None:
        self._out.text("\n".join(line.rstrip() for line in c.text.split("\n")), space=True)
        if c.is_line:
            self._out.newline()

    def _mark(self, mark: Mark, symbol: str) -> None:
        self._comments(mark.leading)
        self._out.blank_if_breaking(mark.blank_before)
        self._out.text(symbol)
        self._comments(mark.trailing)

    # ---- values ------------------------------------------------------------
    def _value(self, node: Node, space: bool = False) -> None:
        self._comments(node.leading)
        self._out.blank_if_breaking(node.blank_before)
        if node.is_container:
            self._container(node, space)
        else:
            self._out.text(node.text, space)
        self._comments(node.trailing)

    def _member(self, member: Member, space: bool) -> None:
        if member.key is not None:
            self._value(member.key, space)
            self._mark(member.colon or Mark(), ":")
            self._value(member.value, space=True)
        else:
            self._value(member.value, space)
        if member.comma is not None:
            self._mark(member.comma, ",")

    def _container(self, node: Node, space: bool) -> None:
        padded = node.kind is NodeKind.OBJECT
        opening, closing = ("{", "}") if padded else ("[", "]")
        self._out.text(opening, space)
        self._comments(node.open_comments)
        multiline = node.layout is Layout.MULTILINE

        self._out.depth += 1
        for i, member in enumerate(node.members):
            if multiline:
                self._out.newline()
            self._member(member, space=not multiline and (padded or i > 0))
        self._comments(node.close_comments)
        self._out.depth -= 1

        if multiline:
            self._out.newline()
        self._out.text(closing, space=not multiline and padded and bool(node.members))

def print_document(document: Document, indent: int = INDENT_SIZE) -> str:
    """Render `document` as formatted text ending in a single newline."""
    return Printer(indent).print(document)
