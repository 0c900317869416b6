"""Document tree for JSONC text and the builder that produces it.

The builder walks the token list with one token of lookahead. Comments are
never part of the grammar: every run of comments between two significant
tokens (a "gap") is collected and split in two. Comments that sit on the same
line as the previous token trail that token; the rest lead the next one.

Each container decides its layout once, here, from its own gaps only: a
newline or a comment anywhere between its direct tokens makes it MULTILINE.
Nested containers decide independently.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional

from .errors import ParseError, ParseErrorKind
from .lexer import Token, TokenKind
from .logger import get_logger

log = get_logger("document")


class NodeKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class Layout(Enum):
    INLINE = "inline"
    MULTILINE = "multiline"


class Placement(Enum):
    LEADING = "leading"
    TRAILING = "trailing"


_SCALARS = {
    TokenKind.NULL: NodeKind.NULL,
    TokenKind.TRUE: NodeKind.BOOL,
    TokenKind.FALSE: NodeKind.BOOL,
    TokenKind.NUMBER: NodeKind.NUMBER,
    TokenKind.STRING: NodeKind.STRING,
}


@dataclass
class Comment:
    """A comment and where it sits relative to the token it is attached to.

    Attributes:
        text:         Verbatim comment text including its delimiters.
        placement:    TRAILING (same line, after the token) or LEADING (own
                      line); the printer emits the comment accordingly.
        blank_before: At least one blank line preceded it in the source.
        column:       Source column, used to re-indent block comment lines.
    """

    text: str
    placement: Placement
    blank_before: bool = False
    column: int = 0

    @property
    def is_line(self) -> bool:
        return self.text.startswith("//")


@dataclass
class Mark:
    """A `,` or `:` together with the comments attached to it."""

    leading: List[Comment] = field(default_factory=list)
    trailing: List[Comment] = field(default_factory=list)
    blank_before: bool = False


@dataclass
class Node:
    """A JSON value.

    Scalars only use `text`. Containers use `members` and the container
    fields; `leading` belongs to the opening bracket and `trailing` to the
    closing one.
    """

    kind: NodeKind
    text: str = ""
    leading: List[Comment] = field(default_factory=list)
    trailing: List[Comment] = field(default_factory=list)
    blank_before: bool = False
    members: List["Member"] = field(default_factory=list)
    open_comments: List[Comment] = field(default_factory=list)
    close_comments: List[Comment] = field(default_factory=list)
    trailing_comma: bool = False
    layout: Layout = Layout.INLINE

    @property
    def is_container(self) -> bool:
        return self.kind in (NodeKind.ARRAY, NodeKind.OBJECT)


@dataclass
class Member:
    """One array element or object entry."""

    value: Node
    key: Optional[Node] = None
    colon: Optional[Mark] = None
    comma: Optional[Mark] = None

    @property
    def head(self) -> Node:
        return self.key if self.key is not None else self.value


@dataclass
class Document:
    root: Node
    comments: List[Comment] = field(default_factory=list)  # after the root value


class Gap(NamedTuple):
    trailing: List[Comment]
    leading: List[Comment]
    breaks: bool  # a newline or a comment sits in the gap
    blank: bool   # blank line right before the next significant token


class DocumentBuilder:
    """Builds a Document from lexer tokens.

    With `strip=True` comments are discarded while gaps are read and trailing
    commas are not recorded, so neither can affect layout.
    """

    def __init__(self, tokens: List[Token], source: str = "", strip: bool = False):
        self._tokens = tokens
        self._source = source
        self._strip = strip
        self._i = 0
        self._seen_token = False
        self._containers = 0
        self._multiline = 0

    # ---- token access -------------------------------------------------
    def _peek(self) -> Optional[Token]:
        return self._tokens[self._i] if self._i < len(self._tokens) else None

    def _advance(self) -> Token:
        tok = self._tokens[self._i]
        self._i += 1
        self._seen_token = True
        return tok

    def _fail(self, expected: str) -> ParseError:
        tok = self._peek()
        if tok is None:
            return ParseError(ParseErrorKind.UNEXPECTED_EOF, len(self._source), self._source,
                              expected, "end of input")
        return ParseError(ParseErrorKind.UNEXPECTED_TOKEN, tok.offset, self._source,
                          expected, tok.describe())

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        tok = self._peek()
        if tok is None or tok.kind is not kind:
            raise self._fail(expected)
        return self._advance()

    def _at(self, kind: TokenKind) -> bool:
        tok = self._peek()
        return tok is not None and tok.kind is kind

    def _gap(self) -> Gap:
        trailing: List[Comment] = []
        leading: List[Comment] = []
        newline = False
        dropped_blank = False
        tok = self._peek()
        while tok is not None and tok.is_comment:
            self._i += 1
            newline = newline or tok.newlines_before > 0
            if self._strip:
                dropped_blank = dropped_blank or tok.newlines_before >= 2
            elif not newline and self._seen_token:
                trailing.append(Comment(tok.text, Placement.TRAILING, False, tok.column))
            else:
                leading.append(Comment(tok.text, Placement.LEADING, tok.newlines_before >= 2, tok.column))
            tok = self._peek()
        blank = False
        if tok is not None:
            newline = newline or tok.newlines_before > 0
            blank = tok.newlines_before >= 2 or dropped_blank
        return Gap(trailing, leading, newline or bool(trailing or leading), blank)

    # ---- grammar --------------------------------------------------------
    def build(self) -> Document:
        gap = self._gap()
        if self._peek() is None:
            raise ParseError(ParseErrorKind.EMPTY_INPUT, len(self._source), self._source)
        root = self._value(gap)
        gap = self._gap()
        root.trailing.extend(gap.trailing)
        tok = self._peek()
        if tok is not None:
            raise ParseError(ParseErrorKind.TRAILING_DATA_AFTER_ROOT, tok.offset, self._source,
                             "end of input", tok.describe())
        log.debug("built %s root: %d containers, %d multiline",
                  root.kind.value, self._containers, self._multiline)
        return Document(root, gap.leading)

    def _value(self, gap: Gap) -> Node:
        tok = self._peek()
        if tok is None:
            raise self._fail("a value")
        if tok.kind in _SCALARS:
            self._advance()
            return Node(_SCALARS[tok.kind], tok.text, gap.leading, blank_before=gap.blank)
        if tok.kind is TokenKind.LBRACKET:
            node = Node(NodeKind.ARRAY, leading=gap.leading, blank_before=gap.blank)
        elif tok.kind is TokenKind.LBRACE:
            node = Node(NodeKind.OBJECT, leading=gap.leading, blank_before=gap.blank)
        else:
            raise self._fail("a value")
        self._advance()
        self._container(node)
        return node

    def _container(self, node: Node) -> None:
        is_object = node.kind is NodeKind.OBJECT
        close = TokenKind.RBRACE if is_object else TokenKind.RBRACKET
        expected_sep = "',' or '}'" if is_object else "',' or ']'"

        gap = self._gap()
        node.open_comments = gap.trailing
        multiline = gap.breaks
        if self._at(close):
            node.close_comments = gap.leading
            self._advance()
            self._finish(node, bool(node.open_comments or node.close_comments))
            return

        while True:
            if is_object:
                if not self._at(TokenKind.STRING):
                    raise self._fail("a string key" if node.members else "a string key or '}'")
                key = self._value(gap)
                gap = self._gap()
                multiline = multiline or gap.breaks
                key.trailing.extend(gap.trailing)
                self._expect(TokenKind.COLON, "':'")
                colon = Mark(gap.leading, blank_before=gap.blank)
                gap = self._gap()
                multiline = multiline or gap.breaks
                colon.trailing = gap.trailing
                member = Member(self._value(gap), key, colon)
            else:
                member = Member(self._value(gap))
            node.members.append(member)

            gap = self._gap()
            multiline = multiline or gap.breaks
            member.value.trailing.extend(gap.trailing)
            if self._at(close):
                node.close_comments = gap.leading
                self._advance()
                break
            self._expect(TokenKind.COMMA, expected_sep)
            member.comma = Mark(gap.leading, blank_before=gap.blank)
            gap = self._gap()
            multiline = multiline or gap.breaks
            member.comma.trailing = gap.trailing
            if self._at(close):
                if self._strip:
                    member.comma = None
                else:
                    node.trailing_comma = True
                node.close_comments = gap.leading
                self._advance()
                break

        self._finish(node, multiline)

    def _finish(self, node: Node, multiline: bool) -> None:
        node.layout = Layout.MULTILINE if multiline else Layout.INLINE
        self._containers += 1
        self._multiline += multiline


def build_document(tokens: List[Token], source: str = "", strip: bool = False) -> Document:
    """Build the document tree for `tokens`; `source` is only used for error positions."""
    return DocumentBuilder(tokens, source, strip).build()
