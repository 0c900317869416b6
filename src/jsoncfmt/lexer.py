from __future__ import annotations
import re
from enum import Enum
from typing import List, NamedTuple

from .errors import LexError, LexErrorKind
from .logger import get_logger

log = get_logger("lexer")

# ------------------------------ Tokens ------------------------------
class TokenKind(Enum):
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    COLON = ":"
    COMMA = ","
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    LINE_COMMENT = "line comment"
    BLOCK_COMMENT = "block comment"

COMMENT_KINDS = (TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT)
LITERAL_KINDS = (TokenKind.STRING, TokenKind.NUMBER, TokenKind.TRUE, TokenKind.FALSE, TokenKind.NULL)

class Token(NamedTuple):
    kind: TokenKind
    text: str
    offset: int
    column: int           # 0-based column of the first character
    newlines_before: int  # newlines in the whitespace run just before this token

    @property
    def is_comment(self) -> bool:
        return self.kind in COMMENT_KINDS

    def describe(self) -> str:
        if self.kind in LITERAL_KINDS:
            return f"{self.kind.value} {self.text}"
        if self.is_comment:
            return self.kind.value
        return f"'{self.text}'"

# ------------------------------ Scanner ------------------------------
_PUNCT = {ch: TokenKind(ch) for ch in "{}[]:,"}
_WORDS = {"true": TokenKind.TRUE, "false": TokenKind.FALSE, "null": TokenKind.NULL}
_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_WORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ESCAPES = set('"\\/bfnrt')
_HEX = set("0123456789abcdefABCDEF")
_BOM = "\ufeff"

def _scan_string(source: str, start: int) -> int:
    """Return the offset just past the closing quote of the string at `start`."""
    i = start + 1; n = len(source)
    while i < n:
        ch = source[i]
        if ch == '"':
            return i + 1
        if ch == "\n":
            break
        if ch == "\\":
            esc = source[i + 1] if i + 1 < n else ""
            if esc == "u":
                digits = source[i + 2:i + 6]
                if len(digits) != 4 or not set(digits) <= _HEX:
                    raise LexError(LexErrorKind.INVALID_CHARACTER, i, source, "bad unicode escape")
                i += 6; continue
            if not esc:
                break
            if esc not in _ESCAPES:
                raise LexError(LexErrorKind.INVALID_CHARACTER, i, source, "bad escape")
            i += 2; continue
        elif ch < " ":
            raise LexError(LexErrorKind.INVALID_CHARACTER, i, source, "control character in string")
        i += 1
    raise LexError(LexErrorKind.UNTERMINATED_STRING, start, source)

def tokenize(source: str) -> List[Token]:
    """Scan `source` into tokens, comments included, whitespace dropped."""
    tokens: List[Token] = []
    i = 1 if source.startswith(_BOM) else 0
    n = len(source)
    newlines = 0
    line_start = 0
    while i < n:
        ch = source[i]
        if ch == "\n":
            newlines += 1; i += 1; line_start = i; continue
        if ch in " \t\r":
            i += 1; continue

        start = i
        if ch in _PUNCT:
            kind = _PUNCT[ch]; i += 1
        elif ch == '"':
            kind = TokenKind.STRING; i = _scan_string(source, i)
        elif ch == "-" or ch.isdigit():
            m = _NUMBER_RE.match(source, i)
            if not m:
                raise LexError(LexErrorKind.INVALID_CHARACTER, i, source, "malformed number")
            kind = TokenKind.NUMBER; i = m.end()
        elif ch == "/" and source.startswith("//", i):
            end = source.find("\n", i)
            i = n if end < 0 else end
            kind = TokenKind.LINE_COMMENT
        elif ch == "/" and source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end < 0:
                raise LexError(LexErrorKind.UNTERMINATED_BLOCK_COMMENT, i, source)
            i = end + 2
            kind = TokenKind.BLOCK_COMMENT
        else:
            m = _WORD_RE.match(source, i)
            if not m or m.group() not in _WORDS:
                raise LexError(LexErrorKind.INVALID_CHARACTER, i, source, repr(m.group() if m else ch))
            kind = _WORDS[m.group()]; i = m.end()

        text = source[start:i]
        if kind is TokenKind.LINE_COMMENT:
            text = text.rstrip()
        tokens.append(Token(kind, text, start, start - line_start, newlines))
        newlines = 0
        if kind is TokenKind.BLOCK_COMMENT and "\n" in text:
            line_start = source.rfind("\n", start, i) + 1

    log.debug("scanned %d tokens from %d characters", len(tokens), n)
    return tokens
