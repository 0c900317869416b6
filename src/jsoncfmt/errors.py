"""Error taxonomy for jsoncfmt.

Every failure inside the formatter is fatal to the current call and is raised
as a FormatError subclass carrying the position it was detected at.
"""
from __future__ import annotations
from enum import Enum
from typing import List, Optional, Tuple

MAX_ERROR_LINE_CHARS = 80


class LexErrorKind(Enum):
    UNTERMINATED_STRING = "unterminated string"
    UNTERMINATED_BLOCK_COMMENT = "unterminated block comment"
    INVALID_CHARACTER = "invalid character"


class ParseErrorKind(Enum):
    UNEXPECTED_TOKEN = "unexpected token"
    UNEXPECTED_EOF = "unexpected end of input"
    TRAILING_DATA_AFTER_ROOT = "trailing data after root value"
    EMPTY_INPUT = "empty input"


def line_and_column(text: str, offset: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of `offset` in `text`."""
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


def byte_offset(text: str, offset: int) -> int:
    """Return the UTF-8 byte offset of character index `offset` in `text`."""
    head = text[:offset].encode("utf-8", "surrogatepass")
    return len(head) + max(0, offset - len(text))


class FormatError(ValueError):
    """Base error: a message plus the position it points at.

    `offset` is a UTF-8 byte offset into the source; `index` is the character
    index it was computed from.
    """

    def __init__(self, kind: Enum, message: str, offset: int, source: str = ""):
        self.kind = kind
        self.message = message
        self.index = offset
        self.offset = byte_offset(source, offset)
        self.line, self.column = line_and_column(source, offset)
        super().__init__(f"{message} at line {self.line}, column {self.column}")

    def render(self, source: str) -> str:
        """Human readable diagnostic with the offending line and a caret."""
        lines = source.split("\n")
        idx = self.line - 1
        line = lines[idx] if idx < len(lines) else ""
        shown, col = _clip_line(line, self.column)
        out: List[str] = [str(self), "", "INPUT:"]
        if idx > 0:
            prev, _ = _clip_line(lines[idx - 1], self.column)
            out.append(f"     |{prev}")
        out.append(f"{self.line:4} |{shown}")
        out.append(f"     |{'^':>{col}} error")
        return "\n".join(out)


class LexError(FormatError):
    def __init__(self, kind: LexErrorKind, offset: int, source: str = "", detail: str = ""):
        message = kind.value + (f" ({detail})" if detail else "")
        super().__init__(kind, message, offset, source)


class ParseError(FormatError):
    def __init__(
        self,
        kind: ParseErrorKind,
        offset: int,
        source: str = "",
        expected: Optional[str] = None,
        found: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        message = kind.value
        if expected is not None:
            message += f": expected {expected}, found {found}"
        super().__init__(kind, message, offset, source)


class ConfigError(Exception):
    """Project config file could not be read."""


def _clip_line(line: str, column: int) -> Tuple[str, int]:
    # Keep at most MAX_ERROR_LINE_CHARS around the error column.
    context = MAX_ERROR_LINE_CHARS // 2
    pos = min(max(column - 1, 0), len(line))
    start = max(pos - context, 0)
    end = min(pos + context + 1, len(line))
    shown = line[start:end]
    col = pos - start + 1
    if start > 0:
        shown = "..." + shown; col += 3
    if end < len(line):
        shown += "..."
    return shown, col
