from __future__ import annotations
import json
from typing import Any, Optional

from .config import FormatConfig
from .document import build_document
from .lexer import tokenize
from .printer import INDENT_SIZE, print_document

__version__ = "0.3.0"  # read by pyproject.toml

# Default config mirrors the command line defaults
DEFAULT_CFG = FormatConfig()

def format_jsonc(source: str, strip: bool = False, indent: int = INDENT_SIZE) -> str:
    """Format JSONC text; raises FormatError (LexError/ParseError) on bad input.

    With `strip` comments and trailing commas are dropped before layout is
    decided.
    """
    tokens = tokenize(source)
    document = build_document(tokens, source, strip=strip)
    return print_document(document, indent)

def format_text(
    text: str,
    *,
    strip_comments: Optional[bool] = None,
    indent: Optional[int] = None,
    config: Optional[FormatConfig] = None,
) -> str:
    """Format JSONC text with `config`, individual keyword overrides winning."""
    cfg = config or DEFAULT_CFG
    if strip_comments is not None or indent is not None:
        cfg = FormatConfig(
            indent = indent if indent is not None else cfg.indent,
            strip_comments = strip_comments if strip_comments is not None else cfg.strip_comments,
            eol = cfg.eol,
        )
    out = format_jsonc(text, strip=cfg.strip_comments, indent=cfg.indent)
    if cfg.eol != "\n":
        out = out.replace("\n", cfg.eol)
    return out

def parse_jsonc(text: str) -> Any:
    """Load JSONC text into Python data (key order preserved)."""
    return json.loads(format_jsonc(text, strip=True))
