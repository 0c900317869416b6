from __future__ import annotations
import argparse, difflib, sys
from pathlib import Path
from typing import List

from .api import __version__, format_text
from .config import FormatConfig, build_config
from .errors import ConfigError, FormatError
from .logger import get_logger, set_level

log = get_logger("cli")

# ------------------------------ Utilities ------------------------------
def _read_text(path: Path) -> str:
    # keep CRLF as is
    with open(path, encoding="utf-8", newline="") as fh:
        return fh.read()

def _write_text(path: Path, data: str) -> None:
    # data already carries the configured eol
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(data)

def _normalize_eol(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")

def _expand_files(patterns: List[str]) -> List[Path]:
    out: List[Path] = []
    for pat in patterns:
        if any(ch in pat for ch in "*?[]"):
            out.extend(sorted(p for p in Path().glob(pat) if p.is_file()))
        else:
            p = Path(pat)
            if p.is_file():
                out.append(p)
            else:
                log.warning("skipping %s: not a file", pat)
    seen, uniq = set(), []
    for p in out:
        rp = p.resolve()
        if rp not in seen:
            seen.add(rp); uniq.append(p)
    return uniq

def _process_text(text: str, cfg: FormatConfig) -> str:
    return format_text(_normalize_eol(text), config=cfg)

# ------------------------------ CLI ------------------------------
def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="jsoncfmt",
        description="Format JSON with comments, keeping comments, trailing commas and blank lines.",
    )
    ap.add_argument("paths", nargs="*", help="Files or globs to format (default: read stdin)")
    ap.add_argument("--strip-comments", "--strip", "-s", dest="strip_comments", action="store_true",
                    help="Remove all comments and trailing commas from the output")
    ap.add_argument("--indent", type=int, help="Indent size (default 2)")
    ap.add_argument("--write", "-w", action="store_true", help="Write changes to files")
    ap.add_argument("--check", action="store_true", help="Exit 1 if any files would be changed")
    ap.add_argument("--diff", action="store_true", help="Show unified diff for changes")
    ap.add_argument("--verbose", "-v", action="store_true", help="Log debug details to stderr")
    ap.add_argument("--version", action="version", version=f"jsoncfmt {__version__}")
    return ap

def _format_stdin(cfg: FormatConfig) -> int:
    try:
        text = sys.stdin.read()
    except (OSError, UnicodeDecodeError) as ex:
        print(f"<stdin>: {ex}", file=sys.stderr)
        return 1
    try:
        formatted = _process_text(text, cfg)
    except FormatError as ex:
        print(f"<stdin>: {ex.render(_normalize_eol(text))}", file=sys.stderr)
        return 1
    sys.stdout.write(formatted)
    return 0

def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _parser().parse_args(argv)
    if args.verbose:
        set_level("DEBUG")

    try:
        cfg = build_config(args)
    except ConfigError as ex:
        print(f"jsoncfmt: config error: {ex}", file=sys.stderr)
        return 2
    log.debug("config: %s", cfg)

    if not args.paths:
        return _format_stdin(cfg)

    files = _expand_files(args.paths)
    if not files:
        print("jsoncfmt: No input files matched.", file=sys.stderr)
        return 2

    changed = failed = 0
    for f in files:
        try:
            original = _read_text(f)
        except (OSError, UnicodeDecodeError) as ex:
            print(f"{f}: {ex}", file=sys.stderr)
            failed += 1
            continue
        try:
            formatted = _process_text(original, cfg)
        except FormatError as ex:
            print(f"{f}: {ex.render(_normalize_eol(original))}", file=sys.stderr)
            failed += 1
            continue

        if not (args.write or args.check or args.diff):
            sys.stdout.write(formatted)
            continue

        if formatted != original:
            changed += 1
            log.debug("%s needs formatting", f)
            if args.diff and not args.write:
                diff = difflib.unified_diff(
                    _normalize_eol(original).splitlines(keepends=True),
                    _normalize_eol(formatted).splitlines(keepends=True),
                    fromfile=str(f),
                    tofile=str(f) + " (formatted)",
                )
                sys.stdout.writelines(diff)
            if args.write:
                _write_text(f, formatted)

    if failed:
        return 1
    if args.check and changed:
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
