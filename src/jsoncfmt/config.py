from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError, FormatError
from .logger import get_logger
from .printer import INDENT_SIZE

log = get_logger("config")

CONFIG_FILE_NAME = "jsoncfmt.config.json"

@dataclass
class FormatConfig:
    indent: int = INDENT_SIZE
    strip_comments: bool = False   # also drops trailing commas
    eol: str = "\n"

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int) or self.indent < 0:
            raise ConfigError(f"indent must be an integer >= 0, got {self.indent!r}")

DEFAULT_CONFIG: Dict[str, Any] = {
    "indent": INDENT_SIZE,
    "strip_comments": False,
    "eol": "\n",
}

def find_project_config(start_dir: Path) -> Optional[Path]:
    cur = start_dir
    root = Path(cur.anchor)
    while True:
        p = cur / CONFIG_FILE_NAME
        if p.is_file():
            return p
        if cur == root:
            return None
        cur = cur.parent

def load_project_config(start_dir: Path) -> Dict[str, Any]:
    """Settings from the nearest jsoncfmt.config.json at or above `start_dir`.

    The file may itself contain comments and trailing commas.
    """
    path = find_project_config(start_dir)
    if path is None:
        return {}
    from .api import parse_jsonc

    log.debug("using project config %s", path)
    try:
        data = parse_jsonc(path.read_text(encoding="utf-8"))
    except (OSError, FormatError) as ex:
        raise ConfigError(f"{path}: {ex}") from ex
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected an object at the top level")

    known = {f.name for f in fields(FormatConfig)}
    for key in sorted(set(data) - known):
        log.warning("%s: ignoring unknown setting %r", path, key)
    return {k: v for k, v in data.items() if k in known}

def build_config(args: Any = None, start_dir: Optional[Path] = None) -> FormatConfig:
    """Defaults, then the project config file, then command line overrides."""
    cfg = DEFAULT_CONFIG.copy()
    cfg.update(load_project_config(start_dir or Path.cwd()))

    if args is not None:
        if getattr(args, "indent", None) is not None: cfg["indent"] = args.indent
        if getattr(args, "strip_comments", False): cfg["strip_comments"] = True
    return FormatConfig(**cfg)
