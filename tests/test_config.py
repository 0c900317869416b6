"""Tests for jsoncfmt/config.py - settings resolution."""

from types import SimpleNamespace

import pytest

from jsoncfmt.config import (
    CONFIG_FILE_NAME,
    FormatConfig,
    build_config,
    find_project_config,
    load_project_config,
)
from jsoncfmt.errors import ConfigError


class TestFormatConfig:
    """Tests for FormatConfig."""

    def test_defaults(self):
        """Should default to two spaces, comments kept, LF."""
        cfg = FormatConfig()
        assert (cfg.indent, cfg.strip_comments, cfg.eol) == (2, False, "\n")

    def test_negative_indent(self):
        """Should reject a negative indent."""
        with pytest.raises(ConfigError):
            FormatConfig(indent=-1)


class TestProjectConfig:
    """Tests for finding and loading jsoncfmt.config.json."""

    def test_missing(self, project_dir):
        """Should return an empty dict without a config file."""
        assert load_project_config(project_dir) == {}

    def test_found_in_parent(self, project_dir):
        """Should find the config file in a parent directory."""
        (project_dir / CONFIG_FILE_NAME).write_text('{"indent": 4}', encoding="utf-8")
        nested = project_dir / "a" / "b"
        nested.mkdir(parents=True)
        assert find_project_config(nested) == project_dir / CONFIG_FILE_NAME
        assert load_project_config(nested) == {"indent": 4}

    def test_comments_allowed(self, project_dir):
        """Should read JSONC config files."""
        (project_dir / CONFIG_FILE_NAME).write_text(
            '{\n  // wider\n  "indent": 4,\n  "strip_comments": true,\n}', encoding="utf-8"
        )
        assert load_project_config(project_dir) == {"indent": 4, "strip_comments": True}

    def test_unknown_keys_ignored(self, project_dir):
        """Should drop settings FormatConfig does not know."""
        (project_dir / CONFIG_FILE_NAME).write_text('{"indent": 3, "width": 80}', encoding="utf-8")
        assert load_project_config(project_dir) == {"indent": 3}

    def test_invalid_file(self, project_dir):
        """Should raise ConfigError for an unparseable file."""
        (project_dir / CONFIG_FILE_NAME).write_text('{"indent": }', encoding="utf-8")
        with pytest.raises(ConfigError):
            load_project_config(project_dir)

    def test_not_an_object(self, project_dir):
        """Should raise ConfigError when the file is not an object."""
        (project_dir / CONFIG_FILE_NAME).write_text("[4]", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_project_config(project_dir)


class TestBuildConfig:
    """Tests for build_config()."""

    def test_defaults(self, project_dir):
        """Should use defaults without file or arguments."""
        assert build_config(start_dir=project_dir) == FormatConfig()

    def test_file_then_args(self, project_dir):
        """Should let command line arguments override the file."""
        (project_dir / CONFIG_FILE_NAME).write_text('{"indent": 4}', encoding="utf-8")
        assert build_config(start_dir=project_dir).indent == 4

        args = SimpleNamespace(indent=8, strip_comments=True)
        cfg = build_config(args, start_dir=project_dir)
        assert (cfg.indent, cfg.strip_comments) == (8, True)

    def test_unset_args_keep_file_values(self, project_dir):
        """Should not override the file with unset arguments."""
        (project_dir / CONFIG_FILE_NAME).write_text(
            '{"indent": 4, "strip_comments": true}', encoding="utf-8"
        )
        args = SimpleNamespace(indent=None, strip_comments=False)
        cfg = build_config(args, start_dir=project_dir)
        assert (cfg.indent, cfg.strip_comments) == (4, True)
