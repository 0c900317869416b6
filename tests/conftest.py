"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Run in an empty temporary directory so no stray config file is found."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
