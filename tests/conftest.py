"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def people_dir(tmp_path: Path) -> Path:
    """Create a data directory holding a small ``people.csv`` table."""
    (tmp_path / "people.csv").write_text("1,Alice\n2,Bob\n3,Carol\n", encoding="utf-8")
    return tmp_path
