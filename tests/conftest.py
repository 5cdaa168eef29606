"""Test configuration helpers for ensuring local imports resolve."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_path() -> None:
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


_ensure_project_root_on_path()


@pytest.fixture
def resources_dir() -> Path:
    """The directory holding the bundled rules and POS tag dictionary."""
    return Path(__file__).resolve().parents[1] / "resources"
