"""Test packaging metadata and installation extras."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _load_pyproject() -> dict[str, Any]:
    pyproject_path = PROJECT_ROOT / "pyproject.toml"
    raw = pyproject_path.read_text(encoding="utf-8")
    if sys.version_info >= (3, 11):
        import tomllib

        return tomllib.loads(raw)

    import tomli

    return tomli.loads(raw)


def test_test_extra_installs_pytest_and_tomli() -> None:
    """`pip install kanban-board[test]` must pull in pytest, plus tomli where tomllib is missing."""
    extras = _load_pyproject()["project"]["optional-dependencies"]
    test_deps = [str(item).strip().lower() for item in extras["test"]]
    assert any(item.startswith("pytest") for item in test_deps)
    assert any(item.startswith("tomli") and "python_version" in item for item in test_deps)


def test_console_script_points_at_cli() -> None:
    data = _load_pyproject()
    assert data["project"]["scripts"]["kanban-board"] == "kanban_board.cli:main"
