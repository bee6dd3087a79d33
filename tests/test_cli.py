"""Tests for the command-line front-end (kanban_board/cli.py)."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from loguru import logger

from kanban_board.cli import main


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def _run(capsys: pytest.CaptureFixture[str], data_dir: Path, *argv: str) -> tuple[int, dict, str]:
    code = main(["--data-dir", str(data_dir), "--log-level", "ERROR", *argv])
    out, err = capsys.readouterr()
    return code, (json.loads(out) if out.strip() else {}), err


class TestCli:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_board_show(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code, board, _ = _run(capsys, tmp_path, "board", "show")
        assert code == 0
        assert [c["id"] for c in board["columns"]] == ["todo", "doing", "done"]

    def test_task_lifecycle(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code, board, _ = _run(capsys, tmp_path, "task", "add", "todo", "Write CLI")
        assert code == 0
        task_id = board["columns"][0]["tasks"][0]["id"]

        code, board, _ = _run(
            capsys, tmp_path, "task", "details", task_id,
            "--description", "argparse", "--label", "cli", "--label", "dx",
        )
        task = board["columns"][0]["tasks"][0]
        assert task["description"] == "argparse"
        assert task["labels"] == ["cli", "dx"]

        _run(capsys, tmp_path, "task", "comment", task_id, "looks good")
        _run(capsys, tmp_path, "task", "attach", task_id, "a.txt", "/tmp/a.txt", "text/plain")
        code, board, _ = _run(capsys, tmp_path, "task", "move", "todo", "done", "0", "5")
        assert board["columns"][2]["tasks"][0]["id"] == task_id
        assert len(board["columns"][2]["tasks"][0]["comments"]) == 1

        code, board, _ = _run(capsys, tmp_path, "task", "delete", task_id)
        assert code == 0
        assert all(c["tasks"] == [] for c in board["columns"])

    def test_columns(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code, board, _ = _run(capsys, tmp_path, "column", "add", "Blocked")
        new_id = board["columns"][-1]["id"]
        code, board, _ = _run(capsys, tmp_path, "column", "delete", new_id)
        assert [c["id"] for c in board["columns"]] == ["todo", "doing", "done"]

    def test_error_exit_code(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code, out, err = _run(capsys, tmp_path, "task", "add", "nope", "x")
        assert code == 1
        assert out == {}
        assert err.strip().endswith("Column not found")

    def test_state_persists_between_invocations(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        _run(capsys, tmp_path, "task", "add", "doing", "persisted")
        code, board, _ = _run(capsys, tmp_path, "board", "show")
        assert board["columns"][1]["tasks"][0]["content"] == "persisted"
