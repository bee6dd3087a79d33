"""Tests for logging_utils module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from loguru import logger

from kanban_board.logging_utils import configure_logging, pretty, summarize_board
from kanban_board.model import Board, Column, Task


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestSummarizeBoard:
    def test_none(self):
        assert summarize_board(None) == {"board": None}

    def test_counts(self):
        board = Board(
            columns=[
                Column(id="a", title="A", tasks=[Task(content="1"), Task(content="2")]),
                Column(id="b", title="B"),
            ]
        )
        assert summarize_board(board) == {"columns": 2, "tasks": 2, "per_column": {"a": 2, "b": 0}}


class TestPretty:
    def test_dict(self):
        assert pretty({"a": 1}) == '{\n  "a": 1\n}'

    def test_uses_str_for_unknown_types(self):
        assert pretty({"p": Path("x")}) == '{\n  "p": "x"\n}'

    def test_unserializable_keys_fall_back_to_str(self):
        data = {(1, 2): "x"}
        assert pretty(data) == str(data)


class TestConfigureLogging:
    def test_file_sink(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "board.log"
        configure_logging("warning", log_file)
        logger.info("hidden")
        logger.warning("shown {}", 1)
        logger.remove()
        text = log_file.read_text(encoding="utf-8")
        assert "shown 1" in text
        assert "hidden" not in text
