"""Configure loguru sinks and summarize board state for log lines."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from .model import Board

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function} - {message}"


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Replace loguru's default sink with a stderr sink (and optional file sink).

    Args:
        level: Minimum level name for both sinks.
        log_file: Optional path; rotated at 5 MB, keeping three files.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(str(log_file), level=level.upper(), format=LOG_FORMAT, rotation="5 MB", retention=3)


def summarize_board(board: Optional[Board]) -> dict[str, Any]:
    """Render a compact, JSON-friendly summary of a board.

    Args:
        board: Board to summarize (or None).

    Returns:
        A dictionary with column and task counts, suitable for logging.
    """
    if board is None:
        return {"board": None}
    per_column = {c.id: len(c.tasks) for c in board.columns}
    return {
        "columns": len(board.columns),
        "tasks": sum(per_column.values()),
        "per_column": per_column,
    }


def pretty(obj: Any, *, indent: int = 2) -> str:
    """Serialize an object as JSON for readable logs.

    Args:
        obj: Object to serialize.
        indent: Indentation level for JSON output.

    Returns:
        A JSON string when possible; otherwise `str(obj)`.
    """
    try:
        return json.dumps(obj, indent=indent, default=str)
    except (TypeError, ValueError):
        return str(obj)
