"""Error taxonomy for board operations.

Every error carries the caller-facing message as its ``str()`` so the
command boundary can hand it straight back to a UI.
"""

from __future__ import annotations


class BoardError(Exception):
    """Base class for errors raised by the board engine."""

    message = "Board error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class ColumnNotFound(BoardError):
    message = "Column not found"


class TaskNotFound(BoardError):
    message = "Task not found"


class IndexOutOfBounds(BoardError):
    message = "Index out of bounds"


class SnapshotError(BoardError):
    """The persisted snapshot could not be read, parsed or written."""

    message = "Snapshot error"
