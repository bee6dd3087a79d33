"""In-process Kanban board store.

The board lives in memory behind a single lock and is written through to a
JSON (or YAML) snapshot after every successful mutation.  Callers talk to
:class:`~kanban_board.engine.BoardEngine` directly or dispatch commands by
name through :mod:`kanban_board.commands`.
"""

from .engine import BoardEngine
from .errors import BoardError, ColumnNotFound, IndexOutOfBounds, SnapshotError, TaskNotFound
from .model import Attachment, Board, Column, Comment, Task

__all__ = [
    "Attachment",
    "Board",
    "BoardEngine",
    "BoardError",
    "Column",
    "ColumnNotFound",
    "Comment",
    "IndexOutOfBounds",
    "SnapshotError",
    "Task",
    "TaskNotFound",
]

__version__ = "0.1.0"
