"""In-memory board store with a single board-wide lock.

All reads and writes go through :meth:`BoardStore.transaction`, which holds
one re-entrant lock for the whole board.  When the transaction was marked
dirty the snapshot is written before the lock is released, so a reader never
sees an unsaved mutation from another thread.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .errors import IndexOutOfBounds
from .model import Board, Column, Task
from .persistence import SnapshotGateway


# ---------------------------------------------------------------------------
# BoardStore
# ---------------------------------------------------------------------------

class BoardStore:
    """Thread-safe owner of the canonical :class:`Board`.

    Parameters
    ----------
    gateway:
        Snapshot gateway used for the initial load and write-through saves.
    board:
        Optional initial board; loaded from *gateway* when omitted.
    """

    def __init__(self, gateway: SnapshotGateway, board: Optional[Board] = None) -> None:
        self.gateway = gateway
        self._lock = threading.RLock()
        self._board = board if board is not None else gateway.load()

    @contextmanager
    def transaction(self) -> Iterator["BoardTx"]:
        """Acquire the lock, yield a transaction, and save on a clean exit.

        Usage::

            with store.transaction() as tx:
                column = tx.find_column("todo")
                column.tasks.append(Task(content="write docs"))
                tx.mark_dirty()
                # saved before the lock is released
        """
        with self._lock:
            tx = BoardTx(self._board)
            yield tx
            if tx.dirty:
                self.gateway.save(self._board)

    def snapshot(self) -> Board:
        """Return a deep copy of the board taken under the lock."""
        with self._lock:
            return self._board.copy()

    def reload(self) -> Board:
        """Replace the board wholesale with whatever the gateway loads."""
        with self._lock:
            self._board = self.gateway.load()
            return self._board.copy()


class BoardTx:
    """Structural primitives over the board, valid only inside a transaction."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.dirty = False

    def mark_dirty(self) -> None:
        self.dirty = True

    # -- lookups ------------------------------------------------------------

    def column_index(self, column_id: str) -> Optional[int]:
        for idx, column in enumerate(self.board.columns):
            if column.id == column_id:
                return idx
        return None

    def find_column(self, column_id: str) -> Optional[Column]:
        idx = self.column_index(column_id)
        return self.board.columns[idx] if idx is not None else None

    def find_task(self, task_id: str) -> Optional[tuple[int, int]]:
        """Return ``(column index, task index)`` of the first task with *task_id*."""
        for col_idx, column in enumerate(self.board.columns):
            for task_idx, task in enumerate(column.tasks):
                if task.id == task_id:
                    return col_idx, task_idx
        return None

    def get_task(self, task_id: str) -> Optional[Task]:
        pos = self.find_task(task_id)
        if pos is None:
            return None
        col_idx, task_idx = pos
        return self.board.columns[col_idx].tasks[task_idx]

    # -- mutations ----------------------------------------------------------

    def remove_task_at(self, column: Column, index: int) -> Task:
        if index < 0 or index >= len(column.tasks):
            raise IndexOutOfBounds("Source index out of bounds")
        return column.tasks.pop(index)

    def insert_task_at(self, column: Column, index: int, task: Task) -> None:
        """Insert *task*; an index past the end appends (stale client indices are tolerated)."""
        if index < 0:
            raise IndexOutOfBounds("Destination index out of bounds")
        column.tasks.insert(min(index, len(column.tasks)), task)
