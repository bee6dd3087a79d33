"""Board engine: the named operations that mutate the board.

This is the primary entry-point for all board manipulation.  Each command
runs inside one :class:`BoardStore` transaction, so it holds the board lock
for its full duration, and returns a deep copy of the resulting board.
Caller-input problems raise :class:`~kanban_board.errors.BoardError`
subclasses and leave the board untouched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger

from .errors import ColumnNotFound, IndexOutOfBounds, TaskNotFound
from .model import Attachment, Board, Column, Comment, Task
from .persistence import SnapshotGateway
from .store import BoardStore


class BoardEngine:
    """Create, update, delete and move columns and tasks.

    Parameters
    ----------
    store:
        The store that owns the board and its lock.
    """

    def __init__(self, store: BoardStore) -> None:
        self.store = store

    @classmethod
    def open(cls, snapshot_path: Path, **gateway_options: bool) -> "BoardEngine":
        """Build an engine backed by the snapshot at *snapshot_path*."""
        return cls(BoardStore(SnapshotGateway(snapshot_path, **gateway_options)))

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def get_board(self) -> Board:
        return self.store.snapshot()

    def add_column(self, title: str) -> Board:
        with self.store.transaction() as tx:
            column = Column(title=title)
            tx.board.columns.append(column)
            tx.mark_dirty()
            logger.info("Added column {} ({!r})", column.id, title)
            return tx.board.copy()

    def delete_column(self, column_id: str) -> Board:
        with self.store.transaction() as tx:
            idx = tx.column_index(column_id)
            if idx is not None:
                removed = tx.board.columns.pop(idx)
                logger.info("Deleted column {} with {} task(s)", column_id, len(removed.tasks))
            tx.mark_dirty()
            return tx.board.copy()

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def add_task(self, column_id: str, content: str) -> Board:
        with self.store.transaction() as tx:
            column = tx.find_column(column_id)
            if column is None:
                raise ColumnNotFound()
            task = Task(content=content)
            tx.insert_task_at(column, len(column.tasks), task)
            tx.mark_dirty()
            logger.info("Added task {} to column {}", task.id, column_id)
            return tx.board.copy()

    def update_task(self, task_id: str, content: str) -> Board:
        """Replace a task's content.  An unknown *task_id* is silently ignored."""
        with self.store.transaction() as tx:
            task = tx.get_task(task_id)
            if task is not None:
                task.content = content
                tx.mark_dirty()
            else:
                logger.debug("update_task: no task {}, nothing to do", task_id)
            return tx.board.copy()

    def update_task_details(
        self,
        task_id: str,
        content: Optional[str] = None,
        description: Optional[str] = None,
        due_date: Optional[str] = None,
        labels: Optional[list[str]] = None,
    ) -> Board:
        """Apply the fields that are not None; the rest stay as they are."""
        with self.store.transaction() as tx:
            task = tx.get_task(task_id)
            if task is None:
                raise TaskNotFound()
            if content is not None:
                task.content = content
            if description is not None:
                task.description = description
            if due_date is not None:
                task.due_date = due_date
            if labels is not None:
                task.labels = list(labels)
            tx.mark_dirty()
            return tx.board.copy()

    def add_comment(self, task_id: str, content: str) -> Board:
        with self.store.transaction() as tx:
            task = tx.get_task(task_id)
            if task is None:
                raise TaskNotFound()
            task.comments.append(Comment(content=content))
            tx.mark_dirty()
            return tx.board.copy()

    def add_attachment(self, task_id: str, file_name: str, file_path: str, mime_type: str) -> Board:
        with self.store.transaction() as tx:
            task = tx.get_task(task_id)
            if task is None:
                raise TaskNotFound()
            task.attachments.append(
                Attachment(file_name=file_name, file_path=file_path, mime_type=mime_type)
            )
            tx.mark_dirty()
            return tx.board.copy()

    def delete_task(self, task_id: str) -> Board:
        with self.store.transaction() as tx:
            pos = tx.find_task(task_id)
            if pos is not None:
                col_idx, task_idx = pos
                tx.remove_task_at(tx.board.columns[col_idx], task_idx)
                logger.info("Deleted task {}", task_id)
            tx.mark_dirty()
            return tx.board.copy()

    def move_task(
        self,
        source_col_id: str,
        dest_col_id: str,
        source_index: int,
        dest_index: int,
    ) -> Board:
        """Move the task at *source_index* to *dest_index* of another (or the same) column.

        The task is taken out first, so for a same-column move *dest_index*
        counts positions in the list without the moved task: ``[A, B, C]``
        moved 0 -> 2 becomes ``[B, C, A]``.  A *dest_index* past the end
        appends.
        """
        with self.store.transaction() as tx:
            source = tx.find_column(source_col_id)
            if source is None:
                raise ColumnNotFound("Source column not found")
            dest = tx.find_column(dest_col_id)
            if dest is None:
                raise ColumnNotFound("Dest column not found")
            if dest_index < 0:
                raise IndexOutOfBounds("Destination index out of bounds")

            task = tx.remove_task_at(source, source_index)
            tx.insert_task_at(dest, dest_index, task)
            tx.mark_dirty()
            logger.debug(
                "Moved task {} from {}[{}] to {}[{}]",
                task.id, source_col_id, source_index, dest_col_id, dest_index,
            )
            return tx.board.copy()
