"""Board data model.

A board is an ordered list of columns, each column an ordered list of tasks,
and each task carries append-only comments and attachments.  Everything here
is a plain dataclass that serializes to the JSON/YAML snapshot shape via
``to_dict()`` / ``from_dict()``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import SnapshotError
from .utils import _generate_id, _now_iso

DEFAULT_COMMENT_AUTHOR = "User"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require(data: Any, key: str, kind: type, where: str) -> Any:
    """Fetch a mandatory field from a snapshot mapping or raise SnapshotError."""
    if not isinstance(data, dict):
        raise SnapshotError(f"{where}: expected object, got {type(data).__name__}")
    if key not in data:
        raise SnapshotError(f"{where}: missing '{key}'")
    value = data[key]
    if not isinstance(value, kind):
        raise SnapshotError(f"{where}: '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


def _optional_str(data: dict[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise SnapshotError(f"{where}: '{key}' must be str or null, got {type(value).__name__}")
    return value


def _list_of(data: dict[str, Any], key: str, where: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SnapshotError(f"{where}: '{key}' must be a list, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Leaf records
# ---------------------------------------------------------------------------

@dataclass
class Comment:
    content: str = ""
    author: str = DEFAULT_COMMENT_AUTHOR
    id: str = field(default_factory=_generate_id)
    created_at: str = field(default_factory=_now_iso)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "author": self.author,
            "content": self.content,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Comment":
        where = "comment"
        return cls(
            id=_require(data, "id", str, where),
            author=_require(data, "author", str, where),
            content=_require(data, "content", str, where),
            created_at=_require(data, "created_at", str, where),
        )


@dataclass
class Attachment:
    file_name: str = ""
    file_path: str = ""
    mime_type: str = ""
    id: str = field(default_factory=_generate_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "file_name": self.file_name,
            "file_path": self.file_path,
            "mime_type": self.mime_type,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Attachment":
        where = "attachment"
        return cls(
            id=_require(data, "id", str, where),
            file_name=_require(data, "file_name", str, where),
            file_path=_require(data, "file_path", str, where),
            mime_type=_require(data, "mime_type", str, where),
        )


# ---------------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------------

@dataclass
class Task:
    """A card on the board.

    ``labels`` keeps insertion order but is treated as a set by callers;
    ``comments`` and ``attachments`` only ever grow.
    """

    content: str = ""
    id: str = field(default_factory=_generate_id)
    description: Optional[str] = None
    due_date: Optional[str] = None
    labels: list[str] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "description": self.description,
            "due_date": self.due_date,
            "labels": list(self.labels),
            "comments": [c.to_dict() for c in self.comments],
            "attachments": [a.to_dict() for a in self.attachments],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        task_id = _require(data, "id", str, "task")
        where = f"task {task_id}"
        labels = _list_of(data, "labels", where)
        if not all(isinstance(label, str) for label in labels):
            raise SnapshotError(f"{where}: 'labels' must contain only strings")
        return cls(
            id=task_id,
            content=_require(data, "content", str, where),
            description=_optional_str(data, "description", where),
            due_date=_optional_str(data, "due_date", where),
            labels=list(labels),
            comments=[Comment.from_dict(c) for c in _list_of(data, "comments", where)],
            attachments=[Attachment.from_dict(a) for a in _list_of(data, "attachments", where)],
        )


# ---------------------------------------------------------------------------
# Column / Board
# ---------------------------------------------------------------------------

@dataclass
class Column:
    title: str = ""
    id: str = field(default_factory=_generate_id)
    tasks: list[Task] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Column":
        column_id = _require(data, "id", str, "column")
        where = f"column {column_id}"
        return cls(
            id=column_id,
            title=_require(data, "title", str, where),
            tasks=[Task.from_dict(t) for t in _require(data, "tasks", list, where)],
        )


@dataclass
class Board:
    columns: list[Column] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"columns": [c.to_dict() for c in self.columns]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Board":
        """Deserialize a snapshot, rejecting shapes that would break id uniqueness."""
        board = cls(columns=[Column.from_dict(c) for c in _require(data, "columns", list, "board")])
        board.check_unique_ids()
        return board

    @classmethod
    def default(cls) -> "Board":
        return cls(
            columns=[
                Column(id="todo", title="To Do"),
                Column(id="doing", title="Doing"),
                Column(id="done", title="Done"),
            ]
        )

    def check_unique_ids(self) -> None:
        seen_columns: set[str] = set()
        seen_tasks: set[str] = set()
        for column in self.columns:
            if column.id in seen_columns:
                raise SnapshotError(f"duplicate column id {column.id}")
            seen_columns.add(column.id)
            for task in column.tasks:
                if task.id in seen_tasks:
                    raise SnapshotError(f"duplicate task id {task.id}")
                seen_tasks.add(task.id)
                _check_unique([c.id for c in task.comments], f"task {task.id} comment")
                _check_unique([a.id for a in task.attachments], f"task {task.id} attachment")

    def task_ids(self) -> list[str]:
        return [t.id for c in self.columns for t in c.tasks]

    def copy(self) -> "Board":
        return copy.deepcopy(self)


def _check_unique(ids: list[str], what: str) -> None:
    if len(set(ids)) != len(ids):
        raise SnapshotError(f"duplicate {what} id")
