"""Name-based command dispatch for UI or transport layers.

An external dispatcher calls :func:`dispatch` with a command name and a
mapping of primitive arguments.  Argument keys may be snake_case
(``column_id``) or camelCase (``columnId``).  The result is either the board
as a plain dict or a string error message; nothing raises for caller
mistakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .engine import BoardEngine
from .errors import BoardError
from .model import Board


# ---------------------------------------------------------------------------
# Pydantic request models
# ---------------------------------------------------------------------------

class CommandArgs(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        strict=True,
    )


class NoArgs(CommandArgs):
    pass


class AddColumnArgs(CommandArgs):
    title: str


class ColumnIdArgs(CommandArgs):
    column_id: str


class TaskIdArgs(CommandArgs):
    task_id: str


class AddTaskArgs(CommandArgs):
    column_id: str
    content: str


class UpdateTaskArgs(CommandArgs):
    task_id: str
    content: str


class UpdateTaskDetailsArgs(CommandArgs):
    task_id: str
    content: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    labels: Optional[list[str]] = None


class AddCommentArgs(CommandArgs):
    task_id: str
    content: str


class AddAttachmentArgs(CommandArgs):
    task_id: str
    file_name: str
    file_path: str
    mime_type: str


class MoveTaskArgs(CommandArgs):
    source_col_id: str
    dest_col_id: str
    source_index: int = Field(ge=0)
    dest_index: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CommandSpec:
    args_model: type[CommandArgs]
    handler: Callable[[BoardEngine, Any], Board]


COMMANDS: dict[str, CommandSpec] = {
    "get_board": CommandSpec(NoArgs, lambda e, a: e.get_board()),
    "add_column": CommandSpec(AddColumnArgs, lambda e, a: e.add_column(a.title)),
    "delete_column": CommandSpec(ColumnIdArgs, lambda e, a: e.delete_column(a.column_id)),
    "add_task": CommandSpec(AddTaskArgs, lambda e, a: e.add_task(a.column_id, a.content)),
    "update_task": CommandSpec(UpdateTaskArgs, lambda e, a: e.update_task(a.task_id, a.content)),
    "update_task_details": CommandSpec(
        UpdateTaskDetailsArgs,
        lambda e, a: e.update_task_details(
            a.task_id,
            content=a.content,
            description=a.description,
            due_date=a.due_date,
            labels=a.labels,
        ),
    ),
    "add_comment": CommandSpec(AddCommentArgs, lambda e, a: e.add_comment(a.task_id, a.content)),
    "add_attachment": CommandSpec(
        AddAttachmentArgs,
        lambda e, a: e.add_attachment(a.task_id, a.file_name, a.file_path, a.mime_type),
    ),
    "delete_task": CommandSpec(TaskIdArgs, lambda e, a: e.delete_task(a.task_id)),
    "move_task": CommandSpec(
        MoveTaskArgs,
        lambda e, a: e.move_task(a.source_col_id, a.dest_col_id, a.source_index, a.dest_index),
    ),
}


@dataclass
class CommandResult:
    board: Optional[dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"error": self.error}
        return {"board": self.board}


def available_commands() -> list[str]:
    return sorted(COMMANDS)


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def dispatch(engine: BoardEngine, name: str, args: Optional[Mapping[str, Any]] = None) -> CommandResult:
    """Run command *name* with *args* and wrap the outcome."""
    spec = COMMANDS.get(name)
    if spec is None:
        return CommandResult(error=f"Unknown command: {name}")
    if args is not None and not isinstance(args, Mapping):
        return CommandResult(error=f"Invalid arguments for {name}: expected an object")
    try:
        parsed = spec.args_model.model_validate(dict(args or {}))
    except ValidationError as exc:
        return CommandResult(error=f"Invalid arguments for {name}: {_describe(exc)}")
    try:
        board = spec.handler(engine, parsed)
    except BoardError as exc:
        logger.info("Command {} rejected: {}", name, exc)
        return CommandResult(error=str(exc))
    return CommandResult(board=board.to_dict())
