from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from .commands import dispatch
from .config import load_settings, open_engine
from .engine import BoardEngine
from .logging_utils import configure_logging, pretty


def _ctx(args: argparse.Namespace) -> BoardEngine:
    data_dir = Path(args.data_dir) if args.data_dir else None
    settings = load_settings(data_dir)
    configure_logging(args.log_level or settings.log_level)
    return open_engine(settings)


def _run(args: argparse.Namespace, name: str, payload: Optional[dict[str, Any]] = None) -> int:
    result = dispatch(_ctx(args), name, payload or {})
    if not result.ok:
        sys.stderr.write(f"{result.error}\n")
        return 1
    sys.stdout.write(pretty(result.board) + '\n')
    return 0


def _board_show(args: argparse.Namespace) -> int:
    return _run(args, 'get_board')


def _column_add(args: argparse.Namespace) -> int:
    return _run(args, 'add_column', {'title': args.title})


def _column_delete(args: argparse.Namespace) -> int:
    return _run(args, 'delete_column', {'column_id': args.column_id})


def _task_add(args: argparse.Namespace) -> int:
    return _run(args, 'add_task', {'column_id': args.column_id, 'content': args.content})


def _task_update(args: argparse.Namespace) -> int:
    return _run(args, 'update_task', {'task_id': args.task_id, 'content': args.content})


def _task_details(args: argparse.Namespace) -> int:
    payload: dict[str, Any] = {'task_id': args.task_id}
    for key in ('content', 'description', 'due_date'):
        value = getattr(args, key)
        if value is not None:
            payload[key] = value
    if args.labels is not None:
        payload['labels'] = args.labels
    return _run(args, 'update_task_details', payload)


def _task_comment(args: argparse.Namespace) -> int:
    return _run(args, 'add_comment', {'task_id': args.task_id, 'content': args.content})


def _task_attach(args: argparse.Namespace) -> int:
    return _run(args, 'add_attachment', {
        'task_id': args.task_id,
        'file_name': args.file_name,
        'file_path': args.file_path,
        'mime_type': args.mime_type,
    })


def _task_delete(args: argparse.Namespace) -> int:
    return _run(args, 'delete_task', {'task_id': args.task_id})


def _task_move(args: argparse.Namespace) -> int:
    return _run(args, 'move_task', {
        'source_col_id': args.source_col_id,
        'dest_col_id': args.dest_col_id,
        'source_index': args.source_index,
        'dest_index': args.dest_index,
    })


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='kanban-board', description='Kanban board store')
    parser.add_argument('--data-dir', default=None, help='Board data directory (default: $KANBAN_DATA_DIR or ~/.local/share/kanban-board)')
    parser.add_argument('--log-level', default=None, help='Log level (default: from config, else INFO)')
    subparsers = parser.add_subparsers(dest='command')

    board = subparsers.add_parser('board', help='Inspect the board')
    board_sub = board.add_subparsers(dest='board_command')
    bshow = board_sub.add_parser('show', help='Print the board as JSON')
    bshow.set_defaults(func=_board_show)

    column = subparsers.add_parser('column', help='Manage columns')
    column_sub = column.add_subparsers(dest='column_command')
    cadd = column_sub.add_parser('add', help='Append a column')
    cadd.add_argument('title')
    cadd.set_defaults(func=_column_add)
    cdelete = column_sub.add_parser('delete', help='Delete a column and its tasks')
    cdelete.add_argument('column_id')
    cdelete.set_defaults(func=_column_delete)

    task = subparsers.add_parser('task', help='Manage tasks')
    task_sub = task.add_subparsers(dest='task_command')
    tadd = task_sub.add_parser('add', help='Append a task to a column')
    tadd.add_argument('column_id')
    tadd.add_argument('content')
    tadd.set_defaults(func=_task_add)

    tupdate = task_sub.add_parser('update', help='Replace task content')
    tupdate.add_argument('task_id')
    tupdate.add_argument('content')
    tupdate.set_defaults(func=_task_update)

    tdetails = task_sub.add_parser('details', help='Update task details')
    tdetails.add_argument('task_id')
    tdetails.add_argument('--content', default=None)
    tdetails.add_argument('--description', default=None)
    tdetails.add_argument('--due-date', dest='due_date', default=None)
    tdetails.add_argument('--label', dest='labels', action='append', default=None, help='Repeat to set several labels')
    tdetails.set_defaults(func=_task_details)

    tcomment = task_sub.add_parser('comment', help='Add a comment')
    tcomment.add_argument('task_id')
    tcomment.add_argument('content')
    tcomment.set_defaults(func=_task_comment)

    tattach = task_sub.add_parser('attach', help='Record attachment metadata')
    tattach.add_argument('task_id')
    tattach.add_argument('file_name')
    tattach.add_argument('file_path')
    tattach.add_argument('mime_type')
    tattach.set_defaults(func=_task_attach)

    tdelete = task_sub.add_parser('delete', help='Delete a task')
    tdelete.add_argument('task_id')
    tdelete.set_defaults(func=_task_delete)

    tmove = task_sub.add_parser('move', help='Move a task by position')
    tmove.add_argument('source_col_id')
    tmove.add_argument('dest_col_id')
    tmove.add_argument('source_index', type=int)
    tmove.add_argument('dest_index', type=int)
    tmove.set_defaults(func=_task_move)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, 'func', None)
    if handler is None:
        parser.print_help()
        return 1
    return int(handler(args) or 0)


if __name__ == '__main__':
    raise SystemExit(main())
