"""Snapshot persistence for the board.

The whole board is written to a single pretty-printed file after every
successful mutation and read back once at startup.  JSON is the default
format; a ``.yaml``/``.yml`` path switches to YAML.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from loguru import logger

from .errors import SnapshotError
from .io_utils import _load_data_with_error, _save_data
from .logging_utils import summarize_board
from .model import Board

DEFAULT_SNAPSHOT_FILENAME = "board.json"


class SnapshotGateway:
    """Read and write the board snapshot at a fixed path.

    Parameters
    ----------
    path:
        Snapshot file location, usually ``<data dir>/board.json``.
    strict_load:
        When True, an existing but unreadable or malformed snapshot raises
        :class:`SnapshotError` instead of falling back to the default board.
    raise_on_save_error:
        When True, write failures raise :class:`SnapshotError`.  By default
        they are logged and recorded in :attr:`last_save_error`, and the
        in-memory mutation stands.
    """

    def __init__(
        self,
        path: Path,
        *,
        strict_load: bool = False,
        raise_on_save_error: bool = False,
    ) -> None:
        self.path = Path(path)
        self.strict_load = strict_load
        self.raise_on_save_error = raise_on_save_error
        self.last_save_error: Optional[str] = None

    def load(self) -> Board:
        """Return the persisted board, or the default board if there is none."""
        if not self.path.exists():
            logger.debug("No snapshot at {}; starting with the default board", self.path)
            return Board.default()

        data, err = _load_data_with_error(self.path, {})
        if err is None:
            try:
                board = Board.from_dict(data)
            except SnapshotError as exc:
                err = f"{self.path.name}: {exc}"
            else:
                logger.info("Loaded board from {} ({})", self.path, summarize_board(board))
                return board

        if self.strict_load:
            raise SnapshotError(f"Unusable snapshot {err}")
        logger.warning("Ignoring unusable snapshot, using the default board: {}", err)
        return Board.default()

    def save(self, board: Board) -> bool:
        """Write *board* wholesale.  Returns False if the write failed."""
        try:
            _save_data(self.path, board.to_dict())
        except (OSError, TypeError, ValueError, yaml.YAMLError) as exc:
            self.last_save_error = f"{exc.__class__.__name__}: {exc}"
            logger.error("Failed to save board snapshot to {}: {}", self.path, self.last_save_error)
            if self.raise_on_save_error:
                raise SnapshotError(f"Failed to save snapshot: {self.last_save_error}") from exc
            return False
        self.last_save_error = None
        return True
