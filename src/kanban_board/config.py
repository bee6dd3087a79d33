"""Load board settings from `<data dir>/config.yaml` and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from .engine import BoardEngine
from .io_utils import _load_data_with_error
from .persistence import DEFAULT_SNAPSHOT_FILENAME

CONFIG_FILE = "config.yaml"
DATA_DIR_ENV = "KANBAN_DATA_DIR"
LOG_LEVEL_ENV = "KANBAN_LOG_LEVEL"
DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "kanban-board"


@dataclass
class BoardSettings:
    data_dir: Path
    snapshot_file: str = DEFAULT_SNAPSHOT_FILENAME
    strict_load: bool = False
    raise_on_save_error: bool = False
    log_level: str = "INFO"

    @property
    def snapshot_path(self) -> Path:
        return self.data_dir / self.snapshot_file


def resolve_data_dir(data_dir: Optional[Path] = None) -> Path:
    """Pick the data directory: explicit argument, then `KANBAN_DATA_DIR`, then the default."""
    if data_dir is not None:
        return Path(data_dir).expanduser().resolve()
    env = os.environ.get(DATA_DIR_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return DEFAULT_DATA_DIR


def load_board_config(data_dir: Path) -> tuple[dict[str, Any], str | None]:
    """Load the optional config file.

    Args:
        data_dir: Board data directory.

    Returns:
        A tuple of `(config, error_message)`. If the file is missing, returns `({}, None)`.
    """
    path = data_dir / CONFIG_FILE
    data, err = _load_data_with_error(path, {})
    if err:
        return {}, err
    return data, None


def _get_bool(config: dict[str, Any], key: str, default: bool) -> bool:
    raw = config.get(key)
    return raw if isinstance(raw, bool) else default


def load_settings(data_dir: Optional[Path] = None) -> BoardSettings:
    """Build :class:`BoardSettings` from the config file and environment.

    An unreadable config file is logged and ignored; defaults apply.
    """
    resolved = resolve_data_dir(data_dir)
    config, err = load_board_config(resolved)
    if err:
        logger.warning("Failed to load config: {}", err)

    settings = BoardSettings(data_dir=resolved)
    snapshot_file = config.get("snapshot_file")
    if isinstance(snapshot_file, str) and snapshot_file:
        settings.snapshot_file = snapshot_file
    settings.strict_load = _get_bool(config, "strict_load", settings.strict_load)
    settings.raise_on_save_error = _get_bool(config, "raise_on_save_error", settings.raise_on_save_error)
    log_level = os.environ.get(LOG_LEVEL_ENV) or config.get("log_level")
    if isinstance(log_level, str) and log_level:
        settings.log_level = log_level.upper()
    return settings


def open_engine(settings: BoardSettings) -> BoardEngine:
    """Create the data directory if needed and open an engine over its snapshot."""
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return BoardEngine.open(
        settings.snapshot_path,
        strict_load=settings.strict_load,
        raise_on_save_error=settings.raise_on_save_error,
    )
