"""Tests for settings loading (kanban_board/config.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from kanban_board.config import (
    DATA_DIR_ENV,
    DEFAULT_DATA_DIR,
    LOG_LEVEL_ENV,
    load_board_config,
    load_settings,
    open_engine,
    resolve_data_dir,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)


class TestDataDir:
    def test_explicit_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "env"))
        assert resolve_data_dir(tmp_path / "explicit") == (tmp_path / "explicit").resolve()

    def test_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "env"))
        assert resolve_data_dir() == (tmp_path / "env").resolve()

    def test_default(self) -> None:
        assert resolve_data_dir() == DEFAULT_DATA_DIR


class TestLoadSettings:
    def test_defaults_without_config(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path)
        assert settings.snapshot_path == tmp_path.resolve() / "board.json"
        assert settings.strict_load is False
        assert settings.raise_on_save_error is False
        assert settings.log_level == "INFO"

    def test_config_file(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text(
            "snapshot_file: board.yaml\nstrict_load: true\nraise_on_save_error: true\nlog_level: debug\n",
            encoding="utf-8",
        )
        settings = load_settings(tmp_path)
        assert settings.snapshot_file == "board.yaml"
        assert settings.strict_load is True
        assert settings.raise_on_save_error is True
        assert settings.log_level == "DEBUG"

    def test_env_log_level_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "config.yaml").write_text("log_level: debug\n", encoding="utf-8")
        monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
        assert load_settings(tmp_path).log_level == "WARNING"

    def test_bad_config_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("strict_load: [unclosed", encoding="utf-8")
        config, err = load_board_config(tmp_path)
        assert config == {}
        assert err is not None and "YAMLError" in err
        assert load_settings(tmp_path).strict_load is False

    def test_wrong_types_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("strict_load: 'yes'\nsnapshot_file: 3\n", encoding="utf-8")
        settings = load_settings(tmp_path)
        assert settings.strict_load is False
        assert settings.snapshot_file == "board.json"


class TestOpenEngine:
    def test_creates_data_dir(self, tmp_path: Path) -> None:
        data_dir = tmp_path / "fresh"
        engine = open_engine(load_settings(data_dir))
        assert data_dir.is_dir()
        board = engine.add_column("Later")
        assert (data_dir / "board.json").exists()
        assert board.columns[-1].title == "Later"

    def test_yaml_snapshot(self, tmp_path: Path) -> None:
        (tmp_path / "config.yaml").write_text("snapshot_file: board.yaml\n", encoding="utf-8")
        engine = open_engine(load_settings(tmp_path))
        engine.add_task("todo", "yaml task")
        assert (tmp_path / "board.yaml").exists()
        assert not (tmp_path / "board.json").exists()
