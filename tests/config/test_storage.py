from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from wasteflow.config import (
    ConfigurationError,
    StorageConfig,
    get_database_config,
    get_storage_config,
    parse_log_level,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_storage_config_creates_data_dir(tmp_path: Path) -> None:
    config = StorageConfig(data_dir=tmp_path / "nested" / "data")

    path = config.database_path()

    assert path == (tmp_path / "nested" / "data" / "wasteflow.db").resolve()
    assert path.parent.is_dir()
    assert config.database_uri() == f"sqlite+pysqlite:///{path}"


def test_storage_config_rejects_file_as_data_dir(tmp_path: Path) -> None:
    blocker = tmp_path / "data"
    blocker.write_text("not a directory")

    with pytest.raises(ConfigurationError):
        StorageConfig(data_dir=blocker).ensure_data_dir()


def test_data_dir_can_be_overridden(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WASTEFLOW_DATA_DIR", str(tmp_path))

    assert get_storage_config().resolve_data_dir() == tmp_path.resolve()


def test_database_uri_prefers_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_config().uri == "sqlite+pysqlite:///:memory:"


def test_database_uri_falls_back_to_storage(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)

    config = get_database_config(storage=StorageConfig(data_dir=tmp_path))

    assert config.uri.endswith("wasteflow.db")


def test_malformed_database_uri_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "wasteflow.db")

    with pytest.raises(ConfigurationError):
        get_database_config()


def test_parse_log_level() -> None:
    assert parse_log_level(" debug ") == logging.DEBUG
    with pytest.raises(ValueError, match="chatty"):
        parse_log_level("chatty")
