"""Tests for the config_paths module."""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from llm_endpoint_registry.config_paths import (
    APP_NAME,
    ENV_STORE_DIR,
    ensure_store_dir_exists,
    get_store_dir,
    get_store_path,
    get_user_config_dir,
)


def test_user_config_dir_contains_app_name() -> None:
    """Test that the user config directory contains the app name."""
    config_dir = get_user_config_dir()
    assert APP_NAME in str(config_dir)


def test_store_dir_defaults_to_user_config_dir() -> None:
    """Without LER_STORE_DIR the user config directory is used."""
    assert get_store_dir() == get_user_config_dir()


def test_store_dir_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """LER_STORE_DIR wins over the platform directory."""
    monkeypatch.setenv(ENV_STORE_DIR, str(tmp_path))
    assert get_store_dir() == tmp_path
    assert get_store_path("access-control") == tmp_path / "access-control.yaml"


def test_store_path_with_directory(tmp_path: Path) -> None:
    """An explicit directory is used as given."""
    assert get_store_path("sync", tmp_path) == tmp_path / "sync.yaml"


def test_store_dir_is_created() -> None:
    """Test that the store directory is created if it doesn't exist."""
    with tempfile.TemporaryDirectory() as temp_dir:
        with patch("llm_endpoint_registry.config_paths.platformdirs.user_config_dir") as mock_user_config_dir:
            temp_config_dir = Path(temp_dir) / APP_NAME
            mock_user_config_dir.return_value = str(temp_config_dir)

            # Directory should not exist yet
            assert not temp_config_dir.exists()

            assert ensure_store_dir_exists() == temp_config_dir

            assert temp_config_dir.is_dir()


def test_existing_store_dir_is_returned(tmp_path: Path) -> None:
    """An existing writable directory is returned unchanged."""
    assert ensure_store_dir_exists(tmp_path) == tmp_path


def test_unwritable_store_dir_raises(tmp_path: Path) -> None:
    """A directory that cannot be written to is rejected."""
    with patch("llm_endpoint_registry.config_paths.os.access", return_value=False):
        with pytest.raises(PermissionError):
            ensure_store_dir_exists(tmp_path)
