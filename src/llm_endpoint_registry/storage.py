"""Storage backends for persisted store records.

A backend stores one document per store key. The document is the mapping
``{"state": {...}, "version": N}``; backends do not interpret ``state``.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config_paths import ensure_store_dir_exists, get_store_dir, get_store_path
from .errors import InvalidConfigFormatError, StoreWriteError
from .logging import LogEvent, log_debug


class StorageBackend(ABC):
    """
    Abstract base class for store storage backends.

    Implementations persist and return raw store documents by name.
    """

    @abstractmethod
    def load(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Load a store document.

        Args:
            name: Store key

        Returns:
            The document if present, None otherwise

        Raises:
            InvalidConfigFormatError: If the stored document is unreadable
        """
        pass

    @abstractmethod
    def save(self, name: str, document: Dict[str, Any]) -> None:
        """
        Save a store document, replacing any previous one.

        Args:
            name: Store key
            document: Document to save

        Raises:
            StoreWriteError: If the document cannot be written
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> bool:
        """
        Delete a store document.

        Args:
            name: Store key

        Returns:
            True if deleted, False if not found
        """
        pass

    def describe(self, name: str) -> str:
        """Human-readable location of a store document."""
        return f"{type(self).__name__}:{name}"


class MemoryStorage(StorageBackend):
    """
    In-memory storage backend.

    Great for development and testing. Data is lost when the process exits.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, Dict[str, Any]] = {}

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        document = self._documents.get(name)
        return yaml.safe_load(yaml.safe_dump(document)) if document is not None else None

    def save(self, name: str, document: Dict[str, Any]) -> None:
        # Round-trip through YAML so stored data matches what FileStorage would keep
        self._documents[name] = yaml.safe_load(yaml.safe_dump(document))

    def delete(self, name: str) -> bool:
        return self._documents.pop(name, None) is not None

    def clear(self) -> None:
        """Clear all documents. Useful for testing."""
        self._documents.clear()


class FileStorage(StorageBackend):
    """
    YAML file storage backend.

    Each store key maps to ``<directory>/<name>.yaml``. Files hold credentials,
    so they are written owner-readable only.

    Example:
        storage = FileStorage()  # platformdirs user config dir or $LER_STORE_DIR
        store = AccessStore(storage=storage)
    """

    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = Path(directory) if directory else get_store_dir()

    def path_for(self, name: str) -> Path:
        return get_store_path(name, self.directory)

    def describe(self, name: str) -> str:
        return str(self.path_for(name))

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        path = self.path_for(name)
        if not path.exists():
            log_debug(LogEvent.PERSISTENCE, "No store file yet", path=str(path))
            return None

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigFormatError(f"YAML parsing error in {path}: {e}", path=str(path)) from e
        except OSError as e:
            raise InvalidConfigFormatError(f"Could not read {path}: {e}", path=str(path)) from e

        if data is None:
            return None
        if not isinstance(data, dict):
            raise InvalidConfigFormatError(
                f"Invalid store format in {path}: expected dictionary, got {type(data).__name__}",
                path=str(path),
            )
        return data

    def save(self, name: str, document: Dict[str, Any]) -> None:
        path = self.path_for(name)
        try:
            ensure_store_dir_exists(self.directory)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=str(self.directory))
            try:
                with os.fdopen(fd, "w") as f:
                    yaml.safe_dump(document, f, sort_keys=False, allow_unicode=True)
                if hasattr(os, "chmod"):
                    os.chmod(tmp_name, 0o600)
                os.replace(tmp_name, path)
            finally:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
        except OSError as e:
            raise StoreWriteError(f"Failed to write store file {path}: {e}", path=str(path)) from e

    def delete(self, name: str) -> bool:
        path = self.path_for(name)
        if not path.exists():
            return False
        path.unlink()
        return True
