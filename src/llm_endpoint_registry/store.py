"""Persisted store primitive.

A :class:`PersistedStore` keeps one state object in memory, mirrors every
change to a :class:`~llm_endpoint_registry.storage.StorageBackend`, notifies
subscribers, and migrates an older stored record forward exactly once, when
it is loaded.
"""

import copy
import threading
from dataclasses import replace
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from .config_result import ConfigResult
from .errors import InvalidConfigFormatError
from .logging import LogEvent, get_logger, log_error, log_info, log_warning
from .storage import MemoryStorage, StorageBackend

logger = get_logger(__name__)

T = TypeVar("T")

Listener = Callable[[Any], None]
Migrate = Callable[[Any, int], Dict[str, Any]]


class PersistedStore(Generic[T]):
    """An in-memory state object mirrored to durable storage.

    Args:
        name: Store key the record is saved under
        default_factory: Builds the state used when nothing is stored
        encode: Converts a state object into a plain mapping
        decode: Builds a state object from a plain mapping
        version: Current schema version
        migrate: Called with ``(stored_state, stored_version)`` when the stored
            version is older than ``version``
        storage: Storage backend (defaults to memory)
        on_hydrate: Called with the store after loading
    """

    def __init__(
        self,
        name: str,
        default_factory: Callable[[], T],
        encode: Callable[[T], Dict[str, Any]],
        decode: Callable[[Dict[str, Any]], T],
        version: int,
        migrate: Optional[Migrate] = None,
        storage: Optional[StorageBackend] = None,
        on_hydrate: Optional[Callable[["PersistedStore[T]"], None]] = None,
    ) -> None:
        self.name = name
        self.version = version
        self._default_factory = default_factory
        self._encode = encode
        self._decode = decode
        self._migrate = migrate
        self._storage = storage if storage is not None else MemoryStorage()
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._state: T = default_factory()
        self.load_result = self._hydrate()
        if on_hydrate is not None:
            on_hydrate(self)

    @property
    def storage(self) -> StorageBackend:
        return self._storage

    @property
    def lock(self) -> "threading.RLock":
        """Re-entrant lock guarding the state; hold it for read-modify-write sequences."""
        return self._lock

    def _hydrate(self) -> ConfigResult:
        """Load the stored record, migrating it when it is older than ``version``."""
        location = self._storage.describe(self.name)
        try:
            document = self._storage.load(self.name)
        except InvalidConfigFormatError as e:
            log_error(
                LogEvent.PERSISTENCE,
                "Stored record is unreadable, keeping defaults",
                store=self.name,
                path=location,
                error=e.message,
            )
            return ConfigResult(success=False, error=e.message, exception=e, path=location)

        if document is None:
            return ConfigResult(success=True, path=location, version=self.version)

        raw_state = document.get("state", {})
        try:
            stored_version = int(document.get("version", 0) or 0)
        except (TypeError, ValueError):
            stored_version = 0

        migrated = False
        if stored_version < self.version and self._migrate is not None:
            raw_state = self._migrate(raw_state, stored_version)
            migrated = True
            log_info(
                LogEvent.PERSISTENCE,
                "Migrated stored record",
                store=self.name,
                from_version=stored_version,
                to_version=self.version,
            )
        elif stored_version > self.version:
            log_warning(
                LogEvent.PERSISTENCE,
                "Stored record is newer than this version, loading as-is",
                store=self.name,
                stored_version=stored_version,
                current_version=self.version,
            )

        if not isinstance(raw_state, dict):
            message = f"Stored state for '{self.name}' is {type(raw_state).__name__}, expected dictionary"
            log_error(LogEvent.PERSISTENCE, message, path=location)
            return ConfigResult(success=False, error=message, path=location, version=stored_version)

        try:
            decoded = self._decode(raw_state)
        except (TypeError, ValueError, AttributeError) as e:
            message = f"Stored state for '{self.name}' has malformed fields: {e}"
            log_error(LogEvent.PERSISTENCE, message, path=location)
            return ConfigResult(success=False, error=message, exception=e, path=location, version=stored_version)

        with self._lock:
            self._state = decoded
        return ConfigResult(
            success=True,
            data=raw_state,
            version=stored_version,
            migrated=migrated,
            path=location,
        )

    def get(self) -> T:
        """Return the current state object.

        Treat it as read-only; change state through :meth:`set` or :meth:`update`.
        """
        with self._lock:
            return self._state

    def set(self, **changes: Any) -> T:
        """Replace top-level fields of the state and persist it.

        Args:
            **changes: Field names and their new values

        Returns:
            The new state
        """
        with self._lock:
            new_state = replace(self._state, **changes)  # type: ignore[type-var]
            return self._commit(new_state)

    def update(self, updater: Callable[[T], None]) -> T:
        """Apply an in-place updater to a copy of the state and persist it.

        Args:
            updater: Function that mutates the state copy it is given

        Returns:
            The new state
        """
        with self._lock:
            draft = copy.deepcopy(self._state)
            updater(draft)
            return self._commit(draft)

    def replace_state(self, state: T) -> T:
        """Swap in a whole new state object and persist it."""
        with self._lock:
            return self._commit(state)

    def _commit(self, new_state: T) -> T:
        self._storage.save(self.name, {"state": self._encode(new_state), "version": self.version})
        self._state = new_state
        listeners = list(self._listeners)
        for listener in listeners:
            listener(new_state)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with the new state after every change.

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> T:
        """Delete the stored record and reset to defaults."""
        with self._lock:
            self._storage.delete(self.name)
            self._state = self._default_factory()
            logger.debug(f"Cleared store '{self.name}'")
            return self._state
