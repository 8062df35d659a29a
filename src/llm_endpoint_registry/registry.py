"""Registries over the endpoint and share-provider lists.

Both lists follow the same pattern: a list of entries identified by ``id``
plus a field holding the id of the default entry. :class:`DefaultSelectingRegistry`
implements that pattern once over a :class:`~llm_endpoint_registry.store.PersistedStore`.

After every structural change (add, add-or-update, update, remove) the
default pointer is repaired: if it no longer names a list member it moves to
the first entry, or becomes empty when the list is empty. Registries perform
no validation; see :mod:`llm_endpoint_registry.validation` for caller-side
checks.
"""

import functools
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar, cast

from .errors import EntryNotFoundError
from .logging import LogEvent, log_debug, log_info
from .models import AccessState, Endpoint, ShareProvider, create_default_share_provider
from .store import PersistedStore

E = TypeVar("E", Endpoint, ShareProvider)
F = TypeVar("F", bound=Callable[..., Any])


def _locked(method: F) -> F:
    """Run a registry method while holding the store lock."""

    @functools.wraps(method)
    def wrapper(self: "DefaultSelectingRegistry[Any]", *args: Any, **kwargs: Any) -> Any:
        with self._store.lock:
            return method(self, *args, **kwargs)

    return cast(F, wrapper)


def find_index(entries: Sequence[Any], entry_id: str) -> int:
    """Linear search for an entry id; -1 when absent."""
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            return index
    return -1


def upsert(entries: Sequence[E], entry: E) -> List[E]:
    """Return a copy of ``entries`` with ``entry`` replaced in place or appended."""
    result = list(entries)
    index = find_index(result, entry.id)
    if index == -1:
        result.append(entry)
    else:
        result[index] = entry
    return result


def repair_default(entries: Sequence[Any], default_id: str, written_id: Optional[str] = None) -> str:
    """Resolve the default id against ``entries``.

    Args:
        entries: Current list
        default_id: Currently stored default id
        written_id: Id of the entry just written, if any

    Returns:
        ``default_id`` if it names an entry, else the first entry's id, else
        ``written_id``, else an empty string
    """
    if default_id and find_index(entries, default_id) != -1:
        return default_id
    if entries:
        return str(entries[0].id)
    return written_id or ""


class DefaultSelectingRegistry(Generic[E]):
    """CRUD and default selection over one list field of the access state.

    Args:
        store: Store holding the access state
        list_field: Name of the list field, e.g. ``"endpoints"``
        default_field: Name of the default-id field, e.g. ``"default_endpoint"``
        label: Entry kind used in log messages
    """

    def __init__(
        self,
        store: PersistedStore[AccessState],
        list_field: str,
        default_field: str,
        label: str,
    ) -> None:
        self._store = store
        self._list_field = list_field
        self._default_field = default_field
        self._label = label

    def entries(self) -> List[E]:
        """Return a copy of the entry list."""
        return list(getattr(self._store.get(), self._list_field))

    @property
    def default_id(self) -> str:
        return str(getattr(self._store.get(), self._default_field))

    def get(self, entry_id: str) -> Optional[E]:
        """Look an entry up by id; None when absent."""
        entries = self.entries()
        index = find_index(entries, entry_id)
        return entries[index] if index != -1 else None

    @_locked
    def add(self, entry: E) -> None:
        """Append an entry. Id uniqueness is the caller's responsibility."""
        entries = self.entries()
        entries.append(entry)
        self._commit(entries, entry.id)
        log_info(LogEvent.REGISTRY, f"Added {self._label}", id=entry.id)

    @_locked
    def add_or_update(self, entry: E) -> None:
        """Replace the entry with the same id in place, or append it."""
        existed = self.get(entry.id) is not None
        self._commit(upsert(self.entries(), entry), entry.id)
        log_info(LogEvent.REGISTRY, f"{'Updated' if existed else 'Added'} {self._label}", id=entry.id)

    @_locked
    def update(self, entry: E) -> bool:
        """Replace an existing entry; do nothing when the id is unknown.

        Returns:
            True if an entry was replaced
        """
        entries = self.entries()
        index = find_index(entries, entry.id)
        if index == -1:
            log_debug(LogEvent.REGISTRY, f"Ignoring update of unknown {self._label}", id=entry.id)
            return False
        entries[index] = entry
        self._commit(entries, entry.id)
        return True

    @_locked
    def remove(self, entry_id: str) -> bool:
        """Remove the entry with the given id.

        Returns:
            True if an entry was removed
        """
        entries = self.entries()
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self._commit(remaining)
        log_info(LogEvent.REGISTRY, f"Removed {self._label}", id=entry_id)
        return True

    def get_default(self) -> Optional[E]:
        """Resolve the default id, falling back to the first entry."""
        entries = self.entries()
        index = find_index(entries, self.default_id)
        if index != -1:
            return entries[index]
        return entries[0] if entries else None

    def get_or_default(self, entry_id: Optional[str]) -> Optional[E]:
        """Look an entry up by id, falling back to :meth:`get_default`."""
        entry = self.get(entry_id) if entry_id else None
        return entry if entry is not None else self.get_default()

    @_locked
    def set_default(self, entry_id: str) -> None:
        """Make an existing entry the default.

        Raises:
            EntryNotFoundError: If no entry has this id
        """
        if self.get(entry_id) is None:
            raise EntryNotFoundError(f"No {self._label} with id '{entry_id}'", entry_id=entry_id)
        self._store.set(**{self._default_field: entry_id})

    def _commit(self, entries: List[E], written_id: Optional[str] = None) -> None:
        default_id = repair_default(entries, self.default_id, written_id)
        if default_id != self.default_id:
            log_debug(
                LogEvent.REGISTRY,
                f"Reassigned default {self._label}",
                previous=self.default_id,
                current=default_id,
            )
        self._store.set(**{self._list_field: entries, self._default_field: default_id})


class EndpointRegistry(DefaultSelectingRegistry[Endpoint]):
    """Registry over ``AccessState.endpoints``."""

    def __init__(self, store: PersistedStore[AccessState]) -> None:
        super().__init__(store, "endpoints", "default_endpoint", "endpoint")


class ShareProviderRegistry(DefaultSelectingRegistry[ShareProvider]):
    """Registry over ``AccessState.share_providers``."""

    def __init__(self, store: PersistedStore[AccessState]) -> None:
        super().__init__(store, "share_providers", "default_share_provider_id", "share provider")

    @_locked
    def init_default_if_empty(self) -> bool:
        """Seed the built-in provider into an empty list and make it the default.

        Returns:
            True if the list was seeded, False if it already had entries
        """
        if self.entries():
            return False
        provider = create_default_share_provider()
        self._store.set(share_providers=[provider], default_share_provider_id=provider.id)
        log_info(LogEvent.REGISTRY, "Seeded default share provider", id=provider.id)
        return True
