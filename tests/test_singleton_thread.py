"""Thread-safety tests for the default `AccessStore` singleton."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import List

import pytest

from llm_endpoint_registry import AccessStore
from llm_endpoint_registry.models import Endpoint
from llm_endpoint_registry.storage import FileStorage


@pytest.fixture(autouse=True)
def store_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point the default store at a temporary directory."""
    monkeypatch.setenv("LER_STORE_DIR", str(tmp_path))
    return tmp_path


def test_singleton_thread_safety() -> None:
    """Ensure multiple threads receive the exact same store instance."""
    instance_ids: List[int] = []

    def _get_instance() -> None:
        instance_ids.append(id(AccessStore.get_default()))

    threads = [threading.Thread(target=_get_instance) for _ in range(50)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    # All retrieved ids must be identical.
    assert len(set(instance_ids)) == 1, "AccessStore is not a thread-safe singleton"


def test_default_store_uses_store_dir(store_dir: Path) -> None:
    """The default store persists under LER_STORE_DIR."""
    store = AccessStore.get_default()
    storage = store.persisted_store.storage

    assert isinstance(storage, FileStorage)
    assert storage.directory == store_dir
    assert (store_dir / "access-control.yaml").exists()


def test_cleanup_drops_instance() -> None:
    """cleanup() makes the next call build a fresh store."""
    first = AccessStore.get_default()
    AccessStore.cleanup()
    assert AccessStore.get_default() is not first


def test_concurrent_registry_writes() -> None:
    """Writers on many threads never lose an entry."""
    store = AccessStore.get_default()

    def _add(index: int) -> None:
        store.add_or_update_endpoint(Endpoint(id=f"e{index}", name=str(index)))

    threads = [threading.Thread(target=_add, args=(i,)) for i in range(20)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert sorted(e.id for e in store.list_endpoints()) == sorted(f"e{i}" for i in range(20))
    assert store.state.default_endpoint in {f"e{i}" for i in range(20)}
