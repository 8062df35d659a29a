"""Tests for the sync configuration store."""

from pathlib import Path

from llm_endpoint_registry.storage import FileStorage
from llm_endpoint_registry.sync import SyncConfig, SyncProvider, UpstashConfig, create_sync_store


class TestSyncConfig:
    """Tests for SyncConfig."""

    def test_defaults(self) -> None:
        """Sync defaults to WebDAV through the CORS proxy, unconfigured."""
        config = SyncConfig()
        assert config.provider == SyncProvider.WEBDAV
        assert config.use_proxy is True
        assert config.proxy_url == "/api/cors/"
        assert not config.is_configured()

    def test_upstash_configured(self) -> None:
        """Upstash needs an endpoint and an API key."""
        config = SyncConfig(provider=SyncProvider.UPSTASH, upstash=UpstashConfig(endpoint="https://u", api_key="k"))
        assert config.is_configured()

    def test_round_trip(self) -> None:
        """to_dict and from_dict are inverses."""
        config = SyncConfig(provider=SyncProvider.UPSTASH, last_sync_time=123)
        data = config.to_dict()

        assert data["upstash"]["apiKey"] == ""
        assert SyncConfig.from_dict(data) == config

    def test_unknown_provider(self) -> None:
        """Unknown backends fall back to WebDAV."""
        assert SyncConfig.from_dict({"provider": "dropbox"}).provider == SyncProvider.WEBDAV


class TestSyncStore:
    """Tests for the persisted sync store."""

    def test_persists(self, tmp_path: Path) -> None:
        """Changes are saved under the sync key."""
        store = create_sync_store(FileStorage(tmp_path))
        store.set(last_sync_time=99)

        assert (tmp_path / "sync.yaml").exists()
        assert create_sync_store(FileStorage(tmp_path)).get().last_sync_time == 99
