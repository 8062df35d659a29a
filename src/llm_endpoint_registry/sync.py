"""Cloud sync configuration.

Only the configuration is kept here; moving data to WebDAV or Upstash is the
job of a sync transport outside this package.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .constants import StoreKey
from .logging import LogEvent, log_debug
from .storage import StorageBackend
from .store import PersistedStore

SYNC_STORE_VERSION = 1
DEFAULT_CORS_PROXY = "/api/cors/"


class SyncProvider(str, Enum):
    """Supported sync backends."""

    WEBDAV = "webdav"
    UPSTASH = "upstash"


def _str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class WebDavConfig:
    endpoint: str = ""
    username: str = ""
    password: str = ""

    def is_configured(self) -> bool:
        return bool(self.endpoint and self.username and self.password)


@dataclass
class UpstashConfig:
    endpoint: str = ""
    username: str = ""
    api_key: str = ""

    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key)


@dataclass
class SyncConfig:
    """Settings for syncing client data to cloud storage.

    Attributes:
        provider: Backend in use
        use_proxy: Route requests through the backing server's CORS proxy
        proxy_url: Proxy path or URL
        webdav: WebDAV credentials
        upstash: Upstash credentials
        last_sync_time: Epoch milliseconds of the last successful sync
    """

    provider: SyncProvider = SyncProvider.WEBDAV
    use_proxy: bool = True
    proxy_url: str = DEFAULT_CORS_PROXY
    webdav: WebDavConfig = field(default_factory=WebDavConfig)
    upstash: UpstashConfig = field(default_factory=UpstashConfig)
    last_sync_time: int = 0

    def is_configured(self) -> bool:
        """Whether the selected backend has the credentials it needs."""
        if self.provider == SyncProvider.UPSTASH:
            return self.upstash.is_configured()
        return self.webdav.is_configured()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider.value,
            "useProxy": self.use_proxy,
            "proxyUrl": self.proxy_url,
            "webdav": {
                "endpoint": self.webdav.endpoint,
                "username": self.webdav.username,
                "password": self.webdav.password,
            },
            "upstash": {
                "endpoint": self.upstash.endpoint,
                "username": self.upstash.username,
                "apiKey": self.upstash.api_key,
            },
            "lastSyncTime": self.last_sync_time,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SyncConfig":
        try:
            provider = SyncProvider(str(data.get("provider", SyncProvider.WEBDAV.value)).lower())
        except ValueError:
            log_debug(LogEvent.PERSISTENCE, "Unknown sync provider, using webdav", provider=data.get("provider"))
            provider = SyncProvider.WEBDAV
        webdav = data.get("webdav") if isinstance(data.get("webdav"), dict) else {}
        upstash = data.get("upstash") if isinstance(data.get("upstash"), dict) else {}
        return cls(
            provider=provider,
            use_proxy=bool(data.get("useProxy", True)),
            proxy_url=_str(data.get("proxyUrl", DEFAULT_CORS_PROXY)),
            webdav=WebDavConfig(
                endpoint=_str(webdav.get("endpoint")),
                username=_str(webdav.get("username")),
                password=_str(webdav.get("password")),
            ),
            upstash=UpstashConfig(
                endpoint=_str(upstash.get("endpoint")),
                username=_str(upstash.get("username")),
                api_key=_str(upstash.get("apiKey")),
            ),
            last_sync_time=int(data.get("lastSyncTime") or 0),
        )


def create_sync_store(storage: Optional[StorageBackend] = None) -> PersistedStore[SyncConfig]:
    """Create the persisted store holding the sync configuration.

    Args:
        storage: Storage backend (defaults to memory)

    Returns:
        Store keyed by ``StoreKey.SYNC``
    """
    return PersistedStore(
        name=StoreKey.SYNC.value,
        default_factory=SyncConfig,
        encode=SyncConfig.to_dict,
        decode=SyncConfig.from_dict,
        version=SYNC_STORE_VERSION,
        storage=storage,
    )
