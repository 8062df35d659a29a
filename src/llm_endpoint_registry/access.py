"""Access configuration store.

:class:`AccessStore` owns the persisted access state: the endpoint and
share-provider registries, the legacy per-provider keys and the flags the
backing server declares. It also owns the one-shot fetch of those server
defaults.
"""

import threading
from dataclasses import replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import requests

from .client_config import ClientConfig
from .config_result import ConfigResult
from .constants import (
    ENDPOINT_TYPE_SYSTEM,
    SYSTEM_ENDPOINT_ID,
    SYSTEM_ENDPOINT_NAME,
    ApiPath,
    StoreKey,
)
from .errors import NetworkError, StoreWriteError
from .headers import resolve_headers
from .logging import LogEvent, log_debug, log_error, log_info
from .migrations import CURRENT_ACCESS_VERSION, migrate_access_state
from .models import AccessState, Endpoint, ShareProvider, create_endpoint, default_openai_url
from .registry import EndpointRegistry, ShareProviderRegistry, repair_default, upsert
from .storage import FileStorage, StorageBackend
from .store import PersistedStore


class FetchState(str, Enum):
    """Progress of the one-shot server defaults fetch."""

    NOT_STARTED = "not_started"
    IN_FLIGHT = "in_flight"
    DONE = "done"


def build_system_endpoint(config: Dict[str, Any]) -> Endpoint:
    """Build the server-managed endpoint from a server config response.

    Args:
        config: Decoded ``/api/config`` response

    Returns:
        Endpoint with the reserved system id
    """
    endpoint = create_endpoint(config.get("defaultProvider"))
    endpoint.id = SYSTEM_ENDPOINT_ID
    endpoint.name = SYSTEM_ENDPOINT_NAME
    endpoint.type = ENDPOINT_TYPE_SYSTEM
    api_version = config.get("defaultAPIVersion")
    endpoint.api_version = "" if api_version is None else str(api_version)
    return endpoint


class AccessStore:
    """Persisted access configuration with endpoint and share-provider registries.

    Example:
        >>> store = AccessStore.get_default()
        >>> store.fetch_server_defaults()
        >>> headers = store.get_headers(model="gpt-4o")

    Args:
        storage: Storage backend for the state (defaults to memory)
        client_config: Deployment configuration (defaults to a standalone web build)
    """

    _default_instance: Optional["AccessStore"] = None
    _instance_lock = threading.RLock()

    @classmethod
    def get_default(cls) -> "AccessStore":
        """Get the process-wide store backed by the user's store directory.

        Returns:
            The default AccessStore instance
        """
        with cls._instance_lock:
            if cls._default_instance is None:
                cls._default_instance = cls(storage=FileStorage(), client_config=ClientConfig.from_env())
            return cls._default_instance

    @staticmethod
    def cleanup() -> None:
        """Drop the default instance."""
        with AccessStore._instance_lock:
            AccessStore._default_instance = None

    def __init__(
        self,
        storage: Optional[StorageBackend] = None,
        client_config: Optional[ClientConfig] = None,
    ) -> None:
        self.client_config = client_config or ClientConfig()
        self._fetch_lock = threading.Lock()
        self._fetch_state = FetchState.NOT_STARTED

        is_export = self.client_config.is_export
        self._store: PersistedStore[AccessState] = PersistedStore(
            name=StoreKey.ACCESS.value,
            default_factory=lambda: AccessState(openai_url=default_openai_url(is_export)),
            encode=AccessState.to_dict,
            decode=lambda data: AccessState.from_dict(data, is_export=is_export),
            version=CURRENT_ACCESS_VERSION,
            migrate=migrate_access_state,
            storage=storage,
            on_hydrate=lambda store: ShareProviderRegistry(store).init_default_if_empty(),
        )
        self.endpoints = EndpointRegistry(self._store)
        self.share_providers = ShareProviderRegistry(self._store)

    # State access

    @property
    def state(self) -> AccessState:
        """Current access state (read only)."""
        return self._store.get()

    @property
    def load_result(self) -> ConfigResult:
        """Outcome of loading the persisted record at construction."""
        return self._store.load_result

    @property
    def persisted_store(self) -> PersistedStore[AccessState]:
        return self._store

    @property
    def fetch_state(self) -> FetchState:
        return self._fetch_state

    def update(self, **changes: Any) -> AccessState:
        """Set top-level access fields, e.g. ``update(access_code="abc")``.

        Returns:
            The new state
        """
        return self._store.set(**changes)

    def subscribe(self, listener: Callable[[AccessState], None]) -> Callable[[], None]:
        """Register a change listener; returns the unsubscribe function."""
        return self._store.subscribe(listener)

    def reset(self) -> AccessState:
        """Delete the persisted record and return to defaults."""
        state = self._store.clear()
        self.share_providers.init_default_if_empty()
        return state

    # Server defaults

    def _claim_fetch(self) -> bool:
        with self._fetch_lock:
            if self._fetch_state != FetchState.NOT_STARTED or self.client_config.is_export:
                return False
            self._fetch_state = FetchState.IN_FLIGHT
            return True

    def fetch_server_defaults(self) -> None:
        """Merge the backing server's declared defaults into the state, once.

        The first call posts to the config endpoint; every later or concurrent
        call returns without doing anything. Export builds never fetch.
        Failures are logged and leave the state untouched.
        """
        if not self._claim_fetch():
            log_debug(LogEvent.REMOTE_CONFIG, "Skipping server config fetch", state=self._fetch_state.value)
            return

        url = self.client_config.server_path(ApiPath.CONFIG.value)
        try:
            config = self._request_server_config(url)
            self._apply_server_config(config)
            log_info(LogEvent.REMOTE_CONFIG, "Applied server config", url=url)
        except (requests.RequestException, ValueError, NetworkError) as e:
            log_error(LogEvent.REMOTE_CONFIG, f"Failed to fetch server config: {e}", url=url)
        except (TypeError, AttributeError) as e:
            log_error(LogEvent.REMOTE_CONFIG, f"Server config has malformed fields: {e}", url=url)
        except StoreWriteError as e:
            log_error(LogEvent.REMOTE_CONFIG, f"Failed to persist server config: {e.message}", url=url)
        finally:
            with self._fetch_lock:
                self._fetch_state = FetchState.DONE

    def _request_server_config(self, url: str) -> Dict[str, Any]:
        response = requests.post(
            url,
            data=None,
            headers=resolve_headers(self.state, client_config=self.client_config),
            timeout=self.client_config.request_timeout,
        )
        try:
            response.raise_for_status()
            config = response.json()
            if not isinstance(config, dict):
                raise NetworkError("Server config is not an object", url=url, status_code=response.status_code)
            return config
        finally:
            response.close()

    def _apply_server_config(self, config: Dict[str, Any]) -> None:
        system_endpoint = build_system_endpoint(config)
        with self._store.lock:
            current = self._store.get()
            merged = current.merge(config)
            endpoints = upsert(current.endpoints, system_endpoint)
            default_endpoint = repair_default(endpoints, merged.default_endpoint, system_endpoint.id)
            self._store.replace_state(replace(merged, endpoints=endpoints, default_endpoint=default_endpoint))

    def enabled_access_control(self) -> bool:
        """Whether the server requires an access code."""
        self.fetch_server_defaults()
        return self.state.need_code

    def is_authorized(self) -> bool:
        """Whether requests can be authorized.

        True when any legacy provider key is configured, when access control
        is off, or when it is on and an access code is set.
        """
        self.fetch_server_defaults()
        state = self.state
        return (
            state.is_valid_openai()
            or state.is_valid_azure()
            or state.is_valid_google()
            or not self.enabled_access_control()
            or bool(state.access_code)
        )

    # Headers

    def get_headers(self, endpoint_id: Optional[str] = None, model: Optional[str] = None) -> Dict[str, str]:
        """Resolve request headers for an endpoint (or the default endpoint).

        Args:
            endpoint_id: Endpoint to target; the default is used when unknown or omitted
            model: Model id the request is for

        Returns:
            Header mapping
        """
        endpoint = self.endpoints.get_or_default(endpoint_id)
        return resolve_headers(self.state, endpoint=endpoint, model=model, client_config=self.client_config)

    # Endpoints

    def get_endpoint(self, endpoint_id: str) -> Optional[Endpoint]:
        return self.endpoints.get(endpoint_id)

    def add_endpoint(self, endpoint: Endpoint) -> None:
        self.endpoints.add(endpoint)

    def add_or_update_endpoint(self, endpoint: Endpoint) -> None:
        self.endpoints.add_or_update(endpoint)

    def remove_endpoint(self, endpoint_id: str) -> bool:
        return self.endpoints.remove(endpoint_id)

    def get_default_endpoint(self) -> Optional[Endpoint]:
        return self.endpoints.get_default()

    def get_endpoint_or_default(self, endpoint_id: Optional[str]) -> Optional[Endpoint]:
        return self.endpoints.get_or_default(endpoint_id)

    def list_endpoints(self) -> List[Endpoint]:
        return self.endpoints.entries()

    # Share providers

    def get_share_provider(self, provider_id: str) -> Optional[ShareProvider]:
        return self.share_providers.get(provider_id)

    def add_share_provider(self, provider: ShareProvider) -> None:
        self.share_providers.add(provider)

    def update_share_provider(self, provider: ShareProvider) -> bool:
        return self.share_providers.update(provider)

    def remove_share_provider(self, provider_id: str) -> bool:
        return self.share_providers.remove(provider_id)

    def get_default_share_provider(self) -> Optional[ShareProvider]:
        return self.share_providers.get_default()

    def init_default_share_provider(self) -> bool:
        return self.share_providers.init_default_if_empty()
