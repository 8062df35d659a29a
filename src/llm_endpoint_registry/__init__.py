"""Endpoint and credential registry for multi-provider LLM chat clients.

This package keeps a persisted set of API endpoints (OpenAI, Azure and
Google compatible) and share destinations, merges in the defaults a backing
server declares, resolves the headers to attach to outbound requests, and
publishes conversations to a share service or as GitHub issues.
"""

# Version of the package
try:
    from importlib.metadata import version as _version

    __version__ = _version("llm-endpoint-registry")
except ImportError:
    # Require importlib.metadata which is standard in Python 3.8+
    raise ImportError(
        "Failed to determine package version. This package requires Python 3.8+ "
        "where importlib.metadata is available, or must be installed as a package."
    )

# Import main components for easier access
from .access import AccessStore, FetchState
from .client_config import ClientConfig
from .constants import SYSTEM_ENDPOINT_ID, SYSTEM_SHARE_PROVIDER_ID, ServiceProvider
from .endpoint_utils import ModelEntry, collect_models, get_candidate_title_endpoint
from .errors import (
    ConfigurationError,
    EndpointRegistryError,
    EntryNotFoundError,
    InvalidConfigFormatError,
    NetworkError,
    StoreWriteError,
    ValidationError,
)
from .headers import resolve_headers
from .models import (
    AccessState,
    Endpoint,
    GithubParams,
    OpaqueParams,
    ShareGPTParams,
    ShareProvider,
    ShareProviderType,
    create_endpoint,
)
from .registry import DefaultSelectingRegistry, EndpointRegistry, ShareProviderRegistry
from .session import ChatMessage, ChatSession
from .share import IssueRef, ShareApi, ShareResult, infer_provider
from .storage import FileStorage, MemoryStorage, StorageBackend
from .store import PersistedStore
from .sync import SyncConfig, SyncProvider, create_sync_store
from .validation import validate_endpoint, validate_share_provider

# Define public API
__all__ = [
    # Store
    "AccessStore",
    "FetchState",
    "ClientConfig",
    "PersistedStore",
    "StorageBackend",
    "MemoryStorage",
    "FileStorage",
    # Registries
    "DefaultSelectingRegistry",
    "EndpointRegistry",
    "ShareProviderRegistry",
    # Data model
    "AccessState",
    "Endpoint",
    "ServiceProvider",
    "ShareProvider",
    "ShareProviderType",
    "ShareGPTParams",
    "GithubParams",
    "OpaqueParams",
    "create_endpoint",
    "SYSTEM_ENDPOINT_ID",
    "SYSTEM_SHARE_PROVIDER_ID",
    # Headers and sharing
    "resolve_headers",
    "ShareApi",
    "ShareResult",
    "IssueRef",
    "infer_provider",
    "ChatMessage",
    "ChatSession",
    # Helpers
    "collect_models",
    "ModelEntry",
    "get_candidate_title_endpoint",
    "validate_endpoint",
    "validate_share_provider",
    "SyncConfig",
    "SyncProvider",
    "create_sync_store",
    # Errors
    "EndpointRegistryError",
    "ConfigurationError",
    "InvalidConfigFormatError",
    "StoreWriteError",
    "NetworkError",
    "ValidationError",
    "EntryNotFoundError",
]
