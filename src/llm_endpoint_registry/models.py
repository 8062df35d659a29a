"""Data model for endpoints, share providers and the access state.

Records are plain dataclasses. Their persisted and wire representation keeps
the camelCase field names used by the backing server and by older store
files, so every type here has a ``to_dict``/``from_dict`` pair.
"""

import time
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from uuid import uuid4

from .constants import (
    ApiPath,
    DEFAULT_API_HOST,
    DEFAULT_AZURE_API_VERSION,
    DEFAULT_GOOGLE_API_VERSION,
    ENDPOINT_TYPE_SYSTEM,
    ENDPOINT_TYPE_USER,
    SERVICE_PROXY,
    SYSTEM_SHARE_PROVIDER_ID,
    SYSTEM_SHARE_PROVIDER_NAME,
    ServiceProvider,
)
from .logging import LogEvent, log_debug, log_warning


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def new_id() -> str:
    """Generate a fresh random identifier for a registry entry."""
    return uuid4().hex


def parse_provider(value: Any) -> Optional[ServiceProvider]:
    """Parse a provider name, returning None when it is empty or unknown."""
    if isinstance(value, ServiceProvider):
        return value
    if not value:
        return None
    try:
        return ServiceProvider(value)
    except ValueError:
        for provider in ServiceProvider:
            if provider.value.lower() == str(value).lower():
                return provider
        log_debug(LogEvent.REGISTRY, "Unknown provider name", provider=value)
        return None


def _str(value: Any, default: str = "") -> str:
    return default if value is None else str(value)


@dataclass
class Endpoint:
    """A configured backend the client can send chat requests to."""

    id: str
    name: str = ""
    provider: Optional[ServiceProvider] = ServiceProvider.OPENAI
    api_url: str = ""
    proxy_url: str = ""
    api_version: str = ""
    api_key: str = ""
    models: str = ""
    created_at: int = 0
    type: str = ENDPOINT_TYPE_USER
    gen_title: bool = False

    @property
    def is_system(self) -> bool:
        """Whether this endpoint is owned by the remote config fetch."""
        return self.type == ENDPOINT_TYPE_SYSTEM

    def model_names(self) -> List[str]:
        """Split the comma-separated model allow-list."""
        return [m.strip() for m in self.models.split(",") if m.strip()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "provider": self.provider.value if self.provider else "",
            "apiUrl": self.api_url,
            "proxyUrl": self.proxy_url,
            "apiVersion": self.api_version,
            "apiKey": self.api_key,
            "models": self.models,
            "createdAt": self.created_at,
            "type": self.type,
            "genTitle": self.gen_title,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Endpoint":
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")),
            provider=parse_provider(data.get("provider", ServiceProvider.OPENAI)),
            api_url=_str(data.get("apiUrl")),
            proxy_url=_str(data.get("proxyUrl")),
            api_version=_str(data.get("apiVersion")),
            api_key=_str(data.get("apiKey")),
            models=_str(data.get("models")),
            created_at=int(data.get("createdAt") or 0),
            type=_str(data.get("type"), ENDPOINT_TYPE_USER),
            gen_title=bool(data.get("genTitle", False)),
        )


def create_endpoint(provider: Optional[Union[ServiceProvider, str]]) -> Endpoint:
    """Create a blank user endpoint for a provider.

    Args:
        provider: Provider family; empty or unknown values leave it unset

    Returns:
        Endpoint with a fresh id and the provider's relay path
    """
    parsed = parse_provider(provider)
    return Endpoint(
        id=new_id(),
        provider=parsed,
        proxy_url=SERVICE_PROXY.get(parsed, "") if parsed else "",
        created_at=0,
        type=ENDPOINT_TYPE_USER,
    )


class ShareProviderType(str, Enum):
    """Kinds of share destinations."""

    SHAREGPT = "ShareGPT"
    GITHUB = "Github"


@dataclass(frozen=True)
class ShareGPTParams:
    """Parameters for the paste-bin style share service (none needed)."""

    def to_dict(self) -> Dict[str, str]:
        return {}


@dataclass(frozen=True)
class GithubParams:
    """Parameters for publishing conversations as GitHub issues."""

    owner: str = ""
    repo: str = ""
    token: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"githubOwner": self.owner, "githubRepo": self.repo, "githubToken": self.token}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GithubParams":
        return cls(
            owner=_str(data.get("githubOwner")),
            repo=_str(data.get("githubRepo")),
            token=_str(data.get("githubToken")),
        )


@dataclass(frozen=True)
class OpaqueParams:
    """Parameters of a share type this version does not know; kept verbatim."""

    values: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, str]:
        return dict(self.values)


ShareParams = Union[ShareGPTParams, GithubParams, OpaqueParams]


def decode_share_params(share_type: str, data: Optional[Dict[str, Any]]) -> ShareParams:
    """Decode the free-form params map of a share provider by its type.

    Args:
        share_type: The provider's type string
        data: Persisted params map

    Returns:
        The typed params variant, or OpaqueParams for unknown types
    """
    data = data if isinstance(data, dict) else {}
    if share_type == ShareProviderType.SHAREGPT.value:
        return ShareGPTParams()
    if share_type == ShareProviderType.GITHUB.value:
        return GithubParams.from_dict(data)
    return OpaqueParams(values={str(k): _str(v) for k, v in data.items()})


def encode_share_params(params: ShareParams) -> Dict[str, str]:
    """Encode a params variant back into its persisted string map."""
    return params.to_dict()


@dataclass
class ShareProvider:
    """A configured destination for publishing a conversation.

    ``type`` is kept as the raw string so unknown types survive a round trip.
    """

    id: str
    name: str = ""
    type: str = ShareProviderType.SHAREGPT.value
    params: ShareParams = field(default_factory=ShareGPTParams)
    created_at: int = 0

    @property
    def known_type(self) -> Optional[ShareProviderType]:
        """The provider type, or None when this version does not know it."""
        try:
            return ShareProviderType(self.type)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "params": encode_share_params(self.params),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShareProvider":
        share_type = _str(data.get("type"), ShareProviderType.SHAREGPT.value)
        return cls(
            id=_str(data.get("id")),
            name=_str(data.get("name")),
            type=share_type,
            params=decode_share_params(share_type, data.get("params")),
            created_at=int(data.get("createdAt") or 0),
        )


def create_default_share_provider() -> ShareProvider:
    """Build the built-in paste-bin provider seeded into an empty list."""
    return ShareProvider(
        id=SYSTEM_SHARE_PROVIDER_ID,
        name=SYSTEM_SHARE_PROVIDER_NAME,
        type=ShareProviderType.SHAREGPT.value,
        params=ShareGPTParams(),
        created_at=now_ms(),
    )


def default_openai_url(is_export: bool) -> str:
    """OpenAI base URL for a fresh state: direct host for exports, relay otherwise."""
    return DEFAULT_API_HOST if is_export else ApiPath.OPENAI.value


@dataclass
class AccessState:
    """Root persisted record of access configuration."""

    access_code: str = ""
    use_custom_config: bool = False
    provider: Optional[ServiceProvider] = ServiceProvider.OPENAI

    # legacy per-provider settings
    openai_url: str = ApiPath.OPENAI.value
    openai_api_key: str = ""
    azure_url: str = ""
    azure_api_key: str = ""
    azure_api_version: str = DEFAULT_AZURE_API_VERSION
    google_url: str = ""
    google_api_key: str = ""
    google_api_version: str = DEFAULT_GOOGLE_API_VERSION

    # server-declared flags
    need_code: bool = True
    hide_user_api_key: bool = False
    hide_balance_query: bool = False
    disable_gpt4: bool = False
    disable_fast_link: bool = False
    custom_models: str = ""
    default_provider: Optional[ServiceProvider] = None

    endpoints: List[Endpoint] = field(default_factory=list)
    default_endpoint: str = ""

    share_providers: List[ShareProvider] = field(default_factory=list)
    default_share_provider_id: str = ""

    def is_valid_openai(self) -> bool:
        return bool(self.openai_api_key)

    def is_valid_azure(self) -> bool:
        return bool(self.azure_url and self.azure_api_key and self.azure_api_version)

    def is_valid_google(self) -> bool:
        return bool(self.google_api_key)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase wire names."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "endpoints":
                value = [e.to_dict() for e in value]
            elif f.name == "share_providers":
                value = [p.to_dict() for p in value]
            elif isinstance(value, ServiceProvider):
                value = value.value
            elif value is None:
                value = ""
            result[SNAKE_TO_WIRE[f.name]] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any], is_export: bool = False) -> "AccessState":
        """Deserialize a persisted record, filling defaults for missing fields."""
        base = cls(openai_url=default_openai_url(is_export))
        return base.merge(data)

    def merge(self, patch: Dict[str, Any]) -> "AccessState":
        """Shallow-merge a wire-format mapping into a copy of this state.

        Every top-level key naming a field (camelCase or snake_case) replaces
        that field wholesale. Unknown keys are ignored.

        Args:
            patch: Mapping such as a server config response

        Returns:
            New AccessState with the patch applied
        """
        changes: Dict[str, Any] = {}
        for key, value in patch.items():
            name = WIRE_TO_SNAKE.get(key) or (key if key in SNAKE_TO_WIRE else None)
            if name is None:
                log_debug(LogEvent.ACCESS_STORE, "Ignoring unknown access field", field=key)
                continue
            changes[name] = _decode_field(name, value, getattr(self, name))
        return replace(self, **changes)


def _decode_field(name: str, value: Any, current: Any) -> Any:
    if name in ("endpoints", "share_providers"):
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            log_warning(LogEvent.ACCESS_STORE, "Ignoring non-list access field", field=name)
            return current
        record_type = Endpoint if name == "endpoints" else ShareProvider
        # Items that are neither records nor mappings are dropped
        return [
            item if isinstance(item, record_type) else record_type.from_dict(item)
            for item in value
            if isinstance(item, (record_type, dict))
        ]
    if name in ("provider", "default_provider"):
        return parse_provider(value)
    if isinstance(current, bool):
        return bool(value)
    return _str(value)


# camelCase wire name for each AccessState field
SNAKE_TO_WIRE: Dict[str, str] = {
    "access_code": "accessCode",
    "use_custom_config": "useCustomConfig",
    "provider": "provider",
    "openai_url": "openaiUrl",
    "openai_api_key": "openaiApiKey",
    "azure_url": "azureUrl",
    "azure_api_key": "azureApiKey",
    "azure_api_version": "azureApiVersion",
    "google_url": "googleUrl",
    "google_api_key": "googleApiKey",
    "google_api_version": "googleApiVersion",
    "need_code": "needCode",
    "hide_user_api_key": "hideUserApiKey",
    "hide_balance_query": "hideBalanceQuery",
    "disable_gpt4": "disableGPT4",
    "disable_fast_link": "disableFastLink",
    "custom_models": "customModels",
    "default_provider": "defaultProvider",
    "endpoints": "endpoints",
    "default_endpoint": "defaultEndpoint",
    "share_providers": "shareProviders",
    "default_share_provider_id": "defaultShareProviderId",
}

WIRE_TO_SNAKE: Dict[str, str] = {wire: snake for snake, wire in SNAKE_TO_WIRE.items()}
