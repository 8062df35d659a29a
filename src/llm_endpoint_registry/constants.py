"""Shared constants for the endpoint registry."""

from enum import Enum
from typing import Dict


class ServiceProvider(str, Enum):
    """Provider families an endpoint can talk to."""

    OPENAI = "OpenAI"
    AZURE = "Azure"
    GOOGLE = "Google"


class StoreKey(str, Enum):
    """Names of the persisted store records."""

    ACCESS = "access-control"
    SYNC = "sync"


class ApiPath(str, Enum):
    """Same-origin relay paths exposed by the backing server."""

    OPENAI = "/api/openai"
    AZURE = "/api/azure"
    GOOGLE = "/api/google"
    CONFIG = "/api/config"
    SHAREGPT = "/sharegpt"
    SHARE_GITHUB = "/sharegithub"


# Relay path used for each provider when direct calls are disallowed
SERVICE_PROXY: Dict[ServiceProvider, str] = {
    ServiceProvider.OPENAI: ApiPath.OPENAI.value,
    ServiceProvider.AZURE: ApiPath.AZURE.value,
    ServiceProvider.GOOGLE: ApiPath.GOOGLE.value,
}

# Reserved ids
SYSTEM_ENDPOINT_ID = "system"
SYSTEM_SHARE_PROVIDER_ID = "system-share"
SYSTEM_ENDPOINT_NAME = "System"
SYSTEM_SHARE_PROVIDER_NAME = "Default"

# Endpoint types
ENDPOINT_TYPE_USER = "user"
ENDPOINT_TYPE_SYSTEM = "system"

# Prepended to shared access codes so the server can tell them from user keys
ACCESS_CODE_PREFIX = "nk-"

DEFAULT_API_HOST = "https://api.openai.com"
DEFAULT_PROVIDER_LABEL = ServiceProvider.OPENAI.value
DEFAULT_AZURE_API_VERSION = "2023-08-01-preview"
DEFAULT_GOOGLE_API_VERSION = "v1"

# GitHub issue tracker
GITHUB_API_BASE = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"

# ShareGPT paste-bin service
SHAREGPT_API_URL = "https://sharegpt.com/api/conversations"
SHAREGPT_PUBLIC_BASE = "https://shareg.pt"

# Build modes
BUILD_MODE_STANDALONE = "standalone"
BUILD_MODE_EXPORT = "export"
