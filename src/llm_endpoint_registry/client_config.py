"""Client build configuration.

Describes how the client is deployed: whether it has a backing server at all
(``export`` builds are pure static exports), whether it runs embedded in a
desktop host (app mode), and where the backing server lives.
"""

import os
from dataclasses import dataclass

from .constants import BUILD_MODE_EXPORT, BUILD_MODE_STANDALONE

# Environment variables (all prefixed with LER_)
ENV_BUILD_MODE = "LER_BUILD_MODE"
ENV_IS_APP = "LER_IS_APP"
ENV_SERVER_URL = "LER_SERVER_URL"
ENV_REQUEST_TIMEOUT = "LER_REQUEST_TIMEOUT"

DEFAULT_SERVER_URL = "http://localhost:3000"
DEFAULT_REQUEST_TIMEOUT = 30.0


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class ClientConfig:
    """Deployment configuration for the client.

    Attributes:
        build_mode: ``"standalone"`` (has a backing server) or ``"export"``
        is_app: Whether the client runs embedded in a desktop host
        server_url: Base URL of the backing server, used for relay paths
        request_timeout: Timeout in seconds for outbound requests
    """

    build_mode: str = BUILD_MODE_STANDALONE
    is_app: bool = False
    server_url: str = DEFAULT_SERVER_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        if self.build_mode not in (BUILD_MODE_STANDALONE, BUILD_MODE_EXPORT):
            raise ValueError(f"build_mode must be '{BUILD_MODE_STANDALONE}' or '{BUILD_MODE_EXPORT}'")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

    @property
    def is_export(self) -> bool:
        """Whether this is a static export build without a backing server."""
        return self.build_mode == BUILD_MODE_EXPORT

    def server_path(self, path: str) -> str:
        """Join a same-origin relay path onto the server URL."""
        return f"{self.server_url.rstrip('/')}/{path.lstrip('/')}"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a configuration from ``LER_*`` environment variables.

        Returns:
            ClientConfig with defaults for anything unset
        """
        timeout_raw = os.getenv(ENV_REQUEST_TIMEOUT)
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT
        except ValueError:
            raise ValueError(f"{ENV_REQUEST_TIMEOUT} must be a number, got '{timeout_raw}'")

        return cls(
            build_mode=os.getenv(ENV_BUILD_MODE, BUILD_MODE_STANDALONE).lower(),
            is_app=_env_flag(ENV_IS_APP),
            server_url=os.getenv(ENV_SERVER_URL, DEFAULT_SERVER_URL),
            request_timeout=timeout,
        )
