"""CLI utilities package."""

from .helpers import (
    ExitCode,
    get_ler_env_vars,
    get_store,
    handle_error,
    mask_secret,
    resolve_format,
)
from .options import (
    endpoint_options,
    reveal_option,
    share_provider_options,
    validate_service_provider,
)

__all__ = [
    "ExitCode",
    "resolve_format",
    "handle_error",
    "get_ler_env_vars",
    "get_store",
    "mask_secret",
    "endpoint_options",
    "share_provider_options",
    "reveal_option",
    "validate_service_provider",
]
