"""CLI formatters package."""

from .json import (
    endpoint_to_json,
    format_access_state_json,
    format_endpoints_json,
    format_env_vars_json,
    format_json,
    format_share_providers_json,
    format_store_paths_json,
)
from .table import (
    create_console,
    format_access_state_table,
    format_endpoint_detail,
    format_endpoints_table,
    format_env_vars_table,
    format_headers_table,
    format_share_providers_table,
    format_store_paths_table,
)

__all__ = [
    "format_json",
    "endpoint_to_json",
    "format_endpoints_json",
    "format_share_providers_json",
    "format_access_state_json",
    "format_store_paths_json",
    "format_env_vars_json",
    "create_console",
    "format_endpoints_table",
    "format_endpoint_detail",
    "format_share_providers_table",
    "format_access_state_table",
    "format_headers_table",
    "format_store_paths_table",
    "format_env_vars_table",
]
