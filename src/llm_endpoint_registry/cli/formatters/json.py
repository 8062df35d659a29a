"""JSON output formatter for CLI."""

import datetime as _dt
import json
import sys
from enum import Enum as _Enum
from typing import Any, Dict, List, Optional, Sequence, TextIO

from ...models import AccessState, Endpoint, ShareProvider
from ..utils.helpers import mask_secret

# Persisted keys holding credentials
SECRET_KEYS = ("apiKey", "githubToken", "accessCode", "openaiApiKey", "azureApiKey", "googleApiKey")


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - datetime/date -> ISO 8601 string
    - Enum -> value (fallback to name)
    - Fallback -> str(obj)
    """
    if isinstance(obj, (_dt.datetime, _dt.date)):
        return obj.isoformat()
    if isinstance(obj, _Enum):
        return getattr(obj, "value", obj.name)
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        sort_keys=True,
        default=_default_serializer,
    )
    output.write("\n")


def _mask(record: Dict[str, Any]) -> Dict[str, Any]:
    masked = dict(record)
    for key in SECRET_KEYS:
        if key in masked and isinstance(masked[key], str):
            masked[key] = mask_secret(masked[key])
    if isinstance(masked.get("params"), dict):
        masked["params"] = _mask(masked["params"])
    return masked


def endpoint_to_json(endpoint: Endpoint, default_id: str = "", reveal: bool = False) -> Dict[str, Any]:
    """Serialize an endpoint, masking its key unless ``reveal``."""
    record = endpoint.to_dict()
    record["isDefault"] = endpoint.id == default_id
    return record if reveal else _mask(record)


def format_endpoints_json(endpoints: Sequence[Endpoint], default_id: str, reveal: bool = False) -> Dict[str, Any]:
    """Format the endpoint list for JSON output.

    Args:
        endpoints: Endpoints in registry order
        default_id: Id of the default endpoint
        reveal: Include credentials verbatim

    Returns:
        Formatted data structure
    """
    return {
        "endpoints": [endpoint_to_json(e, default_id, reveal) for e in endpoints],
        "default": default_id,
        "count": len(endpoints),
    }


def format_share_providers_json(
    providers: Sequence[ShareProvider], default_id: str, reveal: bool = False
) -> Dict[str, Any]:
    """Format the share provider list for JSON output."""
    records: List[Dict[str, Any]] = []
    for provider in providers:
        record = provider.to_dict()
        record["isDefault"] = provider.id == default_id
        records.append(record if reveal else _mask(record))
    return {"shareProviders": records, "default": default_id, "count": len(providers)}


def format_access_state_json(state: AccessState, reveal: bool = False) -> Dict[str, Any]:
    """Format the access flags and legacy keys for JSON output.

    Endpoint and share provider lists are summarized by count; use the
    ``endpoints`` and ``share-providers`` commands for their contents.
    """
    record = state.to_dict()
    record["endpoints"] = len(state.endpoints)
    record["shareProviders"] = len(state.share_providers)
    return record if reveal else _mask(record)


def format_store_paths_json(paths: Dict[str, Any]) -> Dict[str, Any]:
    """Format store paths for JSON output.

    Args:
        paths: Path information

    Returns:
        Formatted data structure
    """
    return {
        "stores": paths,
        "resolution_order": [
            "--store-dir option",
            "LER_STORE_DIR environment variable",
            "User config directory",
        ],
    }


def format_env_vars_json(env_vars: Dict[str, Optional[str]]) -> Dict[str, Any]:
    """Format environment variables for JSON output.

    Args:
        env_vars: Environment variables

    Returns:
        Formatted data structure
    """
    return {
        "environment_variables": {key: {"value": value, "set": value is not None} for key, value in env_vars.items()},
        "set_count": sum(1 for v in env_vars.values() if v is not None),
        "total_count": len(env_vars),
    }
