"""Schema migrations for the persisted access record.

Each step takes the raw persisted mapping at version ``n`` and returns the
mapping at version ``n + 1``. Steps are pure, never raise, and leave an
already-migrated mapping unchanged, so replaying one is harmless.
"""

import copy
from typing import Any, Callable, Dict

from .constants import DEFAULT_AZURE_API_VERSION, ENDPOINT_TYPE_USER
from .logging import LogEvent, log_info, log_warning

MigrationStep = Callable[[Dict[str, Any]], Dict[str, Any]]

CURRENT_ACCESS_VERSION = 3


def _v1_to_v2(state: Dict[str, Any]) -> Dict[str, Any]:
    """Move the legacy single ``token`` into the OpenAI key and backfill the Azure API version."""
    if "token" in state:
        token = state.pop("token")
        if token and not state.get("openaiApiKey"):
            state["openaiApiKey"] = str(token)
    if not state.get("azureApiVersion"):
        state["azureApiVersion"] = DEFAULT_AZURE_API_VERSION
    return state


def _v2_to_v3(state: Dict[str, Any]) -> Dict[str, Any]:
    """Backfill endpoint flags added after version 2."""
    for key in ("endpoints", "shareProviders"):
        if not isinstance(state.get(key), list):
            state[key] = []

    endpoints = []
    for endpoint in state["endpoints"]:
        if not isinstance(endpoint, dict):
            continue
        endpoint.setdefault("genTitle", False)
        if not endpoint.get("type"):
            endpoint["type"] = ENDPOINT_TYPE_USER
        endpoints.append(endpoint)
    state["endpoints"] = endpoints
    state["shareProviders"] = [p for p in state["shareProviders"] if isinstance(p, dict)]
    return state


# Keyed by the version a step migrates *from*. Version 0 covers records
# written before versioning; it reuses the 1 -> 2 step, which is idempotent.
MIGRATIONS: Dict[int, MigrationStep] = {
    0: _v1_to_v2,
    1: _v1_to_v2,
    2: _v2_to_v3,
}


def migrate_access_state(
    persisted: Any,
    version: int,
    target: int = CURRENT_ACCESS_VERSION,
) -> Dict[str, Any]:
    """Apply every migration step from ``version`` up to ``target``.

    Args:
        persisted: Raw persisted mapping (anything else becomes an empty mapping)
        version: Version the mapping was written with
        target: Version to migrate to

    Returns:
        Migrated copy of the mapping
    """
    state: Dict[str, Any] = copy.deepcopy(persisted) if isinstance(persisted, dict) else {}

    if version > target:
        log_warning(
            LogEvent.MIGRATION,
            "Stored access state is newer than this version, loading as-is",
            stored_version=version,
            current_version=target,
        )
        return state

    current = max(version, 0)
    while current < target:
        step = MIGRATIONS.get(current)
        if step is not None:
            state = step(state)
            log_info(LogEvent.MIGRATION, "Migrated access state", from_version=current, to_version=current + 1)
        current += 1
    return state
