"""Helper functions for CLI operations."""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from ...access import AccessStore
from ...client_config import ClientConfig
from ...headers import mask_secret
from ...storage import FileStorage


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    NOT_FOUND = 3
    DATA_SOURCE_ERROR = 4


# Environment variables the CLI and library read
LER_ENV_VARS: List[str] = [
    "LER_STORE_DIR",
    "LER_BUILD_MODE",
    "LER_IS_APP",
    "LER_SERVER_URL",
    "LER_REQUEST_TIMEOUT",
]


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    # Auto-detect based on TTY
    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def handle_error(error: Exception, exit_code: int = ExitCode.GENERIC_ERROR) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use
    """
    click.echo(f"Error: {str(error)}", err=True)
    sys.exit(exit_code)


def get_ler_env_vars() -> Dict[str, Optional[str]]:
    """Get all LER_* environment variables.

    Returns:
        Dictionary of LER environment variables and their values
    """
    ler_vars: Dict[str, Optional[str]] = {}
    for key, value in os.environ.items():
        if key.startswith("LER_"):
            ler_vars[key] = value

    # Include known variables even if not set
    for var in LER_ENV_VARS:
        if var not in ler_vars:
            ler_vars[var] = None

    return ler_vars


def get_store(ctx: click.Context) -> AccessStore:
    """Get the access store for this invocation, creating it on first use.

    A store placed in ``ctx.obj["store"]`` by the caller is used as-is.

    Args:
        ctx: Click context

    Returns:
        The AccessStore
    """
    obj: Dict[str, Any] = ctx.find_root().obj
    store = obj.get("store")
    if store is None:
        store_dir = obj.get("store_dir")
        storage = FileStorage(Path(store_dir)) if store_dir else FileStorage()
        store = AccessStore(storage=storage, client_config=ClientConfig.from_env())
        if not store.load_result.success:
            click.echo(f"Warning: {store.load_result.error}; using defaults", err=True)
        obj["store"] = store
    return store
