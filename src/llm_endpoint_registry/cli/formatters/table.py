"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, Optional, Sequence, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ...models import AccessState, Endpoint, ShareProvider
from ..utils.helpers import mask_secret


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    # Let Rich use the actual terminal width to avoid truncating headers
    return Console(file=output, no_color=no_color)


def _format_value(value: Any) -> str:
    if value is None or value == "":
        return "N/A"
    if isinstance(value, bool):
        return "✓" if value else "✗"
    return str(value)


def format_endpoints_table(
    endpoints: Sequence[Endpoint],
    default_id: str,
    console: Optional[Console] = None,
    reveal: bool = False,
) -> None:
    """Format endpoints as a Rich table.

    Args:
        endpoints: Endpoints in registry order
        default_id: Id of the default endpoint
        console: Rich console (will create if None)
        reveal: Show API keys verbatim
    """
    if console is None:
        console = create_console()

    table = Table(title="Endpoints", show_header=True, header_style="bold magenta")

    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Provider", style="yellow")
    table.add_column("API URL", style="dim")
    table.add_column("API Key", style="dim")
    table.add_column("Type")
    table.add_column("Title", justify="center")
    table.add_column("Default", justify="center")

    for endpoint in endpoints:
        is_default = endpoint.id == default_id
        table.add_row(
            endpoint.id,
            _format_value(endpoint.name),
            endpoint.provider.value if endpoint.provider else "N/A",
            _format_value(endpoint.api_url),
            _format_value(endpoint.api_key if reveal else mask_secret(endpoint.api_key)),
            endpoint.type,
            _format_value(endpoint.gen_title),
            Text("✓" if is_default else "", style="bold green"),
            style="bold" if is_default else "",
        )

    console.print(table)


def format_endpoint_detail(endpoint: Endpoint, console: Optional[Console] = None, reveal: bool = False) -> None:
    """Print one endpoint as a field/value listing."""
    if console is None:
        console = create_console()

    table = Table(title=f"Endpoint {endpoint.id}", show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    record = endpoint.to_dict()
    if not reveal:
        record["apiKey"] = mask_secret(endpoint.api_key)
    for key, value in record.items():
        table.add_row(key, _format_value(value))

    console.print(table)


def format_share_providers_table(
    providers: Sequence[ShareProvider],
    default_id: str,
    console: Optional[Console] = None,
) -> None:
    """Format share providers as a Rich table.

    Args:
        providers: Providers in registry order
        default_id: Id of the default provider
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Share Providers", show_header=True, header_style="bold magenta")

    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Type", style="yellow")
    table.add_column("Target", style="dim")
    table.add_column("Default", justify="center")

    for provider in providers:
        params = provider.params.to_dict()
        target = "/".join(v for v in (params.get("githubOwner"), params.get("githubRepo")) if v)
        is_default = provider.id == default_id
        table.add_row(
            provider.id,
            _format_value(provider.name),
            provider.type,
            _format_value(target),
            Text("✓" if is_default else "", style="bold green"),
        )

    console.print(table)


def format_access_state_table(state: AccessState, console: Optional[Console] = None, reveal: bool = False) -> None:
    """Format the access flags and legacy keys as a Rich table."""
    if console is None:
        console = create_console()

    table = Table(title="Access Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    secrets = ("accessCode", "openaiApiKey", "azureApiKey", "googleApiKey")
    for key, value in state.to_dict().items():
        if key in ("endpoints", "shareProviders"):
            value = len(value)
        elif key in secrets and not reveal:
            value = mask_secret(value)
        table.add_row(key, _format_value(value))

    console.print(table)


def format_headers_table(headers: Dict[str, str], console: Optional[Console] = None) -> None:
    """Format resolved request headers as a Rich table."""
    if console is None:
        console = create_console()

    table = Table(title="Request Headers", show_header=True, header_style="bold magenta")
    table.add_column("Header", style="cyan")
    table.add_column("Value")

    for name, value in headers.items():
        table.add_row(name, value)

    console.print(table)


def format_store_paths_table(paths: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Format store paths as a Rich table.

    Args:
        paths: Path information
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Store Files", show_header=True, header_style="bold magenta")

    table.add_column("Store", style="cyan")
    table.add_column("Path", style="dim")
    table.add_column("Status", justify="center")

    for name, path_info in paths.items():
        exists = path_info.get("exists", False)
        status = "✓" if exists else "✗"
        status_style = "green" if exists else "red"
        table.add_row(name, path_info.get("path", "N/A"), Text(status, style=status_style))

    console.print(table)


def format_env_vars_table(env_vars: Dict[str, Optional[str]], console: Optional[Console] = None) -> None:
    """Format environment variables as a Rich table.

    Args:
        env_vars: Environment variables
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="LER Environment Variables", show_header=True, header_style="bold magenta")

    table.add_column("Variable", style="cyan")
    table.add_column("Value", style="yellow")
    table.add_column("Set", justify="center")

    for key, value in sorted(env_vars.items()):
        is_set = value is not None
        display_value = value if is_set else "[dim]<not set>[/dim]"
        status = "✓" if is_set else "✗"
        status_style = "green" if is_set else "red"

        table.add_row(key, display_value, Text(status, style=status_style))

    console.print(table)
