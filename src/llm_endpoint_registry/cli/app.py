"""Main CLI application for the LLM Endpoint Registry."""

import json
from typing import Any, Dict, Optional

import click
import rich_click as rich_click

from ..logging import configure_logging
from .utils import resolve_format
from .utils.helpers import LER_ENV_VARS

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


def _library_version() -> str:
    try:
        from .. import __version__

        return __version__
    except ImportError:
        return "unknown"


def _show_version(ctx: click.Context) -> None:
    """Print version information and exit."""
    click.echo(f"ler version: {_library_version()}")
    ctx.exit()


def _show_json_help(ctx: click.Context) -> None:
    """Show JSON help built from the registered commands and exit."""
    root = ctx.find_root().command
    commands: Dict[str, Dict[str, Any]] = {}
    if isinstance(root, click.Group):
        for name, command in sorted(root.commands.items()):
            entry: Dict[str, Any] = {"description": command.get_short_help_str(limit=120)}
            if isinstance(command, click.Group):
                entry["subcommands"] = {
                    sub_name: {"description": sub.get_short_help_str(limit=120)}
                    for sub_name, sub in sorted(command.commands.items())
                }
            commands[name] = entry

    help_data = {
        "command": "ler",
        "description": "LLM Endpoint Registry CLI - manage endpoints, share providers and request headers",
        "usage": "ler [OPTIONS] COMMAND [ARGS]...",
        "version": _library_version(),
        "global_options": [
            {"name": param.opts[0], "help": getattr(param, "help", "") or ""}
            for param in ctx.command.params
            if isinstance(param, click.Option)
        ],
        "commands": commands,
        "exit_codes": {
            "0": "Success",
            "1": "Generic error",
            "2": "Invalid usage",
            "3": "Entry not found",
            "4": "Store or server config unavailable",
        },
        "environment_variables": LER_ENV_VARS,
    }

    click.echo(json.dumps(help_data, indent=2, sort_keys=True))
    ctx.exit()


@click.group()
@click.option(
    "--format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option(
    "--store-dir",
    type=click.Path(file_okay=False),
    help="Directory holding the store files. Takes precedence over LER_STORE_DIR.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option(
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: _show_version(ctx) if value else None,
    help="Print CLI and library version information.",
)
@click.option(
    "--help-json",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: _show_json_help(ctx) if value else None,
    help="Show help in JSON format for programmatic use.",
)
@click.pass_context
def app(
    ctx: click.Context,
    format: Optional[str] = None,
    store_dir: Optional[str] = None,
    verbose: int = 0,
    quiet: int = 0,
    debug: bool = False,
    no_color: bool = False,
) -> None:
    """LLM Endpoint Registry CLI - manage endpoints, share providers and request headers.

    Configuration is stored as YAML in the user config directory, or in
    LER_STORE_DIR / --store-dir when given.

    Examples:
      # Add an Azure endpoint and make it the default
      ler endpoints add --name work --provider Azure --api-url https://x.openai.azure.com --api-key KEY --api-version 2024-02-01 --default

      # Pull the server's defaults (LER_SERVER_URL)
      ler config fetch

      # Show the headers a request would carry
      ler headers --model gpt-4o
    """
    # Store global options in context for subcommands
    ctx.ensure_object(dict)

    # Configure logging level based on verbosity
    log_level = "WARNING"
    if debug:
        log_level = "DEBUG"
    elif verbose > quiet:
        if verbose >= 2:
            log_level = "DEBUG"
        elif verbose >= 1:
            log_level = "INFO"
    elif quiet > verbose:
        log_level = "ERROR"
    configure_logging(log_level)

    ctx.obj.update(
        {
            "format": resolve_format(format),
            "format_explicit": format is not None,
            "store_dir": store_dir,
            "verbose": verbose,
            "quiet": quiet,
            "debug": debug,
            "no_color": no_color,
            "log_level": log_level,
        }
    )


# Import and register subcommands after the group exists
from .commands import config, endpoints, headers, share_providers  # noqa: E402

app.add_command(endpoints.endpoints)
app.add_command(share_providers.share_providers)
app.add_command(config.config)
app.add_command(headers.headers)


if __name__ == "__main__":
    app()
