"""Access configuration commands for the LER CLI."""

from typing import Any, Dict

import click

from ...access import FetchState
from ...constants import SYSTEM_ENDPOINT_ID, StoreKey
from ...models import SNAKE_TO_WIRE, WIRE_TO_SNAKE
from ..formatters import (
    create_console,
    format_access_state_json,
    format_access_state_table,
    format_env_vars_json,
    format_env_vars_table,
    format_json,
    format_store_paths_json,
    format_store_paths_table,
)
from ..utils import ExitCode, get_ler_env_vars, get_store, handle_error, reveal_option

# Fields edited through their own commands
_LIST_FIELDS = ("endpoints", "share_providers", "default_endpoint", "default_share_provider_id")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@click.group()
def config() -> None:
    """Inspect and edit the access configuration."""
    pass


@config.command()
@click.pass_context
def fetch(ctx: click.Context) -> None:
    """Merge the server's declared defaults into the configuration.

    Posts to the backing server's config endpoint (LER_SERVER_URL) once and
    stores the result, including the server-managed system endpoint.
    """
    store = get_store(ctx)
    if store.client_config.is_export:
        click.echo("Export build: there is no backing server to fetch from.")
        return

    store.fetch_server_defaults()
    system_endpoint = store.get_endpoint(SYSTEM_ENDPOINT_ID)
    if store.fetch_state != FetchState.DONE or system_endpoint is None:
        handle_error(
            click.ClickException(f"Could not fetch server config from {store.client_config.server_url}"),
            ExitCode.DATA_SOURCE_ERROR,
        )
        return

    state = store.state
    if ctx.obj["format"] == "json":
        format_json(
            {
                "success": True,
                "server_url": store.client_config.server_url,
                "need_code": state.need_code,
                "default_provider": state.default_provider.value if state.default_provider else None,
                "system_endpoint": system_endpoint.to_dict(),
            }
        )
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        console.print(f"✅ [green]Fetched server config from {store.client_config.server_url}[/green]")
        provider = system_endpoint.provider.value if system_endpoint.provider else "N/A"
        console.print(f"[bold]System endpoint:[/bold] {provider} {system_endpoint.api_version}")
        console.print(f"[bold]Access code required:[/bold] {state.need_code}")


@config.command()
@reveal_option
@click.pass_context
def show(ctx: click.Context, reveal: bool) -> None:
    """Show access flags and legacy provider keys."""
    try:
        state = get_store(ctx).state
        if ctx.obj["format"] == "json":
            format_json(format_access_state_json(state, reveal))
        else:
            format_access_state_table(state, create_console(no_color=ctx.obj["no_color"]), reveal)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_value(ctx: click.Context, key: str, value: str) -> None:
    """Set one access setting, e.g. `ler config set accessCode abc`.

    KEY may be the camelCase name shown by `ler config show` or its
    snake_case form.
    """
    name = WIRE_TO_SNAKE.get(key) or (key if key in SNAKE_TO_WIRE else None)
    if name is None or name in _LIST_FIELDS:
        handle_error(click.BadParameter(f"Unknown or read-only setting '{key}'"), ExitCode.INVALID_USAGE)
        return

    store = get_store(ctx)
    current = getattr(store.state, name)
    decoded: Any = value
    if isinstance(current, bool):
        lowered = value.lower()
        if lowered not in _TRUE_VALUES + _FALSE_VALUES:
            handle_error(click.BadParameter(f"'{key}' expects true or false"), ExitCode.INVALID_USAGE)
            return
        decoded = lowered in _TRUE_VALUES

    try:
        merged = store.state.merge({name: decoded})
        store.update(**{name: getattr(merged, name)})
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        return
    click.echo(f"Set {SNAKE_TO_WIRE[name]}")


@config.command()
@click.pass_context
def paths(ctx: click.Context) -> None:
    """Show where the configuration is stored."""
    try:
        storage = get_store(ctx).persisted_store.storage
        result: Dict[str, Any] = {}
        for key in StoreKey:
            location = storage.describe(key.value)
            path_for = getattr(storage, "path_for", None)
            exists = path_for(key.value).exists() if path_for is not None else False
            result[key.value] = {"path": location, "exists": exists}

        if ctx.obj["format"] == "json":
            format_json(format_store_paths_json(result))
        else:
            format_store_paths_table(result, create_console(no_color=ctx.obj["no_color"]))
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@config.command()
@click.pass_context
def env(ctx: click.Context) -> None:
    """Show effective LER environment variables."""
    try:
        env_vars = get_ler_env_vars()
        if ctx.obj["format"] == "json":
            format_json(format_env_vars_json(env_vars))
        else:
            format_env_vars_table(env_vars, create_console(no_color=ctx.obj["no_color"]))
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@config.command()
@click.option("--yes", is_flag=True, help="Confirm without prompting (required for non-interactive use).")
@click.pass_context
def reset(ctx: click.Context, yes: bool) -> None:
    """Delete the stored access configuration and return to defaults."""
    if not yes and not click.confirm("This deletes all endpoints and share providers. Continue?"):
        click.echo("Reset cancelled.")
        return
    try:
        get_store(ctx).reset()
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        return
    click.echo("Access configuration reset")
