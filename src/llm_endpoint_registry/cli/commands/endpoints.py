"""Endpoint management commands for the LER CLI."""

from typing import Optional

import click

from ...constants import ServiceProvider
from ...errors import EntryNotFoundError, ValidationError
from ...models import Endpoint, create_endpoint, now_ms
from ...validation import validate_endpoint
from ..formatters import (
    create_console,
    endpoint_to_json,
    format_endpoint_detail,
    format_endpoints_json,
    format_endpoints_table,
    format_json,
)
from ..utils import ExitCode, endpoint_options, get_store, handle_error, reveal_option


@click.group()
def endpoints() -> None:
    """Manage configured API endpoints."""
    pass


@endpoints.command("list")
@reveal_option
@click.pass_context
def list_endpoints(ctx: click.Context, reveal: bool) -> None:
    """List all endpoints; the default one is marked."""
    try:
        store = get_store(ctx)
        entries = store.endpoints.entries()
        default = store.get_default_endpoint()
        default_id = default.id if default else ""

        if ctx.obj["format"] == "json":
            format_json(format_endpoints_json(entries, default_id, reveal))
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            if entries:
                format_endpoints_table(entries, default_id, console, reveal)
            else:
                console.print("[dim]No endpoints configured[/dim]")
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@endpoints.command()
@click.argument("endpoint_id")
@reveal_option
@click.pass_context
def show(ctx: click.Context, endpoint_id: str, reveal: bool) -> None:
    """Show one endpoint.

    ENDPOINT_ID is the id shown by `ler endpoints list`.
    """
    store = get_store(ctx)
    endpoint = store.get_endpoint(endpoint_id)
    if endpoint is None:
        handle_error(click.ClickException(f"Endpoint '{endpoint_id}' not found"), ExitCode.NOT_FOUND)
        return

    default = store.get_default_endpoint()
    if ctx.obj["format"] == "json":
        format_json(endpoint_to_json(endpoint, default.id if default else "", reveal))
    else:
        format_endpoint_detail(endpoint, create_console(no_color=ctx.obj["no_color"]), reveal)


@endpoints.command()
@endpoint_options
@click.option("--default", "make_default", is_flag=True, help="Make this the default endpoint.")
@click.option("--skip-validation", is_flag=True, help="Store the endpoint even if fields are missing.")
@click.pass_context
def add(
    ctx: click.Context,
    endpoint_id: Optional[str],
    name: str,
    provider: Optional[ServiceProvider],
    api_url: str,
    api_key: str,
    api_version: str,
    models: str,
    gen_title: bool,
    make_default: bool,
    skip_validation: bool,
) -> None:
    """Add an endpoint, or replace the one with the same --id."""
    store = get_store(ctx)

    existing = store.get_endpoint(endpoint_id) if endpoint_id else None
    if existing is not None and existing.is_system:
        handle_error(click.ClickException("The system endpoint is managed by the server"), ExitCode.INVALID_USAGE)
        return

    endpoint: Endpoint = create_endpoint(provider)
    if endpoint_id:
        endpoint.id = endpoint_id
    endpoint.name = name
    endpoint.api_url = api_url
    endpoint.api_key = api_key
    endpoint.api_version = api_version
    endpoint.models = models
    endpoint.gen_title = gen_title
    endpoint.created_at = existing.created_at if existing is not None else now_ms()

    if not skip_validation:
        try:
            validate_endpoint(endpoint)
        except ValidationError as e:
            handle_error(e, ExitCode.INVALID_USAGE)
            return

    try:
        store.add_or_update_endpoint(endpoint)
        if make_default:
            store.endpoints.set_default(endpoint.id)
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        return

    action = "Updated" if existing is not None else "Added"
    click.echo(f"{action} endpoint {endpoint.id}")


@endpoints.command()
@click.argument("endpoint_id")
@click.pass_context
def remove(ctx: click.Context, endpoint_id: str) -> None:
    """Remove an endpoint."""
    store = get_store(ctx)
    endpoint = store.get_endpoint(endpoint_id)
    if endpoint is None:
        handle_error(click.ClickException(f"Endpoint '{endpoint_id}' not found"), ExitCode.NOT_FOUND)
        return
    if endpoint.is_system:
        handle_error(click.ClickException("The system endpoint is managed by the server"), ExitCode.INVALID_USAGE)
        return

    try:
        store.remove_endpoint(endpoint_id)
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        return
    click.echo(f"Removed endpoint {endpoint_id}")


@endpoints.command("set-default")
@click.argument("endpoint_id")
@click.pass_context
def set_default(ctx: click.Context, endpoint_id: str) -> None:
    """Make an endpoint the default."""
    store = get_store(ctx)
    try:
        store.endpoints.set_default(endpoint_id)
    except EntryNotFoundError as e:
        handle_error(e, ExitCode.NOT_FOUND)
        return
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        return
    click.echo(f"Default endpoint is now {endpoint_id}")
