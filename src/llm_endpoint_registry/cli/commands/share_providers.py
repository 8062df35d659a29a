"""Share provider management commands for the LER CLI."""

from typing import Optional

import click

from ...errors import EntryNotFoundError, ValidationError
from ...models import GithubParams, ShareGPTParams, ShareParams, ShareProvider, ShareProviderType, new_id, now_ms
from ...validation import validate_share_provider
from ..formatters import create_console, format_json, format_share_providers_json, format_share_providers_table
from ..utils import ExitCode, get_store, handle_error, reveal_option, share_provider_options


@click.group("share-providers")
def share_providers() -> None:
    """Manage destinations conversations are shared to."""
    pass


@share_providers.command("list")
@reveal_option
@click.pass_context
def list_share_providers(ctx: click.Context, reveal: bool) -> None:
    """List all share providers; the default one is marked."""
    try:
        store = get_store(ctx)
        providers = store.share_providers.entries()
        default = store.get_default_share_provider()
        default_id = default.id if default else ""

        if ctx.obj["format"] == "json":
            format_json(format_share_providers_json(providers, default_id, reveal))
        else:
            format_share_providers_table(providers, default_id, create_console(no_color=ctx.obj["no_color"]))
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@share_providers.command()
@share_provider_options
@click.pass_context
def add(
    ctx: click.Context,
    provider_id: Optional[str],
    name: str,
    share_type: str,
    owner: str,
    repo: str,
    token: str,
) -> None:
    """Add a share provider, or update the one with the same --id."""
    store = get_store(ctx)

    # click.Choice keeps the user's casing; normalize to the canonical value
    canonical = next(t for t in ShareProviderType if t.value.lower() == share_type.lower())
    params: ShareParams
    if canonical == ShareProviderType.GITHUB:
        params = GithubParams(owner=owner, repo=repo, token=token)
    else:
        params = ShareGPTParams()

    existing = store.get_share_provider(provider_id) if provider_id else None
    provider = ShareProvider(
        id=provider_id or new_id(),
        name=name,
        type=canonical.value,
        params=params,
        created_at=existing.created_at if existing is not None else now_ms(),
    )

    try:
        validate_share_provider(provider)
    except ValidationError as e:
        handle_error(e, ExitCode.INVALID_USAGE)
        return

    try:
        if existing is not None:
            store.update_share_provider(provider)
        else:
            store.add_share_provider(provider)
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        return

    action = "Updated" if existing is not None else "Added"
    click.echo(f"{action} share provider {provider.id}")


@share_providers.command()
@click.argument("provider_id")
@click.pass_context
def remove(ctx: click.Context, provider_id: str) -> None:
    """Remove a share provider."""
    store = get_store(ctx)
    try:
        removed = store.remove_share_provider(provider_id)
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        return
    if not removed:
        handle_error(click.ClickException(f"Share provider '{provider_id}' not found"), ExitCode.NOT_FOUND)
        return
    click.echo(f"Removed share provider {provider_id}")


@share_providers.command("set-default")
@click.argument("provider_id")
@click.pass_context
def set_default(ctx: click.Context, provider_id: str) -> None:
    """Make a share provider the default."""
    store = get_store(ctx)
    try:
        store.share_providers.set_default(provider_id)
    except EntryNotFoundError as e:
        handle_error(e, ExitCode.NOT_FOUND)
        return
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        return
    click.echo(f"Default share provider is now {provider_id}")


@share_providers.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Seed the built-in share provider if none are configured."""
    store = get_store(ctx)
    try:
        seeded = store.init_default_share_provider()
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        return
    if seeded:
        click.echo("Seeded the default share provider")
    else:
        click.echo("Share providers already configured; nothing to do")
