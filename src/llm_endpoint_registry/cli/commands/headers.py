"""Header resolution command for the LER CLI."""

from typing import Optional

import click

from ...headers import mask_headers
from ..formatters import create_console, format_headers_table, format_json
from ..utils import ExitCode, get_store, handle_error, reveal_option


@click.command()
@click.option("--endpoint", "endpoint_id", type=str, help="Endpoint id (defaults to the default endpoint).")
@click.option("--model", type=str, help="Model the request is for.")
@reveal_option
@click.pass_context
def headers(ctx: click.Context, endpoint_id: Optional[str], model: Optional[str], reveal: bool) -> None:
    """Show the headers a chat request would carry.

    Credentials are masked unless --reveal is given.
    """
    store = get_store(ctx)
    if endpoint_id and store.get_endpoint(endpoint_id) is None:
        handle_error(click.ClickException(f"Endpoint '{endpoint_id}' not found"), ExitCode.NOT_FOUND)
        return

    try:
        resolved = store.get_headers(endpoint_id=endpoint_id, model=model)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)
        return

    if not reveal:
        resolved = mask_headers(resolved)

    if ctx.obj["format"] == "json":
        format_json({"headers": resolved})
    else:
        format_headers_table(resolved, create_console(no_color=ctx.obj["no_color"]))
