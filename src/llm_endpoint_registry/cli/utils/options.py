"""Common CLI options and decorators."""

from functools import wraps
from typing import Any, Callable, Optional, TypeVar, cast

import click

from ...constants import ServiceProvider
from ...models import ShareProviderType

F = TypeVar("F", bound=Callable[..., Any])


def validate_service_provider(provider: Optional[str]) -> Optional[ServiceProvider]:
    """Validate and normalize a provider name.

    Args:
        provider: Provider name to validate

    Returns:
        The provider, or None when not given

    Raises:
        click.BadParameter: If provider is invalid
    """
    if not provider:
        return None
    for candidate in ServiceProvider:
        if candidate.value.lower() == provider.lower():
            return candidate
    valid = ", ".join(p.value for p in ServiceProvider)
    raise click.BadParameter(f"Invalid provider '{provider}'. Must be one of: {valid}")


def endpoint_options(func: F) -> F:
    """Add the endpoint field options to a command."""

    @click.option("--id", "endpoint_id", type=str, help="Endpoint id. Updates the endpoint if it exists.")
    @click.option("--name", type=str, required=True, help="Display name.")
    @click.option(
        "--provider",
        type=str,
        default=ServiceProvider.OPENAI.value,
        show_default=True,
        help="Provider family (OpenAI, Azure, Google).",
    )
    @click.option("--api-url", type=str, default="", help="Base URL of the API.")
    @click.option("--api-key", type=str, default="", help="API key sent with requests.")
    @click.option("--api-version", type=str, default="", help="API version string.")
    @click.option("--models", type=str, default="", help="Comma-separated model allow-list.")
    @click.option("--gen-title/--no-gen-title", default=False, help="Allow this endpoint to title conversations.")
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        kwargs["provider"] = validate_service_provider(kwargs.get("provider"))
        return func(*args, **kwargs)

    return cast(F, wrapper)


def share_provider_options(func: F) -> F:
    """Add the share provider field options to a command."""

    @click.option("--id", "provider_id", type=str, help="Provider id. Updates the provider if it exists.")
    @click.option("--name", type=str, required=True, help="Display name.")
    @click.option(
        "--type",
        "share_type",
        type=click.Choice([t.value for t in ShareProviderType], case_sensitive=False),
        default=ShareProviderType.SHAREGPT.value,
        show_default=True,
        help="Share destination type.",
    )
    @click.option("--owner", type=str, default="", help="GitHub repository owner.")
    @click.option("--repo", type=str, default="", help="GitHub repository name.")
    @click.option("--token", type=str, default="", help="GitHub token.")
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return cast(F, wrapper)


def reveal_option(func: F) -> F:
    """Add --reveal option to a command."""

    @click.option("--reveal", is_flag=True, help="Show credentials instead of masking them.")
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    return cast(F, wrapper)
