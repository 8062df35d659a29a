"""Checks run by editing flows before an entry is handed to a registry.

The registries store whatever they are given; these helpers are how callers
keep malformed entries out.
"""

from .errors import ValidationError
from .models import Endpoint, GithubParams, ShareProvider, ShareProviderType

ENDPOINT_REQUIRED_FIELDS = ("name", "api_url", "api_key", "api_version")
URL_SCHEMES = ("http://", "https://")


def validate_endpoint(endpoint: Endpoint) -> None:
    """Validate a user-edited endpoint.

    Args:
        endpoint: Endpoint to check

    Raises:
        ValidationError: If a required field is empty or the URL has no http(s) scheme
    """
    for name in ENDPOINT_REQUIRED_FIELDS:
        if not str(getattr(endpoint, name)).strip():
            raise ValidationError(f"{name} cannot be empty", field=name)

    if not endpoint.api_url.strip().lower().startswith(URL_SCHEMES):
        raise ValidationError("URL should start with http:// or https://", field="api_url")


def validate_share_provider(provider: ShareProvider) -> None:
    """Validate a user-edited share provider.

    Raises:
        ValidationError: If the name is empty, or a GitHub provider lacks owner, repo or token
    """
    if not provider.name.strip():
        raise ValidationError("name cannot be empty", field="name")

    if provider.known_type == ShareProviderType.GITHUB:
        params = provider.params
        if not isinstance(params, GithubParams):
            raise ValidationError("GitHub provider has no GitHub parameters", field="params")
        for field_name, value in (("owner", params.owner), ("repo", params.repo), ("token", params.token)):
            if not value.strip():
                raise ValidationError(f"{field_name} cannot be empty", field=field_name)
