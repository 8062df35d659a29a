"""Outbound request header resolution.

Builds the header set attached to chat, config and share requests from the
access state and, optionally, the endpoint the request targets.
"""

from typing import Dict, Optional

from .client_config import ClientConfig
from .constants import ACCESS_CODE_PREFIX, DEFAULT_PROVIDER_LABEL, ServiceProvider
from .logging import LogEvent, log_debug
from .models import AccessState, Endpoint

HEADER_CONTENT_TYPE = "Content-Type"
HEADER_REQUESTED_WITH = "x-requested-with"
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_AZURE_KEY = "api-key"

# Diagnostic headers describing the target endpoint
HEADER_BASE_URL = "x-base-url"
HEADER_PROVIDER = "x-provider"
HEADER_API_VERSION = "x-api-version"

CREDENTIAL_HEADERS = frozenset({HEADER_AUTHORIZATION, HEADER_AZURE_KEY})


def base_headers() -> Dict[str, str]:
    """Headers sent with every request."""
    return {
        HEADER_CONTENT_TYPE: "application/json",
        HEADER_REQUESTED_WITH: "XMLHttpRequest",
        HEADER_ACCEPT: "application/json",
    }


def is_google_model(model: Optional[str]) -> bool:
    """Whether a model id belongs to the Google (Gemini) family."""
    return bool(model) and str(model).strip().lower().startswith("gemini")


def _credential_header(provider: Optional[ServiceProvider], secret: str) -> Dict[str, str]:
    if provider == ServiceProvider.AZURE:
        return {HEADER_AZURE_KEY: secret}
    return {HEADER_AUTHORIZATION: f"Bearer {secret}"}


def resolve_headers(
    access: AccessState,
    endpoint: Optional[Endpoint] = None,
    model: Optional[str] = None,
    client_config: Optional[ClientConfig] = None,
) -> Dict[str, str]:
    """Resolve the headers for an outbound request.

    Without an endpoint only the base headers are returned. With one, the
    diagnostic headers are added and a credential is chosen, first match
    wins:

    1. Gemini model in app mode: no credential, the host injects its own.
    2. Endpoint API key: ``api-key`` for Azure, ``Authorization: Bearer`` otherwise.
    3. Access control on and an access code set: the code with the access-code
       prefix, same header rule as above.
    4. Nothing.

    Args:
        access: Current access state (read only)
        endpoint: Endpoint the request targets, if any
        model: Model id the request is for
        client_config: Deployment configuration (defaults to a standalone web build)

    Returns:
        Header name to value mapping
    """
    headers = base_headers()
    if endpoint is None:
        return headers

    client_config = client_config or ClientConfig()
    provider = endpoint.provider
    headers[HEADER_BASE_URL] = endpoint.api_url
    headers[HEADER_PROVIDER] = provider.value if provider else DEFAULT_PROVIDER_LABEL
    headers[HEADER_API_VERSION] = endpoint.api_version

    if is_google_model(model) and client_config.is_app:
        log_debug(LogEvent.HEADERS, "App host supplies credentials for Google model", endpoint=endpoint.id)
        return headers

    api_key = endpoint.api_key.strip()
    if api_key:
        headers.update(_credential_header(provider, api_key))
        log_debug(LogEvent.HEADERS, "Using endpoint API key", endpoint=endpoint.id)
    elif access.need_code and access.access_code:
        headers.update(_credential_header(provider, (ACCESS_CODE_PREFIX + access.access_code).strip()))
        log_debug(LogEvent.HEADERS, "Using access code", endpoint=endpoint.id)
    else:
        log_debug(LogEvent.HEADERS, "No credential available", endpoint=endpoint.id)

    return headers


def mask_secret(value: Optional[str]) -> str:
    """Mask a credential for display, keeping the last four characters of long values.

    Args:
        value: Secret to mask

    Returns:
        Masked string, or an empty string when there is no secret
    """
    if not value:
        return ""
    if len(value) <= 8:
        return "****"
    return f"****{value[-4:]}"


def mask_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Copy of ``headers`` with credential values masked for display."""
    masked = dict(headers)
    for name in CREDENTIAL_HEADERS:
        value = masked.get(name)
        if value:
            prefix = "Bearer " if value.startswith("Bearer ") else ""
            masked[name] = prefix + mask_secret(value[len(prefix) :])
    return masked
