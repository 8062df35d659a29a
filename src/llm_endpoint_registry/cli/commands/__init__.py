"""CLI commands package."""

# Import all command modules to make them available
from . import config, endpoints, headers, share_providers

__all__ = ["endpoints", "share_providers", "config", "headers"]
