"""Error types for the endpoint registry.

This module defines the error types raised by the access store, its
persistence layer and the caller-side validation helpers.
"""

from typing import Optional


class EndpointRegistryError(Exception):
    """Base class for all registry-related errors.

    This is the parent class for all registry-specific exceptions.
    """

    pass


class ConfigurationError(EndpointRegistryError):
    """Base class for configuration-related errors.

    This is raised for errors related to loading, parsing or writing the
    persisted configuration.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            path: Optional path to the configuration file that caused the error
        """
        super().__init__(message)
        self.message = message
        self.path = path


class InvalidConfigFormatError(ConfigurationError):
    """Raised when a persisted store file has an invalid format.

    Examples:
        >>> try:
        ...     FileStorage(directory).load("access-control")
        ... except InvalidConfigFormatError as e:
        ...     print(f"Invalid store file {e.path}: expected {e.expected_type}")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        expected_type: str = "dict",
    ) -> None:
        """Initialize invalid format error.

        Args:
            message: Error message
            path: Optional path to the store file
            expected_type: Expected type of the document
        """
        super().__init__(message, path)
        self.expected_type = expected_type


class StoreWriteError(ConfigurationError):
    """Raised when the persisted store cannot be written."""

    pass


class NetworkError(EndpointRegistryError):
    """Raised when a network operation fails.

    Share and remote-config operations catch this internally and report
    failure by returning ``None``.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        """Initialize network error.

        Args:
            message: Error message
            url: Optional URL that was being accessed
            status_code: HTTP status code, when a response was received
        """
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code


class ValidationError(EndpointRegistryError):
    """Raised by caller-side validation of an endpoint or share provider.

    The registries themselves never validate; editing flows call
    :func:`~llm_endpoint_registry.validation.validate_endpoint` first.

    Examples:
        >>> try:
        ...     validate_endpoint(endpoint)
        ... except ValidationError as e:
        ...     print(f"{e.field}: {e.message}")
    """

    def __init__(self, message: str, field: str) -> None:
        """Initialize validation error.

        Args:
            message: Error message
            field: Name of the offending field
        """
        super().__init__(message)
        self.message = message
        self.field = field


class EntryNotFoundError(EndpointRegistryError):
    """Raised when an explicit operation names an id that is not registered."""

    def __init__(self, message: str, entry_id: str) -> None:
        """Initialize entry not found error.

        Args:
            message: Error message
            entry_id: The id that was not found
        """
        super().__init__(message)
        self.message = message
        self.entry_id = entry_id

    def __str__(self) -> str:
        """Return string representation of the error.

        Returns:
            Error message
        """
        return self.message
