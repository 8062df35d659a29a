"""Tests for error classes."""

from llm_endpoint_registry.errors import (
    ConfigurationError,
    EndpointRegistryError,
    EntryNotFoundError,
    InvalidConfigFormatError,
    NetworkError,
    StoreWriteError,
    ValidationError,
)


class TestErrorClasses:
    """Tests for all error classes."""

    def test_endpoint_registry_error(self) -> None:
        """Test EndpointRegistryError base class."""
        error = EndpointRegistryError("Base error message")
        assert str(error) == "Base error message"

    def test_configuration_error(self) -> None:
        """Test ConfigurationError keeps the offending path."""
        error = ConfigurationError("Bad config", path="/tmp/access-control.yaml")
        assert error.message == "Bad config"
        assert error.path == "/tmp/access-control.yaml"
        assert isinstance(error, EndpointRegistryError)

    def test_invalid_config_format_error(self) -> None:
        """Test InvalidConfigFormatError."""
        error = InvalidConfigFormatError("Not a mapping", path="/tmp/x.yaml", expected_type="dict")
        assert error.expected_type == "dict"
        assert error.path == "/tmp/x.yaml"
        assert isinstance(error, ConfigurationError)

    def test_store_write_error(self) -> None:
        """Test StoreWriteError."""
        error = StoreWriteError("Disk full", path="/tmp/x.yaml")
        assert str(error) == "Disk full"
        assert isinstance(error, ConfigurationError)

    def test_network_error(self) -> None:
        """Test NetworkError carries the URL and status."""
        error = NetworkError("HTTP error 502", url="http://localhost:3000/api/config", status_code=502)
        assert error.url == "http://localhost:3000/api/config"
        assert error.status_code == 502
        assert isinstance(error, EndpointRegistryError)

    def test_validation_error(self) -> None:
        """Test ValidationError names the field."""
        error = ValidationError("api_key cannot be empty", field="api_key")
        assert error.field == "api_key"
        assert error.message == "api_key cannot be empty"

    def test_entry_not_found_error(self) -> None:
        """Test EntryNotFoundError."""
        error = EntryNotFoundError("No endpoint with id 'x'", entry_id="x")
        assert error.entry_id == "x"
        assert str(error) == "No endpoint with id 'x'"
