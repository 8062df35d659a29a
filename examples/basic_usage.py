#!/usr/bin/env python3
"""Example of basic endpoint registry usage."""

from llm_endpoint_registry import AccessStore, ServiceProvider, create_endpoint
from llm_endpoint_registry.share import ShareApi
from llm_endpoint_registry.session import ChatMessage, ChatSession
from llm_endpoint_registry.validation import validate_endpoint


def add_azure_endpoint(store):
    """Add an Azure endpoint and make it the default.

    Args:
        store: AccessStore to add the endpoint to
    """
    endpoint = create_endpoint(ServiceProvider.AZURE)
    endpoint.name = "Work"
    endpoint.api_url = "https://work.openai.azure.com"
    endpoint.api_key = "replace-me"
    endpoint.api_version = "2024-02-01"

    validate_endpoint(endpoint)
    store.add_or_update_endpoint(endpoint)
    store.endpoints.set_default(endpoint.id)
    return endpoint


def main():
    """Run the example."""
    store = AccessStore.get_default()

    # Merge in the server's defaults (LER_SERVER_URL); failures are only logged
    store.fetch_server_defaults()
    print(f"Access code required: {store.enabled_access_control()}")

    endpoint = add_azure_endpoint(store)
    print("Endpoints:")
    for entry in store.list_endpoints():
        marker = "*" if entry.id == store.state.default_endpoint else " "
        print(f" {marker} {entry.id}  {entry.name}  ({entry.provider.value if entry.provider else 'N/A'})")

    headers = store.get_headers(endpoint.id, model="gpt-4o")
    print(f"Request headers: {sorted(headers)}")

    session = ChatSession(
        topic="Example",
        model="gpt-4o",
        messages=[ChatMessage("user", "Hello"), ChatMessage("assistant", "Hi!")],
    )
    provider = store.get_default_share_provider()
    if provider is not None:
        result = ShareApi(store.client_config).share(session, provider, endpoint=endpoint)
        print(f"Shared: {result.url}" if result.success else f"Share failed: {result.error}")


if __name__ == "__main__":
    main()
