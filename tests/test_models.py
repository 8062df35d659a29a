"""Tests for the endpoint, share provider and access state records."""

from llm_endpoint_registry.constants import (
    DEFAULT_API_HOST,
    DEFAULT_AZURE_API_VERSION,
    ENDPOINT_TYPE_USER,
    ApiPath,
    ServiceProvider,
)
from llm_endpoint_registry.models import (
    AccessState,
    Endpoint,
    GithubParams,
    OpaqueParams,
    ShareGPTParams,
    ShareProvider,
    create_default_share_provider,
    create_endpoint,
    parse_provider,
)


class TestEndpoint:
    """Tests for Endpoint."""

    def test_round_trip_uses_camel_case(self) -> None:
        """Endpoints serialize with the persisted key names."""
        endpoint = Endpoint(
            id="a",
            name="Work",
            provider=ServiceProvider.AZURE,
            api_url="https://work.openai.azure.com",
            api_key="k",
            api_version="2024-02-01",
            models="gpt-4o, gpt-4o-mini",
            created_at=1700000000000,
            gen_title=True,
        )

        data = endpoint.to_dict()

        assert data["apiUrl"] == "https://work.openai.azure.com"
        assert data["provider"] == "Azure"
        assert data["genTitle"] is True
        assert Endpoint.from_dict(data) == endpoint

    def test_from_dict_fills_defaults(self) -> None:
        """Missing keys take defaults; unknown keys are ignored."""
        endpoint = Endpoint.from_dict({"id": "a", "somethingNew": 1})

        assert endpoint.provider == ServiceProvider.OPENAI
        assert endpoint.type == ENDPOINT_TYPE_USER
        assert endpoint.gen_title is False
        assert endpoint.api_key == ""

    def test_unknown_provider_is_unset(self) -> None:
        """A provider name this version does not know decodes to None."""
        assert Endpoint.from_dict({"id": "a", "provider": "Mystery"}).provider is None

    def test_model_names(self) -> None:
        """The allow-list is split and trimmed."""
        endpoint = Endpoint(id="a", models=" gpt-4o, ,gpt-4o-mini ")
        assert endpoint.model_names() == ["gpt-4o", "gpt-4o-mini"]

    def test_create_endpoint_uses_relay_path(self) -> None:
        """New endpoints get a fresh id and the provider's relay path."""
        first = create_endpoint(ServiceProvider.AZURE)
        second = create_endpoint("azure")

        assert first.proxy_url == ApiPath.AZURE.value
        assert second.provider == ServiceProvider.AZURE
        assert first.id != second.id
        assert first.type == ENDPOINT_TYPE_USER

    def test_create_endpoint_without_provider(self) -> None:
        """An empty provider leaves provider and relay path unset."""
        endpoint = create_endpoint(None)
        assert endpoint.provider is None
        assert endpoint.proxy_url == ""

    def test_parse_provider_is_case_insensitive(self) -> None:
        """Provider names match regardless of case."""
        assert parse_provider("google") == ServiceProvider.GOOGLE
        assert parse_provider("") is None


class TestShareProvider:
    """Tests for ShareProvider and its params variants."""

    def test_github_params_decode(self) -> None:
        """GitHub params decode into their typed variant."""
        provider = ShareProvider.from_dict(
            {
                "id": "gh",
                "name": "Issues",
                "type": "Github",
                "params": {"githubOwner": "octo", "githubRepo": "chats", "githubToken": "t"},
            }
        )

        assert provider.params == GithubParams(owner="octo", repo="chats", token="t")
        assert provider.to_dict()["params"] == {"githubOwner": "octo", "githubRepo": "chats", "githubToken": "t"}

    def test_sharegpt_params_are_empty(self) -> None:
        """The paste-bin variant carries no params."""
        provider = ShareProvider.from_dict({"id": "s", "type": "ShareGPT", "params": {"stray": "x"}})
        assert provider.params == ShareGPTParams()
        assert provider.to_dict()["params"] == {}

    def test_unknown_type_is_preserved(self) -> None:
        """Unknown types and their params survive a round trip."""
        data = {
            "id": "x",
            "name": "Future",
            "type": "Pastebin",
            "params": {"endpoint": "https://paste.example", "token": "p"},
            "createdAt": 5,
        }

        provider = ShareProvider.from_dict(data)

        assert provider.known_type is None
        assert isinstance(provider.params, OpaqueParams)
        assert provider.to_dict() == data

    def test_default_share_provider(self) -> None:
        """The built-in provider is a paste-bin share under the reserved id."""
        provider = create_default_share_provider()
        assert provider.id == "system-share"
        assert provider.name == "Default"
        assert provider.type == "ShareGPT"


class TestAccessState:
    """Tests for AccessState."""

    def test_defaults(self) -> None:
        """A fresh state needs a code and uses the relay path."""
        state = AccessState()
        assert state.need_code is True
        assert state.openai_url == ApiPath.OPENAI.value
        assert state.azure_api_version == DEFAULT_AZURE_API_VERSION

    def test_export_build_uses_public_host(self) -> None:
        """Export builds default to the public OpenAI host."""
        assert AccessState.from_dict({}, is_export=True).openai_url == DEFAULT_API_HOST

    def test_merge_overwrites_named_fields(self) -> None:
        """Merging replaces each field present in the patch."""
        state = AccessState(access_code="old", custom_models="a")

        merged = state.merge(
            {
                "needCode": False,
                "hideUserApiKey": True,
                "customModels": "+gpt-4o",
                "defaultProvider": "Google",
                "access_code": "new",
                "defaultAPIVersion": "ignored, not a field",
            }
        )

        assert merged.need_code is False
        assert merged.hide_user_api_key is True
        assert merged.custom_models == "+gpt-4o"
        assert merged.default_provider == ServiceProvider.GOOGLE
        assert merged.access_code == "new"
        assert state.access_code == "old"

    def test_merge_decodes_lists(self) -> None:
        """Endpoint lists in a patch become Endpoint records."""
        merged = AccessState().merge({"endpoints": [{"id": "a", "provider": "Azure"}]})
        assert merged.endpoints == [Endpoint.from_dict({"id": "a", "provider": "Azure"})]

    def test_merge_tolerates_malformed_lists(self) -> None:
        """Scalar list fields keep the current list and non-mapping items are dropped."""
        state = AccessState(endpoints=[Endpoint(id="a")])

        merged = state.merge({"endpoints": 5, "shareProviders": ["x", None, {"id": "s"}]})

        assert [e.id for e in merged.endpoints] == ["a"]
        assert [p.id for p in merged.share_providers] == ["s"]

    def test_round_trip(self) -> None:
        """to_dict and from_dict are inverses."""
        state = AccessState(
            access_code="abc",
            endpoints=[Endpoint(id="a", name="A")],
            default_endpoint="a",
            share_providers=[create_default_share_provider()],
            default_share_provider_id="system-share",
        )
        assert AccessState.from_dict(state.to_dict()) == state

    def test_provider_key_checks(self) -> None:
        """Legacy key checks require every field of a provider."""
        assert AccessState(openai_api_key="sk").is_valid_openai()
        assert not AccessState(azure_url="https://a", azure_api_key="k", azure_api_version="").is_valid_azure()
        assert AccessState(azure_url="https://a", azure_api_key="k").is_valid_azure()
        assert not AccessState().is_valid_google()
