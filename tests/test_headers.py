"""Tests for outbound request header resolution."""

from conftest import make_endpoint

from llm_endpoint_registry.access import AccessStore
from llm_endpoint_registry.client_config import ClientConfig
from llm_endpoint_registry.constants import ServiceProvider
from llm_endpoint_registry.headers import base_headers, is_google_model, mask_headers, mask_secret, resolve_headers
from llm_endpoint_registry.models import AccessState

APP = ClientConfig(is_app=True)


class TestResolveHeaders:
    """Tests for resolve_headers."""

    def test_without_endpoint(self) -> None:
        """Only the base headers are sent when no endpoint is targeted."""
        assert resolve_headers(AccessState(access_code="abc")) == {
            "Content-Type": "application/json",
            "x-requested-with": "XMLHttpRequest",
            "Accept": "application/json",
        }

    def test_azure_key_is_trimmed(self) -> None:
        """Azure endpoints send their key in api-key."""
        endpoint = make_endpoint("a", provider=ServiceProvider.AZURE, api_key="  k1  ")

        headers = resolve_headers(AccessState(), endpoint)

        assert headers["api-key"] == "k1"
        assert "Authorization" not in headers

    def test_openai_key_is_bearer(self) -> None:
        """Other providers send the key as a bearer token."""
        headers = resolve_headers(AccessState(), make_endpoint("a", api_key="k1"))

        assert headers["Authorization"] == "Bearer k1"
        assert "api-key" not in headers

    def test_endpoint_key_beats_access_code(self) -> None:
        """An endpoint key wins over the access code."""
        headers = resolve_headers(AccessState(access_code="abc"), make_endpoint("a", api_key="k1"))
        assert headers["Authorization"] == "Bearer k1"

    def test_access_code_is_prefixed(self) -> None:
        """Without a key, the access code is sent with its prefix."""
        access = AccessState(access_code="abc", need_code=True)

        openai = resolve_headers(access, make_endpoint("a"))
        azure = resolve_headers(access, make_endpoint("b", provider=ServiceProvider.AZURE))

        assert openai["Authorization"] == "Bearer nk-abc"
        assert azure["api-key"] == "nk-abc"

    def test_access_code_is_trimmed(self) -> None:
        """Surrounding whitespace in the access code is not sent."""
        access = AccessState(access_code="abc \n", need_code=True)

        openai = resolve_headers(access, make_endpoint("a"))
        azure = resolve_headers(access, make_endpoint("b", provider=ServiceProvider.AZURE))

        assert openai["Authorization"] == "Bearer nk-abc"
        assert azure["api-key"] == "nk-abc"

    def test_access_code_ignored_without_access_control(self) -> None:
        """With access control off the access code is not sent."""
        headers = resolve_headers(AccessState(access_code="abc", need_code=False), make_endpoint("a"))

        assert "Authorization" not in headers
        assert "api-key" not in headers

    def test_blank_key_falls_through(self) -> None:
        """A whitespace-only key counts as no key."""
        headers = resolve_headers(AccessState(access_code="abc"), make_endpoint("a", api_key="   "))
        assert headers["Authorization"] == "Bearer nk-abc"

    def test_gemini_in_app_mode_sends_no_credential(self) -> None:
        """The desktop host supplies credentials for Gemini models."""
        endpoint = make_endpoint("g", provider=ServiceProvider.GOOGLE, api_key="k1")

        headers = resolve_headers(AccessState(access_code="abc"), endpoint, model="gemini-pro", client_config=APP)

        assert "Authorization" not in headers
        assert headers["x-provider"] == "Google"

    def test_gemini_on_web_uses_key(self) -> None:
        """Outside app mode Gemini models use the endpoint key."""
        endpoint = make_endpoint("g", provider=ServiceProvider.GOOGLE, api_key="k1")
        headers = resolve_headers(AccessState(), endpoint, model="gemini-pro")
        assert headers["Authorization"] == "Bearer k1"

    def test_other_models_in_app_mode_use_key(self) -> None:
        """App mode only changes Gemini requests."""
        headers = resolve_headers(AccessState(), make_endpoint("a", api_key="k1"), model="gpt-4o", client_config=APP)
        assert headers["Authorization"] == "Bearer k1"

    def test_diagnostic_headers(self) -> None:
        """Endpoint URL, provider and API version are described."""
        endpoint = make_endpoint("a", api_url="https://x.example", api_version="2024-02-01")

        headers = resolve_headers(AccessState(), endpoint)

        assert headers["x-base-url"] == "https://x.example"
        assert headers["x-provider"] == "OpenAI"
        assert headers["x-api-version"] == "2024-02-01"

    def test_unset_provider_defaults_to_openai(self) -> None:
        """Endpoints without a provider are described and keyed as OpenAI."""
        endpoint = make_endpoint("a", provider=None, api_key="k1")  # type: ignore[arg-type]

        headers = resolve_headers(AccessState(), endpoint)

        assert headers["x-provider"] == "OpenAI"
        assert headers["Authorization"] == "Bearer k1"

    def test_access_state_is_not_modified(self) -> None:
        """Resolution reads the state only."""
        access = AccessState(access_code="abc")
        snapshot = access.to_dict()
        resolve_headers(access, make_endpoint("a"))
        assert access.to_dict() == snapshot


class TestHelpers:
    """Tests for the header helpers."""

    def test_is_google_model(self) -> None:
        """Gemini model ids are recognised regardless of case."""
        assert is_google_model("gemini-1.5-pro")
        assert is_google_model("Gemini-Pro")
        assert not is_google_model("gpt-4o")
        assert not is_google_model(None)

    def test_mask_headers(self) -> None:
        """Credential values are masked, other headers are kept."""
        headers = dict(base_headers())
        headers["Authorization"] = "Bearer sk-1234567890abcd"
        headers["api-key"] = "short"

        masked = mask_headers(headers)

        assert masked["Authorization"] == "Bearer ****abcd"
        assert masked["api-key"] == "****"
        assert masked["Accept"] == "application/json"
        assert headers["api-key"] == "short"

    def test_mask_secret(self) -> None:
        """Long secrets keep their last four characters."""
        assert mask_secret(None) == ""
        assert mask_secret("12345678") == "****"
        assert mask_secret("123456789") == "****6789"


class TestStoreHeaders:
    """Tests for AccessStore.get_headers."""

    def test_targets_named_endpoint(self, store: AccessStore) -> None:
        """The named endpoint's key is used."""
        store.add_endpoint(make_endpoint("a", api_key="ka"))
        store.add_endpoint(make_endpoint("b", provider=ServiceProvider.AZURE, api_key="kb"))

        assert store.get_headers("b")["api-key"] == "kb"

    def test_falls_back_to_default(self, store: AccessStore) -> None:
        """Unknown or omitted ids use the default endpoint."""
        store.add_endpoint(make_endpoint("a", api_key="ka"))

        assert store.get_headers()["Authorization"] == "Bearer ka"
        assert store.get_headers("missing")["Authorization"] == "Bearer ka"

    def test_no_endpoints(self, store: AccessStore) -> None:
        """With no endpoints only base headers are returned."""
        store.update(access_code="abc")
        assert store.get_headers() == base_headers()

    def test_uses_store_client_config(self) -> None:
        """The store's app mode applies to Gemini requests."""
        store = AccessStore(client_config=APP)
        store.add_endpoint(make_endpoint("g", provider=ServiceProvider.GOOGLE, api_key="k1"))

        assert "Authorization" not in store.get_headers(model="gemini-pro")
