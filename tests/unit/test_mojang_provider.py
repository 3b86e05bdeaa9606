"""
Unit tests for the Mojang providers

Tests each provider with a mocked aiohttp session.
"""
import aiohttp
import pytest
from conftest import NOTCH_UUID, make_response, as_context
from core.exceptions import (
    IdentityLookupError,
    IdentityNotFoundError,
    ProfileUnavailableError,
)
from providers.mojang_provider import MojangIdentityProvider, MojangProfileProvider


class TestMojangIdentityProvider:
    """Test username to UUID resolution"""

    @pytest.fixture
    def provider(self, test_settings):
        return MojangIdentityProvider(test_settings)

    @pytest.mark.asyncio
    async def test_resolve_success(self, provider, mock_http_session):
        mock_http_session.post.return_value = as_context(
            make_response(json_data=[{"id": NOTCH_UUID, "name": "Notch"}])
        )

        result = await provider.resolve_uuid("Notch")

        assert result.ok
        assert result.value == NOTCH_UUID
        mock_http_session.post.assert_called_once_with(
            "https://services.test/minecraft/profile/lookup/bulk/byname",
            json=["Notch"],
        )

    @pytest.mark.asyncio
    async def test_first_record_wins(self, provider, mock_http_session):
        mock_http_session.post.return_value = as_context(
            make_response(json_data=[{"id": "aaa"}, {"id": "bbb", "name": "Other"}])
        )

        result = await provider.resolve_uuid("Notch")

        assert result.value == "aaa"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [[], None, {}, [{"name": "Notch"}], [{"id": ""}]])
    async def test_empty_result_is_not_found(self, provider, mock_http_session, payload):
        mock_http_session.post.return_value = as_context(make_response(json_data=payload))

        result = await provider.resolve_uuid("Notch")

        assert not result.ok
        assert isinstance(result.error, IdentityNotFoundError)
        assert result.error.status_code == 404

    @pytest.mark.asyncio
    async def test_error_status_is_lookup_failure(self, provider, mock_http_session):
        mock_http_session.post.return_value = as_context(make_response(status=429))

        result = await provider.resolve_uuid("Notch")

        assert isinstance(result.error, IdentityLookupError)
        assert result.error.status_code == 400
        assert "429" in result.error.details["reason"]

    @pytest.mark.asyncio
    async def test_transport_error_is_lookup_failure(self, provider, mock_http_session):
        mock_http_session.post.side_effect = aiohttp.ClientConnectionError("refused")

        result = await provider.resolve_uuid("Notch")

        assert isinstance(result.error, IdentityLookupError)

    @pytest.mark.asyncio
    async def test_unparseable_body_is_lookup_failure(self, provider, mock_http_session):
        response = make_response()
        response.json.side_effect = ValueError("not json")
        mock_http_session.post.return_value = as_context(response)

        result = await provider.resolve_uuid("Notch")

        assert isinstance(result.error, IdentityLookupError)


class TestMojangProfileProvider:
    """Test profile retrieval"""

    @pytest.fixture
    def provider(self, test_settings):
        return MojangProfileProvider(test_settings)

    @pytest.mark.asyncio
    async def test_fetch_profile_success(self, provider, mock_http_session, sample_profile_data):
        mock_http_session.get.return_value = as_context(
            make_response(json_data=sample_profile_data)
        )

        result = await provider.fetch_profile(NOTCH_UUID)

        assert result.ok
        assert result.value.name == "Notch"
        assert result.value.get_property("textures") is not None
        mock_http_session.get.assert_called_once_with(
            f"https://session.test/session/minecraft/profile/{NOTCH_UUID}"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [204, 400, 500])
    async def test_error_status_is_unavailable(self, provider, mock_http_session, status):
        mock_http_session.get.return_value = as_context(make_response(status=status))

        result = await provider.fetch_profile(NOTCH_UUID)

        assert isinstance(result.error, ProfileUnavailableError)
        assert result.error.details["uuid"] == NOTCH_UUID

    @pytest.mark.asyncio
    async def test_partial_profile_accepted(self, provider, mock_http_session, sample_profile_data):
        del sample_profile_data["name"]
        sample_profile_data["properties"].append({"name": "extra"})
        mock_http_session.get.return_value = as_context(
            make_response(json_data=sample_profile_data)
        )

        result = await provider.fetch_profile(NOTCH_UUID)

        assert result.ok
        assert result.value.name is None
        assert result.value.get_property("textures").value is not None

    @pytest.mark.asyncio
    async def test_malformed_profile_is_unavailable(self, provider, mock_http_session):
        mock_http_session.get.return_value = as_context(
            make_response(json_data={"properties": "not-a-list"})
        )

        result = await provider.fetch_profile(NOTCH_UUID)

        assert isinstance(result.error, ProfileUnavailableError)

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self, provider, mock_http_session):
        mock_http_session.get.side_effect = aiohttp.ServerTimeoutError("slow")

        result = await provider.fetch_profile(NOTCH_UUID)

        assert isinstance(result.error, ProfileUnavailableError)
