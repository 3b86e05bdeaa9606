import base64
import json
import pytest
from unittest.mock import Mock, MagicMock, AsyncMock, patch
from fastapi.testclient import TestClient
import os
import sys
from typing import Generator

# Add the parent directory to the path so we can import our modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import app
from core.config import Settings, get_settings

NOTCH_UUID = "069a79f444e94726a5befca90e38aaf5"
NOTCH_SKIN_URL = (
    "http://textures.minecraft.net/texture/"
    "292009a4925b58f02c77dadc3ecef07ea4c7472f64e0fdc32ce5522489362680"
)
STEVE_BYTES = b"\x89PNG\r\n\x1a\nsteve-skin"
ALEX_BYTES = b"\x89PNG\r\n\x1a\nalex-skin"


def encode_textures(textures: dict) -> str:
    """Build the base64 value of a "textures" profile property"""
    manifest = {
        "timestamp": 1700000000000,
        "profileId": NOTCH_UUID,
        "profileName": "Notch",
        "textures": textures,
    }
    return base64.b64encode(json.dumps(manifest).encode()).decode()


def make_response(status=200, json_data=None, body=b"", headers=None):
    """Create a mock aiohttp response"""
    response = Mock()
    response.status = status
    response.json = AsyncMock(return_value=json_data)
    response.read = AsyncMock(return_value=body)
    response.headers = headers or {}
    return response


def as_context(response):
    """Wrap a mock response so it can be used with `async with`"""
    context = MagicMock()
    context.__aenter__.return_value = response
    context.__aexit__.return_value = False
    return context


@pytest.fixture
def mock_http_session():
    """Patch aiohttp.ClientSession and yield the session used inside `async with`"""
    with patch("aiohttp.ClientSession") as mock_session_class:
        session = MagicMock()
        mock_session_class.return_value.__aenter__.return_value = session
        mock_session_class.return_value.__aexit__.return_value = False
        yield session


@pytest.fixture
def assets_dir(tmp_path):
    """Assets directory holding fake default skins"""
    (tmp_path / "steve.png").write_bytes(STEVE_BYTES)
    (tmp_path / "alex.png").write_bytes(ALEX_BYTES)
    return tmp_path


@pytest.fixture
def test_settings(assets_dir) -> Settings:
    return Settings(
        services_base_url="https://services.test",
        session_base_url="https://session.test",
        assets_dir=assets_dir,
        http_timeout_seconds=2.0,
    )


@pytest.fixture
def test_client(test_settings) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_profile_data():
    """Session server profile of Notch with a custom skin"""
    return {
        "id": NOTCH_UUID,
        "name": "Notch",
        "properties": [
            {
                "name": "textures",
                "value": encode_textures({"SKIN": {"url": NOTCH_SKIN_URL}}),
            }
        ],
    }


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
