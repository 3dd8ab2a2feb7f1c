"""Pytest configuration and fixtures for testing."""

from pathlib import Path
from typing import Callable, List

import httpx
import pytest
from unittest.mock import Mock, AsyncMock
from fastapi.testclient import TestClient

from services.geocoding.models import GeoPoint, ReverseGeocodeResult

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def nominatim_url() -> str:
    return "https://nominatim.openstreetmap.org/reverse"


@pytest.fixture
def monaco_xml() -> str:
    """Nominatim format=xml reply for a point in Fontvieille, Monaco."""
    return (FIXTURES_DIR / "xml" / "example_monaco.xml").read_text(encoding="utf-8")


@pytest.fixture
def paris_json() -> str:
    """Nominatim format=jsonv2 reply for the Eiffel Tower."""
    return (FIXTURES_DIR / "json" / "example_paris.json").read_text(encoding="utf-8")


@pytest.fixture
def geo_point() -> GeoPoint:
    return GeoPoint(latitude=43.7270892, longitude=7.4188845)


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def mock_transport(sent_requests) -> Callable[..., httpx.MockTransport]:
    """
    Build an httpx.MockTransport that records requests.

    Usage: mock_transport(response=httpx.Response(200, text=...))
           mock_transport(error=httpx.ConnectError("boom"))
    """
    def _build(response: httpx.Response = None, error: Exception = None) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if error is not None:
                raise error
            return response

        return httpx.MockTransport(handler)

    return _build


@pytest.fixture
def mock_map_repository():
    """Mock local geodata repository."""
    mock = Mock()
    mock.reverse_geocode = AsyncMock(
        return_value=ReverseGeocodeResult(country="Monaco", state=None, city="Monaco")
    )
    return mock


@pytest.fixture
def mock_map_service():
    """Mock MapService for route testing."""
    mock = Mock()
    mock.nominatim_configured = True
    mock.reverse_geocode = AsyncMock(
        return_value=[
            ReverseGeocodeResult(
                country="Monaco",
                state="Fontvieille",
                city="Princesse Grace, Tunnel Pont Cadre, Fontvieille, Monaco, 98020",
            )
        ]
    )
    return mock


@pytest.fixture
def test_client(mock_map_service):
    """FastAPI test client with mocked map service."""
    # Import here to avoid circular imports
    from main import app

    # Override the map service in app state
    app.state.map_service = mock_map_service

    return TestClient(app)
