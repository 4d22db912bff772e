"""Pytest fixtures for StopSearch backend tests."""

from collections.abc import AsyncGenerator, Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from stopsearch.config import Settings
from stopsearch.dependencies import get_dashboard, get_police_client
from stopsearch.main import app
from stopsearch.schemas.stop_search import Location, StopSearchRecord, Street
from stopsearch.services.collector import ThrottledCollector
from stopsearch.services.dashboard import Dashboard
from stopsearch.services.police_client import PoliceAPIClient


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults."""
    return Settings(
        police_api_base_url="http://police.test/api",
        request_delay_seconds=0,
        refresh_on_startup=False,
        debug=True,
    )


@pytest.fixture
def mock_police_client() -> PoliceAPIClient:
    """Create mocked police API client."""
    client = PoliceAPIClient(base_url="http://police.test/api")
    client.fetch_available_dates = AsyncMock(return_value=[])
    client.fetch_stop_searches = AsyncMock(return_value=[])
    return client


@pytest.fixture
def mock_sleep() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def collector(mock_police_client, mock_sleep) -> ThrottledCollector:
    return ThrottledCollector(mock_police_client, sleep=mock_sleep)


@pytest.fixture
def dashboard(collector) -> Dashboard:
    return Dashboard(collector, items_per_page=20)


@pytest_asyncio.fixture
async def client(dashboard, mock_police_client) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with dashboard and upstream client overrides."""
    app.dependency_overrides[get_dashboard] = lambda: dashboard
    app.dependency_overrides[get_police_client] = lambda: mock_police_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_record() -> Callable[..., StopSearchRecord]:
    """Factory for canonical records with sensible defaults."""

    def _make(
        datetime: str = "2024-01-15T12:00:00+00:00",
        outcome: str = "A no further action disposal",
        type: str = "Person search",
        street: str | None = "On or near Oxford Street",
    ) -> StopSearchRecord:
        location = (
            Location(latitude="51.515", longitude="-0.141", street=Street(id=1, name=street))
            if street is not None
            else None
        )
        return StopSearchRecord(datetime=datetime, outcome=outcome, type=type, location=location)

    return _make


@pytest.fixture
def sample_raw_records() -> list[dict[str, Any]]:
    """Sample stop and search records as returned by data.police.uk."""
    return [
        {
            "age_range": "18-24",
            "outcome": "Arrest",
            "involved_person": True,
            "self_defined_ethnicity": "White - English/Welsh/Scottish/Northern Irish/British",
            "gender": "Male",
            "legislation": "Misuse of Drugs Act 1971 (section 23)",
            "outcome_linked_to_object_of_search": True,
            "datetime": "2024-01-05T10:00:00+00:00",
            "removal_of_more_than_outer_clothing": False,
            "outcome_object": {"id": "bu-arrest", "name": "Arrest"},
            "location": {
                "latitude": "51.512173",
                "street": {"id": 1672870, "name": "On or near Shaftesbury Avenue"},
                "longitude": "-0.131577",
            },
            "operation": None,
            "officer_defined_ethnicity": "White",
            "type": "Person search",
            "operation_name": None,
            "object_of_search": "Controlled drugs",
        },
        {
            "ageRange": "over 34",
            "outcome": "A no further action disposal",
            "involvedPerson": True,
            "gender": "Female",
            "datetime": "2024-01-09T21:30:00+00:00",
            "outcomeObject": {"id": "bu-no-further-action", "name": "A no further action disposal"},
            "location": None,
            "type": "Person and Vehicle search",
            "objectOfSearch": "Stolen goods",
        },
        {
            "age_range": None,
            "outcome": "Community resolution",
            "datetime": "2024-01-20T08:15:00+00:00",
            "location": {"latitude": "51.5", "longitude": "-0.1"},
            "type": "Vehicle search",
        },
    ]


@pytest.fixture
def sample_date_entries() -> list[dict[str, Any]]:
    """Sample crimes-street-dates entries."""
    return [
        {"date": "2023-11", "stop-and-search": ["metropolitan", "kent"]},
        {"date": "2024-01", "stop-and-search": ["metropolitan"]},
        {"date": "2023-12", "stop-and-search": ["kent"]},
        {"date": "2024-02", "stop-and-search": ["metropolitan", "city-of-london"]},
    ]
