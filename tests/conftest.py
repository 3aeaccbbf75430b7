"""
Shared pytest fixtures for the landing service.
Environment is pinned before any project module reads it.
"""

import os

os.environ["LOG_FILE"] = ""
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test-maps-key")

import pytest
from unittest.mock import AsyncMock, MagicMock

from adapters.google.maps_client import GoogleMapsClient
from models.landing_model import LatLng, SelectedPlace, Suggestion
from services.lead_form import LeadForm
from services.lead_intake import LeadIntake
from services.place_picker import PlacePicker

RED_SQUARE = SelectedPlace(
    coordinates=LatLng(lat=55.753930, lng=37.620795),
    address="Red Square, Moscow, Russia",
)


@pytest.fixture
def maps_client() -> MagicMock:
    client = MagicMock(spec=GoogleMapsClient)
    client.api_key = "test-maps-key"
    client.is_available = True
    client.autocomplete = AsyncMock(return_value=[])
    client.geocode = AsyncMock(return_value=RED_SQUARE)
    client.reverse_geocode = AsyncMock(return_value="Tverskaya St, 1, Moscow, Russia")
    return client


@pytest.fixture
def intake() -> LeadIntake:
    return LeadIntake()


@pytest.fixture
def lead_form(intake: LeadIntake) -> LeadForm:
    return LeadForm(intake)


@pytest.fixture
def picker(maps_client: MagicMock, lead_form: LeadForm) -> PlacePicker:
    return PlacePicker(
        maps_client,
        on_place_select=lead_form.receive_selected_place,
        debounce_seconds=0,
    )


@pytest.fixture
def red_square_suggestion() -> Suggestion:
    return Suggestion(place_id="ChIJ-red-square", description="Red Square, Moscow")


@pytest.fixture
def red_square() -> SelectedPlace:
    return RED_SQUARE.model_copy(deep=True)
