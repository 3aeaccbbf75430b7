"""
Place picker: search box, map clicks and the info window.

Every provider failure here is non-fatal: it is logged and the picker
state stays as it was. Only an unconfigured maps provider is fatal, and
that surfaces as ``MapUnavailableException``.
"""

import asyncio
from typing import Callable, List, Optional

import structlog

from adapters.google.maps_client import GoogleMapsClient
from config.settings import LandingConfig
from exceptions.custom_exceptions import GeocodingException, MapUnavailableException
from models.landing_model import (
    LatLng,
    MapViewport,
    PlacePickerState,
    ScrollDirective,
    SelectedPlace,
    Suggestion,
)

logger = structlog.get_logger(__name__)


def default_viewport() -> MapViewport:
    return MapViewport(
        center=LatLng(lat=LandingConfig.DEFAULT_CENTER_LAT, lng=LandingConfig.DEFAULT_CENTER_LNG),
        zoom=LandingConfig.DEFAULT_ZOOM,
    )


class PlacePicker:
    def __init__(
        self,
        maps_client: GoogleMapsClient,
        on_place_select: Optional[Callable[[str], None]] = None,
        debounce_seconds: Optional[float] = None,
    ) -> None:
        self._maps = maps_client
        self._on_place_select = on_place_select
        if debounce_seconds is None:
            debounce_seconds = LandingConfig.SEARCH_DEBOUNCE_MS / 1000
        self._debounce_seconds = debounce_seconds

        self.viewport = default_viewport()
        self.query = ""
        self.suggestions: List[Suggestion] = []
        self.selected_place: Optional[SelectedPlace] = None
        self._search_seq = 0

    @property
    def is_available(self) -> bool:
        return self._maps.is_available

    @property
    def info_window_open(self) -> bool:
        return self.selected_place is not None

    def _ensure_available(self) -> None:
        if not self.is_available:
            raise MapUnavailableException()

    async def search(self, query_text: str) -> bool:
        """Debounced autocomplete. Returns True if this call's results were applied.

        Only the most recently issued search may write suggestions; older
        ones are dropped before or after the provider call.
        """
        self._ensure_available()
        self._search_seq += 1
        seq = self._search_seq
        self.query = query_text

        if not query_text.strip():
            self.suggestions = []
            return False

        await asyncio.sleep(self._debounce_seconds)
        if seq != self._search_seq:
            logger.debug("search_superseded", query=query_text, seq=seq)
            return False

        try:
            suggestions = await self._maps.autocomplete(query_text)
        except GeocodingException as e:
            logger.warning(
                "autocomplete_failed",
                query=query_text,
                error=e.message,
                provider_status=e.provider_status,
            )
            return False

        if seq != self._search_seq:
            logger.info("stale_suggestions_discarded", query=query_text, seq=seq, latest=self._search_seq)
            return False

        self.suggestions = suggestions
        return True

    async def select_suggestion(self, suggestion: Suggestion) -> bool:
        self._ensure_available()
        try:
            place = await self._maps.geocode(suggestion.description)
        except GeocodingException as e:
            logger.error(
                "suggestion_geocode_failed",
                description=suggestion.description,
                error=e.message,
                provider_status=e.provider_status,
            )
            return False

        self.selected_place = place
        self.viewport = MapViewport(center=place.coordinates, zoom=LandingConfig.SELECTED_ZOOM)
        # Clearing the box must not let a pending search repopulate it
        self._search_seq += 1
        self.query = ""
        self.suggestions = []
        return True

    async def click_map(self, point: LatLng) -> bool:
        self._ensure_available()
        try:
            address = await self._maps.reverse_geocode(point)
        except GeocodingException as e:
            logger.warning(
                "reverse_geocode_failed",
                lat=point.lat,
                lng=point.lng,
                error=e.message,
                provider_status=e.provider_status,
            )
            return False

        self.selected_place = SelectedPlace(coordinates=point, address=address)
        return True

    def confirm_explore(self) -> Optional[ScrollDirective]:
        self._ensure_available()
        if self.selected_place is None:
            return None
        if self._on_place_select:
            self._on_place_select(self.selected_place.address)
        return ScrollDirective(target=LandingConfig.CONTACT_FORM_ANCHOR)

    def close_info_window(self) -> None:
        self.selected_place = None

    def snapshot(self) -> PlacePickerState:
        return PlacePickerState(
            map_available=self.is_available,
            viewport=self.viewport.model_copy(deep=True),
            query=self.query,
            suggestions=list(self.suggestions),
            selected_place=self.selected_place,
            info_window_open=self.info_window_open,
        )
