from typing import List, Optional

import httpx
import structlog

from config.settings import LandingConfig
from core.infrastructure.http_client import http_request
from exceptions.custom_exceptions import GeocodingException, MapUnavailableException
from models.landing_model import LatLng, SelectedPlace, Suggestion

logger = structlog.get_logger(__name__)

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"


class GoogleMapsClient:
    """Places Autocomplete and Geocoding web services."""

    BASE_URL = "https://maps.googleapis.com/maps/api"
    AUTOCOMPLETE_ENDPOINT = f"{BASE_URL}/place/autocomplete/json"
    GEOCODE_ENDPOINT = f"{BASE_URL}/geocode/json"

    def __init__(
        self,
        api_key: Optional[str] = None,
        country: Optional[str] = None,
        language: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = LandingConfig.GOOGLE_MAPS_API_KEY if api_key is None else api_key
        self.country = country or LandingConfig.MAPS_COUNTRY
        self.language = language or LandingConfig.MAPS_LANGUAGE
        self.timeout = timeout or LandingConfig.MAPS_HTTP_TIMEOUT
        self._client = client

    @property
    def is_available(self) -> bool:
        return bool(self.api_key)

    async def autocomplete(self, text: str) -> List[Suggestion]:
        """Address suggestions for free text, restricted to one country."""
        data = await self._get(
            self.AUTOCOMPLETE_ENDPOINT,
            {
                "input": text,
                "components": f"country:{self.country}",
                "language": self.language,
            },
        )
        if data.get("status") == STATUS_ZERO_RESULTS:
            return []

        suggestions = [
            Suggestion(place_id=p.get("place_id", ""), description=p["description"])
            for p in data.get("predictions", [])
            if p.get("description")
        ]
        logger.debug("autocomplete_suggestions", query=text, count=len(suggestions))
        return suggestions

    async def geocode(self, address: str) -> SelectedPlace:
        """Resolve address text to coordinates and a formatted address."""
        data = await self._get(
            self.GEOCODE_ENDPOINT, {"address": address, "language": self.language}
        )
        result = self._first_result(data, address)

        location = result.get("geometry", {}).get("location", {})
        if location.get("lat") is None or location.get("lng") is None:
            raise GeocodingException(
                f"No coordinates found for '{address}'", provider_status=data.get("status")
            )

        place = SelectedPlace(
            coordinates=LatLng(lat=location["lat"], lng=location["lng"]),
            address=result.get("formatted_address") or address,
        )
        logger.info("geocoded", query=address, lat=place.coordinates.lat, lng=place.coordinates.lng)
        return place

    async def reverse_geocode(self, point: LatLng) -> str:
        """Formatted address of the most specific result at a point."""
        data = await self._get(
            self.GEOCODE_ENDPOINT,
            {"latlng": f"{point.lat},{point.lng}", "language": self.language},
        )
        address = self._first_result(data, f"{point.lat},{point.lng}").get("formatted_address")
        if not address:
            raise GeocodingException(
                f"No address at ({point.lat}, {point.lng})", provider_status=data.get("status")
            )
        return address

    async def _get(self, url: str, params: dict) -> dict:
        if not self.is_available:
            raise MapUnavailableException()

        try:
            response = await http_request(
                "GET",
                url,
                client=self._client,
                params={**params, "key": self.api_key},
                timeout=self.timeout,
            )
            data = response.json()
        except httpx.HTTPError as e:
            raise GeocodingException(
                "Maps provider request failed", details={"error": str(e)}
            ) from e
        except ValueError as e:
            raise GeocodingException(
                "Maps provider returned invalid JSON", details={"error": str(e)}
            ) from e

        status = data.get("status")
        if status not in (STATUS_OK, STATUS_ZERO_RESULTS):
            raise GeocodingException(
                f"Maps provider error: {status}",
                provider_status=status,
                details={"error_message": data.get("error_message")},
            )
        return data

    @staticmethod
    def _first_result(data: dict, query: str) -> dict:
        results = data.get("results") or []
        if data.get("status") == STATUS_ZERO_RESULTS or not results:
            raise GeocodingException(
                f"No results for '{query}'", provider_status=STATUS_ZERO_RESULTS
            )
        return results[0]
