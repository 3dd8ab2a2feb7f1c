"""
Nominatim Service - Coordinates to Place Conversion
Asks a Nominatim server for the address at a coordinate and maps the
address parts to country / state / city.
"""
import logging
from typing import Optional, Dict, Any

import httpx

from modules.config import ConfigEnv

from .address_mapping import MIN_PLACE_RANK, map_address, to_int
from .models import GeoPoint, ReverseGeocodeResult
from .response_parser import parse_place

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class NominatimService:
    """Reverse geocoding against a configured Nominatim server."""

    REVERSE_PATH = "/reverse"

    def __init__(
        self,
        base_url: Optional[str] = _UNSET,
        user_agent: Optional[str] = None,
        response_format: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the service.

        Args:
            base_url: Nominatim server URL. Defaults to NOMINATIM_URL; pass None
                to disable the provider.
            user_agent: User-Agent header sent with every request
            response_format: json, jsonv2 or xml
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = ConfigEnv.NOMINATIM_URL if base_url is _UNSET else base_url
        self.user_agent = user_agent or ConfigEnv.NOMINATIM_USER_AGENT
        self.response_format = response_format or ConfigEnv.get_nominatim_format()
        self.timeout = timeout if timeout is not None else ConfigEnv.NOMINATIM_TIMEOUT
        self._transport = transport
        if not self.base_url:
            logger.warning("NOMINATIM_URL not set - reverse geocoding will use the local database only")

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    def build_url(self) -> str:
        """Base URL with /reverse appended unless it already points there."""
        url = (self.base_url or "").rstrip("/")
        if url.endswith(self.REVERSE_PATH):
            return url
        return f"{url}{self.REVERSE_PATH}"

    def build_params(self, point: GeoPoint) -> Dict[str, Any]:
        # Ask for detailed address parts to make mapping reliable
        return {
            "lat": point.latitude,
            "lon": point.longitude,
            "format": self.response_format,
            "addressdetails": 1,
            "namedetails": 1,
            "zoom": 18,
        }

    def build_headers(self) -> Dict[str, str]:
        accept = "application/xml" if self.response_format == "xml" else "application/json"
        return {
            "User-Agent": self.user_agent,
            "Accept": accept,
        }

    async def reverse_geocode(self, point: GeoPoint) -> Optional[ReverseGeocodeResult]:
        """
        Convert a coordinate to a place (reverse geocoding).

        Args:
            point: The coordinate to resolve

        Returns:
            ReverseGeocodeResult with country, state and city.

            Returns None when no server is configured, the request fails,
            the reply is an error or unparseable, or the match is too coarse.
            Errors are logged, never raised.
        """
        if not self.is_configured:
            return None

        coords = f"{point.latitude},{point.longitude}"

        try:
            url = self.build_url()
            logger.debug(f"Querying Nominatim: {url} for {coords}")

            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport, follow_redirects=True
            ) as client:
                response = await client.get(url, params=self.build_params(point), headers=self.build_headers())

            if not response.is_success:
                logger.warning(
                    f"Nominatim returned HTTP {response.status_code} for {coords}: {response.reason_phrase}"
                )
                return None

            place = parse_place(response.content, response.headers.get("content-type"))
            if place is None or place.error:
                error = place.error if place is not None else None
                logger.warning(f"Nominatim returned an error or no result for {coords}: {error or 'No result'}")
                return None

            place_rank = to_int(place.place_rank)
            if place_rank is not None and place_rank < MIN_PLACE_RANK:
                logger.debug(
                    f"Nominatim result for {coords} has place_rank {place_rank}, "
                    f"which is below the minRankThreshold of {MIN_PLACE_RANK}. Skipping."
                )
                return None

            result = map_address(place.address)
            logger.info(f"Reverse geocoded {coords} via Nominatim: {result.city or result.state or result.country}")
            return result

        except httpx.TimeoutException as e:
            logger.error(f"Error querying Nominatim for {coords}: timeout ({e})")
            return None
        except Exception as e:
            logger.error(f"Error querying Nominatim for {coords}: {e}")
            return None

