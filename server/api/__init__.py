"""API module for FastAPI schemas and dependencies."""

from .dependencies import get_map_service
from .schemas import MapReverseGeocodeDto, MapReverseGeocodeResponse, RootResponse

__all__ = ["get_map_service", "MapReverseGeocodeDto", "MapReverseGeocodeResponse", "RootResponse"]
