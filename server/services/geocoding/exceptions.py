"""Exceptions raised inside the geocoding services."""


class PlacefinderError(Exception):
    """Base exception for all placefinder errors."""


class ProviderResponseError(PlacefinderError):
    """The reverse geocoding provider sent a body we could not parse."""

    def __init__(self, fmt: str, detail: str):
        self.format = fmt
        self.detail = detail
        super().__init__(f"Unparseable {fmt} response from provider: {detail}")
