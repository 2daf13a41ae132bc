"""Geographic entities: coordinates and postal addresses."""

from __future__ import annotations

from builderkit.core.entity import Entity
from builderkit.core.validation import ErrorCollector
from builderkit.domain.checks import POSTAL_CODE_PATTERN, choices
from builderkit.domain.types import AddressType


class GeoLocation(Entity):
    """Latitude/longitude pair with an optional accuracy radius in metres."""

    latitude: float = 0.0
    longitude: float = 0.0
    accuracy: float = 0.0

    def collect_errors(self, errors: ErrorCollector) -> None:
        errors.in_range("Latitude", self.latitude, -90, 90)
        errors.in_range("Longitude", self.longitude, -180, 180)
        errors.non_negative("Accuracy", self.accuracy)


class Address(Entity):
    """Postal address, optionally pinned to coordinates."""

    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    coordinates: GeoLocation | None = None
    type: str = ""
    is_primary: bool = False

    def collect_errors(self, errors: ErrorCollector) -> None:
        errors.require("Street", self.street)
        errors.require("City", self.city)
        errors.require("Country", self.country)
        errors.matches("PostalCode", self.postal_code, POSTAL_CODE_PATTERN)
        errors.one_of("Type", self.type, choices(AddressType), optional=True)
        errors.nested("Coordinates", self.coordinates)
