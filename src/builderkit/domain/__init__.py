"""Sample domain: entities that exercise every field shape the engine supports.

This layer depends on :mod:`builderkit.core` and pydantic only.
"""

from builderkit.domain.finance import Bond, Portfolio
from builderkit.domain.location import Address, GeoLocation
from builderkit.domain.people import BusinessProfile, Person, PersonalProfile

__all__ = [
    "Address",
    "Bond",
    "BusinessProfile",
    "GeoLocation",
    "Person",
    "PersonalProfile",
    "Portfolio",
]
