"""Builders for the sample domain.

Most builders are declared by hand to pick friendlier mutator names and
copy policies. The profile and coordinate builders have nothing to
customize and are derived from their entities.
"""

from __future__ import annotations

from typing import Any

from builderkit.core.builder import Builder
from builderkit.core.derive import derive_builder
from builderkit.core.fields import (
    CopyPolicy,
    append,
    mapping,
    nested,
    nested_many,
    scalar,
    variant,
)
from builderkit.domain.finance import Bond, Portfolio
from builderkit.domain.location import Address, GeoLocation
from builderkit.domain.people import BusinessProfile, Person, PersonalProfile
from builderkit.domain.types import AddressType, BondType, PaymentFrequency, RiskProfile

GeoLocationBuilder = derive_builder(GeoLocation)
PersonalProfileBuilder = derive_builder(PersonalProfile)
BusinessProfileBuilder = derive_builder(BusinessProfile)


class AddressBuilder(Builder[Address]):
    """Builds :class:`Address`; coordinates are embedded by value."""

    entity = Address
    fields = (
        scalar("street"),
        scalar("city"),
        scalar("state"),
        scalar("postal_code"),
        scalar("country"),
        nested("coordinates"),
        scalar("type"),
        scalar("is_primary"),
    )

    def apply_defaults(self) -> None:
        self._draft.type = AddressType.HOME
        self._draft.is_primary = True


class BondBuilder(Builder[Bond]):
    """Builds :class:`Bond`."""

    entity = Bond
    fields = (
        scalar("id"),
        scalar("isin"),
        scalar("name"),
        scalar("issuer"),
        scalar("type"),
        scalar("face_value"),
        scalar("coupon_rate"),
        scalar("maturity_date"),
        scalar("purchase_date"),
        scalar("purchase_price"),
        scalar("current_price"),
        scalar("quantity"),
        scalar("currency"),
        scalar("payment_frequency"),
        scalar("rating"),
        scalar("yield_rate"),
    )

    def apply_defaults(self) -> None:
        self._draft.type = BondType.CORPORATE
        self._draft.currency = "USD"
        self._draft.payment_frequency = PaymentFrequency.SEMI_ANNUAL
        self._draft.quantity = 1


class PersonBuilder(Builder[Person]):
    """Builds :class:`Person`.

    ``with_profile`` takes either profile builder; ``with_friend`` and
    ``with_tag`` append, ``with_metadata(key, value)`` sets one entry.
    """

    entity = Person
    fields = (
        scalar("id"),
        scalar("name"),
        scalar("age"),
        scalar("email"),
        scalar("phone"),
        scalar("birthdate"),
        nested("address"),
        variant("profile", PersonalProfile, BusinessProfile),
        nested_many("friends", method="with_friend"),
        append("tags", method="with_tag"),
        mapping("metadata"),
        scalar("created_at"),
        scalar("updated_at"),
    )


class PortfolioBuilder(Builder[Portfolio]):
    """Builds :class:`Portfolio`.

    The manager is embedded by reference and shared with clones, so every
    variant seeded from one builder points at the same manager object.
    """

    entity = Portfolio
    fields = (
        scalar("id"),
        scalar("name"),
        nested("manager", by_reference=True, policy=CopyPolicy.SHARED),
        nested_many("bonds", method="with_bond"),
        mapping("allocations", method="with_allocation"),
        scalar("risk_profile"),
        scalar("created_at"),
    )

    def apply_defaults(self) -> None:
        self._draft.risk_profile = RiskProfile.MODERATE


BUILTIN_BUILDERS: tuple[type[Builder[Any]], ...] = (
    GeoLocationBuilder,
    AddressBuilder,
    BondBuilder,
    PersonalProfileBuilder,
    BusinessProfileBuilder,
    PersonBuilder,
    PortfolioBuilder,
)
