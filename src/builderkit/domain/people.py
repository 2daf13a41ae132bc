"""People and their profiles.

``Person.profile`` is a closed tagged union: it holds a
:class:`PersonalProfile`, a :class:`BusinessProfile`, or nothing, and the
``kind`` field tells them apart.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

from builderkit.core.entity import Entity
from builderkit.core.validation import ErrorCollector
from builderkit.domain.checks import EMAIL_PATTERN, PHONE_PATTERN, WEBSITE_PATTERN
from builderkit.domain.location import Address
from builderkit.domain.types import ProfileKind

MAX_BIO_LENGTH = 500
MAX_AGE = 150


class PersonalProfile(Entity):
    """Self-description of a private individual."""

    kind: Literal[ProfileKind.PERSONAL] = ProfileKind.PERSONAL
    bio: str = ""
    website: str = ""
    interests: list[str] = Field(default_factory=list)

    def collect_errors(self, errors: ErrorCollector) -> None:
        errors.text_length("Bio", self.bio, maximum=MAX_BIO_LENGTH)
        errors.matches(
            "Website", self.website, WEBSITE_PATTERN, message="must start with http:// or https://"
        )


class BusinessProfile(Entity):
    """Professional identity of a person acting for an organization."""

    kind: Literal[ProfileKind.BUSINESS] = ProfileKind.BUSINESS
    company: str = ""
    title: str = ""
    industry: str = ""

    def collect_errors(self, errors: ErrorCollector) -> None:
        errors.require("Company", self.company)
        errors.require("Title", self.title)


PROFILE_VARIANTS: tuple[type[Entity], ...] = (PersonalProfile, BusinessProfile)

Profile = Annotated[PersonalProfile | BusinessProfile, Field(discriminator="kind")]


class Person(Entity):
    """An individual with contact details, an address, and social ties."""

    id: str = ""
    name: str = ""
    age: int = 0
    email: str = ""
    phone: str = ""
    birthdate: str = ""
    address: Address | None = None
    profile: Profile | None = None
    friends: list[Person] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)
    created_at: str = ""
    updated_at: str = ""

    def collect_errors(self, errors: ErrorCollector) -> None:
        errors.require("ID", self.id)
        if errors.require("Name", self.name):
            errors.text_length("Name", self.name, minimum=2)

        if errors.number("Age", self.age):
            errors.non_negative("Age", self.age)
            errors.at_most("Age", self.age, MAX_AGE)

        errors.matches("Email", self.email, EMAIL_PATTERN, message="is not valid")
        errors.matches("Phone", self.phone, PHONE_PATTERN, message="number is not valid")
        errors.iso_date("Birthdate", self.birthdate)

        created = errors.iso_date("CreatedAt", self.created_at)
        updated = errors.iso_date("UpdatedAt", self.updated_at)
        errors.not_before("UpdatedAt", updated, "CreatedAt", created)

        errors.nested("Address", self.address)
        errors.variant("Profile", self.profile, PROFILE_VARIANTS)
        errors.each_nested("Friends", self.friends)
