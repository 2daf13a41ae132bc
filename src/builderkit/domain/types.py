"""Enumerations used by the sample domain's structural validators."""

from __future__ import annotations

from enum import StrEnum


class AddressType(StrEnum):
    """Kinds of postal address."""

    HOME = "Home"
    WORK = "Work"
    MAILING = "Mailing"
    BILLING = "Billing"
    OTHER = "Other"


class BondType(StrEnum):
    """Bond issuer categories (matched case-insensitively)."""

    GOVERNMENT = "government"
    CORPORATE = "corporate"
    MUNICIPAL = "municipal"
    TREASURY = "treasury"
    ZERO_COUPON = "zero-coupon"
    OTHER = "other"


class PaymentFrequency(StrEnum):
    """Coupon payment schedules (matched case-insensitively)."""

    ANNUAL = "annual"
    SEMI_ANNUAL = "semi-annual"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    NONE = "none"


class ProfileKind(StrEnum):
    """Discriminant of the person profile variant."""

    PERSONAL = "personal"
    BUSINESS = "business"


class RiskProfile(StrEnum):
    """Portfolio risk appetite."""

    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"
