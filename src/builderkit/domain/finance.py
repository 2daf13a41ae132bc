"""Financial entities: bonds and the portfolios that hold them."""

from __future__ import annotations

from pydantic import Field

from builderkit.core.entity import Entity
from builderkit.core.validation import ErrorCollector, is_number
from builderkit.domain.checks import CURRENCY_PATTERN, ISIN_PATTERN, choices
from builderkit.domain.people import Person
from builderkit.domain.types import BondType, PaymentFrequency, RiskProfile

MAX_ALLOCATION_PERCENT = 100.0


class Bond(Entity):
    """A fixed-income holding.

    Dates are ISO calendar strings (``YYYY-MM-DD``); a bond cannot mature
    before it was purchased.
    """

    id: str = ""
    isin: str = ""
    name: str = ""
    issuer: str = ""
    type: str = ""
    face_value: float = 0.0
    coupon_rate: float = 0.0
    maturity_date: str = ""
    purchase_date: str = ""
    purchase_price: float = 0.0
    current_price: float = 0.0
    quantity: int = 0
    currency: str = ""
    payment_frequency: str = ""
    rating: str = ""
    yield_rate: float = 0.0

    def collect_errors(self, errors: ErrorCollector) -> None:
        if errors.require("ISIN", self.isin, message="is required"):
            errors.matches("ISIN", self.isin, ISIN_PATTERN)
        errors.require("Name", self.name, message="is required")
        errors.require("Issuer", self.issuer, message="is required")
        errors.one_of("Type", self.type, choices(BondType), case_sensitive=False)
        errors.positive("FaceValue", self.face_value)
        errors.non_negative("CouponRate", self.coupon_rate)

        maturity = errors.iso_date("MaturityDate", self.maturity_date)
        purchase = errors.iso_date("PurchaseDate", self.purchase_date)
        errors.not_before("MaturityDate", maturity, "PurchaseDate", purchase)

        errors.positive("PurchasePrice", self.purchase_price)
        errors.positive("CurrentPrice", self.current_price)
        errors.positive("Quantity", self.quantity)
        if errors.require("Currency", self.currency, message="is required"):
            errors.matches("Currency", self.currency, CURRENCY_PATTERN)
        errors.one_of(
            "PaymentFrequency",
            self.payment_frequency,
            choices(PaymentFrequency),
            case_sensitive=False,
        )


class Portfolio(Entity):
    """A named collection of bonds with target allocations by asset class.

    The manager is shared across portfolios rather than owned by any one of
    them.
    """

    id: str = ""
    name: str = ""
    manager: Person | None = None
    bonds: list[Bond] = Field(default_factory=list)
    allocations: dict[str, float] = Field(default_factory=dict)
    risk_profile: str = ""
    created_at: str = ""

    def collect_errors(self, errors: ErrorCollector) -> None:
        errors.require("ID", self.id)
        errors.require("Name", self.name)
        errors.one_of("RiskProfile", self.risk_profile, choices(RiskProfile), optional=True)
        errors.iso_date("CreatedAt", self.created_at)

        allocations = self.allocations or {}
        for asset_class, percent in sorted(allocations.items()):
            if errors.number(f"Allocation {asset_class!r}", percent):
                errors.non_negative(f"Allocation {asset_class!r}", percent)
        total = sum(p for p in allocations.values() if is_number(p))
        if total > MAX_ALLOCATION_PERCENT:
            errors.add(f"Allocations cannot exceed {MAX_ALLOCATION_PERCENT:g} percent")

        errors.nested("Manager", self.manager)
        errors.each_nested("Bonds", self.bonds)
