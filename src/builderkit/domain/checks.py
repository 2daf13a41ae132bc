"""Format patterns shared by the sample domain's structural validators."""

from __future__ import annotations

import re
from enum import StrEnum

POSTAL_CODE_PATTERN = re.compile(r"[0-9A-Za-z\-\s]{3,10}")
ISIN_PATTERN = re.compile(r"[A-Z]{2}[A-Z0-9]{9}[0-9]")
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"[+]?[\d\s()\-]{7,20}")
CURRENCY_PATTERN = re.compile(r"[A-Z]{3}")
WEBSITE_PATTERN = re.compile(r"https?://.*")


def choices(enum_cls: type[StrEnum]) -> list[str]:
    """Return the string values of *enum_cls* in declaration order."""
    return [member.value for member in enum_cls]
