"""Small formatting and time helpers shared by services and schemas."""

import re
from datetime import datetime, timezone
from typing import Optional

SALARY_PERIOD_LABELS = {
    "YEARLY": "/year",
    "MONTHLY": "/month",
    "HOURLY": "/hour",
}

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
}


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_currency(amount: Optional[int], currency: str = "USD") -> str:
    if amount is None:
        return "N/A"
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{amount:,}"
    return f"{amount:,} {currency}"


def format_salary_range(
    salary_min: Optional[int],
    salary_max: Optional[int],
    currency: str = "USD",
    period: str = "YEARLY",
) -> str:
    """
    Human readable salary range.

    Examples:
        >>> format_salary_range(90000, 120000)
        '$90,000 - $120,000/year'
        >>> format_salary_range(None, 50, period="HOURLY")
        'Up to $50/hour'
    """
    if not salary_min and not salary_max:
        return "Salary not specified"

    period_label = SALARY_PERIOD_LABELS.get(period, "")

    if salary_min and salary_max:
        return (
            f"{format_currency(salary_min, currency)} - "
            f"{format_currency(salary_max, currency)}{period_label}"
        )
    if salary_min:
        return f"From {format_currency(salary_min, currency)}{period_label}"
    return f"Up to {format_currency(salary_max, currency)}{period_label}"


def generate_slug(text: str) -> str:
    slug = text.lower()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w-]+", "", slug)
    slug = re.sub(r"--+", "-", slug)
    return slug.strip("-")
