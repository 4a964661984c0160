"""
Money parsing utilities for INR benefit amounts.

Benefit lines carry their amounts inside free text, e.g.:
- "₹12,000 per annum" → 12000
- "₹1,000 grant and ₹500 book allowance" → 1500
- "Free hostel accommodation" → 0
"""

import re
from typing import Any, Iterable, List, Mapping, Optional

from src.core.errors import InvalidInput


# Rupee sign followed by ASCII digits with optional grouping commas
_INR_PATTERN = re.compile(r"₹([0-9,]+)")


def parse_inr_amounts(text: Optional[str]) -> List[int]:
    """
    Extract every INR amount from a piece of text.

    Examples:
        "₹12,000 scholarship" → [12000]
        "₹1,000 grant, ₹2,500 bonus" → [1000, 2500]
        "not specified" → []

    Args:
        text: Free-text description

    Returns:
        List of amounts in rupees, in order of appearance

    Raises:
        InvalidInput: If a matched amount has no digits (e.g. "₹,,")
    """
    if not text:
        return []

    amounts = []
    for raw in _INR_PATTERN.findall(text):
        number_str = raw.replace(",", "")
        try:
            amounts.append(int(number_str, 10))
        except ValueError as e:
            raise InvalidInput(f"Malformed INR amount '₹{raw}' in benefit description") from e

    return amounts


def total_benefit_value(benefits: Optional[Iterable[Mapping[str, Any]]]) -> str:
    """
    Calculate a rough total of the monetary benefits of a scholarship.

    Sums every amount found in every benefit line description. Lines without
    an amount (non-monetary benefits) contribute nothing.

    Args:
        benefits: Benefit lines, each with a free-text ``description``

    Returns:
        Total in rupees as a string ("0" if nothing was found)
    """
    total = 0
    for benefit in benefits or []:
        total += sum(parse_inr_amounts(benefit.get("description")))
    return str(total)
