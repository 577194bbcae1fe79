"""Mini README: Display helpers for money amounts.

Structure:
    * format_indian_number - digit grouping in the Indian style (12,34,567).
    * format_compact - short form using thousand / lakh / crore suffixes.
    * format_signed_amount - "+₹1.2K" / "-₹850" style profit labels.

The dashboard shows amounts in the lakh/crore system, so grouping is done
here rather than through the locale module which rarely ships ``en_IN``.
"""

from __future__ import annotations

import math


def format_indian_number(value: float) -> str:
    """Group the integer part of ``value`` as 1,23,45,678."""

    if value is None or (isinstance(value, float) and math.isnan(value)):
        value = 0
    sign = "-" if value < 0 else ""
    whole = str(int(round(abs(value))))
    if len(whole) <= 3:
        return f"{sign}{whole}"
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return f"{sign}{','.join(groups)},{tail}"


def _trim(value: float) -> str:
    text = f"{value:.1f}"
    return text[:-2] if text.endswith(".0") else text


def format_compact(value: float) -> str:
    """Return 950, 1.2K, 3.4L or 1.1Cr for the given amount."""

    if value is None or (isinstance(value, float) and math.isnan(value)):
        value = 0
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if magnitude >= 1_00_00_000:
        return f"{sign}{_trim(magnitude / 1_00_00_000)}Cr"
    if magnitude >= 1_00_000:
        return f"{sign}{_trim(magnitude / 1_00_000)}L"
    if magnitude >= 1_000:
        return f"{sign}{_trim(magnitude / 1_000)}K"
    return f"{sign}{format_indian_number(magnitude)}"


def format_signed_amount(value: float, currency_symbol: str = "₹") -> str:
    """Profit label with an explicit sign and compact magnitude."""

    sign = "+" if value >= 0 else "-"
    return f"{sign}{currency_symbol}{format_compact(abs(value))}"
