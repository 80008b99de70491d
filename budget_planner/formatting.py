"""Formatting utilities for currency and percentage display."""

from __future__ import annotations

from typing import Union

from .config import CURRENCY_SYMBOL


def format_rupees(amount: Union[float, int, None], include_sign: bool = True) -> str:
    """Format a rupee amount with thousands separators.

    Args:
        amount: The amount to format.  ``None`` is shown as zero.
        include_sign: Whether to prefix the rupee sign.

    Returns:
        Formatted string (e.g. "₹1,234.56" or "1,234.56").

    Example:
        >>> format_rupees(1234.5)
        '₹1,234.50'
    """
    formatted = f"{float(amount or 0):,.2f}"
    return f"{CURRENCY_SYMBOL}{formatted}" if include_sign else formatted


def format_percent(value: Union[float, int, None]) -> str:
    """Format a percentage as returned by the API (already scaled to 0-100)."""
    if value is None:
        return "n/a"
    return f"{float(value):.2f}%"
