"""
Phone number formatting for contact forms.

Ten-digit numbers are rendered in the North American style the contact
service stores; anything else is kept exactly as typed so international and
partial numbers survive editing.
"""

import re

_NON_DIGITS = re.compile(r"\D")


def format_phone(raw: str) -> str:
    """
    Format a phone number as ``(DDD)DDD-DDDD`` when it has exactly 10 digits.

    Args:
        raw: Phone number as entered by the user

    Returns:
        The formatted number, or ``raw`` unchanged for any other digit count

    Example:
        >>> format_phone("123-456-7890")
        '(123)456-7890'
        >>> format_phone("12345")
        '12345'
    """
    if not raw:
        return raw

    digits = _NON_DIGITS.sub("", raw)
    if len(digits) != 10:
        return raw

    return f"({digits[:3]}){digits[3:6]}-{digits[6:]}"
