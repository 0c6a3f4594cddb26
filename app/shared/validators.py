"""Shared validation utilities"""

import re
from typing import Optional

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()
    if not re.match(EMAIL_PATTERN, email):
        raise ValueError("Invalid email format")
    return email


def validate_hex_color(color: Optional[str]) -> Optional[str]:
    """Validate a #RRGGBB colour"""
    if not color:
        return color
    if not re.match(HEX_COLOR_PATTERN, color):
        raise ValueError("Color must be in #RRGGBB format")
    return color.lower()


def require_text(value: Optional[str], field_name: str = "Value") -> str:
    """Trim a free-text value and reject it when nothing is left"""
    if value is None or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value.strip()
