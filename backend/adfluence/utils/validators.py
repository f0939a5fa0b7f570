"""Input validation utilities."""

import re
from typing import Tuple


def validate_email(email: str) -> Tuple[bool, str]:
    """
    Validate email address format.

    Addresses are stored and matched exactly as given; no case folding.

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not email or len(email) > 255:
        return False, "Email address is required and must be less than 255 characters"

    # Basic email regex pattern
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'

    if not re.match(pattern, email):
        return False, "Invalid email address format"

    return True, ""


def validate_display_name(name: str) -> Tuple[bool, str]:
    """
    Validate an account display name.

    Args:
        name: Name to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not name or not name.strip():
        return False, "Name is required"

    if len(name) > 100:
        return False, "Name must be less than 100 characters"

    return True, ""


def sanitize_input(text: str, max_length: int = 1000) -> str:
    """
    Sanitize user input by removing potentially dangerous characters.

    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    # Remove null bytes
    text = text.replace('\x00', '')

    # Trim to max length
    if len(text) > max_length:
        text = text[:max_length]

    # Strip leading/trailing whitespace
    text = text.strip()

    return text
