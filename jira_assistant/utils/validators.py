"""
Input validation utilities
"""
import re

TICKET_KEY_PATTERN = re.compile(r"^[A-Z]+-[0-9]+$")


def validate_ticket_key(key: str) -> bool:
    """
    Validate Jira issue key format

    Args:
        key: Issue key to validate (e.g. PROJ-123)

    Returns:
        True if valid format
    """
    return bool(key) and TICKET_KEY_PATTERN.match(key) is not None


def is_blank(value) -> bool:
    """True for None and for strings holding only whitespace"""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()
