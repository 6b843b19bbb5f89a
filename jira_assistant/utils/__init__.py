"""
Utility functions
"""
from jira_assistant.utils.logger import get_logger, setup_logger
from jira_assistant.utils.validators import validate_ticket_key, is_blank

__all__ = [
    "get_logger",
    "setup_logger",
    "validate_ticket_key",
    "is_blank",
]
