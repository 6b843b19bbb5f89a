"""
Pydantic models for the Jira AI Assistant
"""

from jira_assistant.models.schemas import (
    # Placeholders
    NO_DESCRIPTION,
    UNKNOWN,
    UNASSIGNED,

    # Enums
    Provider,

    # Ticket Models
    Ticket,
    AnnotatedTicket,

    # Request Config Models
    JiraConfig,
    AIConfig,

    # API Models
    ProcessRequest,
    ProcessResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "NO_DESCRIPTION",
    "UNKNOWN",
    "UNASSIGNED",
    "Provider",
    "Ticket",
    "AnnotatedTicket",
    "JiraConfig",
    "AIConfig",
    "ProcessRequest",
    "ProcessResponse",
    "ErrorResponse",
    "HealthResponse",
]
