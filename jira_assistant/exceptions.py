"""Exceptions raised by the ticket processing pipeline."""
from typing import Optional


class AssistantError(Exception):
    """Base error carrying a caller-safe message and an HTTP status."""

    default_message = "Failed to process tickets"
    status_code = 500

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingParametersError(AssistantError):
    """Jira config, AI config or query absent from the request."""

    default_message = "Missing required parameters"
    status_code = 400


class SourceFetchError(AssistantError):
    """Jira search call failed or returned a structured error.

    The message is Jira's first reported error text when it sent one.
    """

    default_message = "Failed to fetch Jira tickets"


class UnsupportedProviderError(AssistantError):
    """Provider selector outside the supported set."""

    default_message = "Unsupported AI provider"


class ModelDispatchError(AssistantError):
    """Any failure talking to the chosen model backend.

    The backend's own diagnostic is logged, never carried in the message.
    """

    default_message = "Failed to process tickets with AI service"
