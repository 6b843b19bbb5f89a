"""
Pydantic models for the Jira AI Assistant

Covers the normalized ticket records that flow through the pipeline, the
per-request Jira/AI configuration, and the request/response bodies of the
HTTP API. Wire names follow the browser client (camelCase); Python code uses
snake_case through field aliases.
"""
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field, field_validator, ConfigDict

from jira_assistant.exceptions import UnsupportedProviderError
from jira_assistant.utils.validators import validate_ticket_key


# ============================================================================
# Placeholders
# ============================================================================

NO_DESCRIPTION = "No description"
UNKNOWN = "Unknown"
UNASSIGNED = "Unassigned"


# ============================================================================
# Enums
# ============================================================================

class Provider(str, Enum):
    """Supported chat-completion providers"""
    CLAUDE = "claude"
    PERPLEXITY = "perplexity"
    OPENROUTER = "openrouter"

    @classmethod
    def from_selector(cls, selector: Optional[str]) -> "Provider":
        """
        Parse a provider selector case-insensitively

        Args:
            selector: Value from the request, e.g. "Claude"

        Returns:
            Matching Provider

        Raises:
            UnsupportedProviderError: selector is not one of the supported providers
        """
        if isinstance(selector, str):
            try:
                return cls(selector.strip().lower())
            except ValueError:
                pass
        raise UnsupportedProviderError()


# ============================================================================
# Ticket Models
# ============================================================================

class Ticket(BaseModel):
    """
    Normalized Jira issue

    Built fresh for every request by the Jira client and held only in memory.

    Attributes:
        key: Issue key, <PROJECT>-<number>
        summary: Short title ("" when Jira sends none)
        description: Flattened plain text, or the "No description" placeholder
        priority: Priority name or "Unknown"
        status: Status name or "Unknown"
        assignee: Assignee display name or "Unassigned"
        created: Opaque timestamp string from Jira
        updated: Opaque timestamp string from Jira
    """
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Issue key, e.g. PROJ-123")
    summary: str = ""
    description: str = NO_DESCRIPTION
    priority: str = UNKNOWN
    status: str = UNKNOWN
    assignee: str = UNASSIGNED
    created: Optional[str] = None
    updated: Optional[str] = None

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Issue keys must look like PROJ-123"""
        if not validate_ticket_key(v):
            raise ValueError(f"Invalid issue key: {v!r}")
        return v


class AnnotatedTicket(Ticket):
    """Ticket selected by the model, with the model's one-line reason"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ai_explanation: str = Field("", alias="aiExplanation")

    @classmethod
    def from_ticket(cls, ticket: Ticket, explanation: str) -> "AnnotatedTicket":
        return cls(**ticket.model_dump(), ai_explanation=explanation)


# ============================================================================
# Request Config Models
# ============================================================================

class JiraConfig(BaseModel):
    """Jira access parameters for a single request"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    domain: str = Field(..., description="Jira base URL, e.g. https://acme.atlassian.net")
    email: str = Field(..., description="Account email used for basic auth")
    api_key: str = Field(..., alias="apiKey", repr=False, description="Jira API token")
    project: Optional[str] = Field(None, description="Optional project key filter")


class AIConfig(BaseModel):
    """Model access parameters for a single request"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider: str = Field(..., description="claude | perplexity | openrouter")
    api_key: str = Field(..., alias="apiKey", repr=False, description="Provider API key")


# ============================================================================
# API Models
# ============================================================================

class ProcessRequest(BaseModel):
    """Body of POST /api/process"""
    model_config = ConfigDict(populate_by_name=True)

    jira_config: Optional[JiraConfig] = Field(None, alias="jiraConfig")
    ai_config: Optional[AIConfig] = Field(None, alias="aiConfig")
    prompt: Optional[str] = None


class ProcessResponse(BaseModel):
    """Successful processing result"""
    results: List[AnnotatedTicket] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body shared by every failure"""
    error: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Liveness response"""
    status: str = "ok"
