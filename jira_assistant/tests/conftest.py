"""
Pytest configuration and fixtures
"""
import pytest
from typing import Any, Dict, List
from unittest.mock import MagicMock, patch

import httpx

from jira_assistant.models.schemas import AIConfig, JiraConfig, Ticket


@pytest.fixture
def sample_tickets() -> List[Ticket]:
    """Three normalized tickets in source order"""
    return [
        Ticket(
            key="PROJ-1",
            summary="Login fails after password reset",
            description="Users cannot log in after resetting their password",
            priority="High",
            status="Open",
            assignee="Alice Kim",
            created="2024-03-01T10:00:00.000+0000",
            updated="2024-03-02T10:00:00.000+0000",
        ),
        Ticket(
            key="PROJ-2",
            summary="Dashboard widgets load slowly",
            priority="Medium",
            status="In Progress",
        ),
        Ticket(
            key="PROJ-10",
            summary="Typo on billing page",
            priority="Low",
            status="Done",
            assignee="Bob Lee",
        ),
    ]


@pytest.fixture
def jira_config() -> JiraConfig:
    return JiraConfig(
        domain="https://acme.atlassian.net",
        email="dev@acme.io",
        api_key="jira-token",
        project="PROJ",
    )


@pytest.fixture
def ai_config() -> AIConfig:
    return AIConfig(provider="claude", api_key="sk-test")


@pytest.fixture
def raw_issue() -> Dict[str, Any]:
    """Jira Cloud issue with every field present"""
    return {
        "key": "PROJ-123",
        "fields": {
            "summary": "API authentication fails intermittently",
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {
                        "type": "paragraph",
                        "content": [
                            {"type": "text", "text": "Users report random "},
                            {"type": "text", "text": "auth failures."},
                        ],
                    },
                    {
                        "type": "paragraph",
                        "content": [{"type": "text", "text": "Mostly on mobile."}],
                    },
                ],
            },
            "priority": {"name": "High"},
            "status": {"name": "Open"},
            "assignee": {"displayName": "Alice Kim"},
            "created": "2024-03-01T10:00:00.000+0000",
            "updated": "2024-03-02T10:00:00.000+0000",
        },
    }


def _make_response(json_data: Any = None, status_code: int = 200, text: str = "") -> MagicMock:
    """
    Mock httpx.Response

    Non-2xx responses raise httpx.HTTPStatusError from raise_for_status().
    """
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}", request=MagicMock(), response=response
        )
    else:
        response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def make_response():
    """Factory for mock httpx responses"""
    return _make_response


@pytest.fixture
def mock_http():
    """Patched httpx.AsyncClient; returns the client used inside `async with`"""
    with patch("httpx.AsyncClient") as mock_client:
        yield mock_client.return_value.__aenter__.return_value
