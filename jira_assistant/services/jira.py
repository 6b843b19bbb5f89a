"""
Jira API Client

Fetches a bounded set of issues from the Jira search API and normalizes them
into Ticket records:
- One search request per call (no pagination, no retry)
- Basic auth from the per-request email / API token pair
- Rich-text (ADF) and plain-text descriptions flattened to plain text
- Missing fields mapped to fixed placeholders
"""
import base64
from typing import Dict, Any, Optional, List

import httpx
from pydantic import ValidationError

from jira_assistant.config import get_settings
from jira_assistant.exceptions import SourceFetchError
from jira_assistant.models.schemas import (
    JiraConfig,
    Ticket,
    NO_DESCRIPTION,
    UNKNOWN,
    UNASSIGNED,
)
from jira_assistant.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)

SEARCH_FIELDS = ["summary", "description", "priority", "status", "assignee", "created", "updated"]

# ADF nodes that start a new line when flattened
_BLOCK_NODES = {"paragraph", "heading", "listItem", "codeBlock", "blockquote", "rule", "tableRow"}


def build_jql(project: Optional[str]) -> str:
    """
    Build the JQL filter for a search

    Args:
        project: Optional project key

    Returns:
        `project = "<key>"` or "" for an open-ended search
    """
    if not project or not project.strip():
        return ""
    escaped = project.strip().replace("\\", "\\\\").replace('"', '\\"')
    return f'project = "{escaped}"'


def adf_to_text(node: Any) -> str:
    """
    Flatten an Atlassian Document Format tree to plain text

    Text nodes are concatenated; block nodes (paragraphs, headings, list
    items...) each end on their own line. Plain strings pass through.

    Args:
        node: ADF dict, list of nodes, or str (Jira Server)

    Returns:
        Plain text, stripped
    """
    if node is None:
        return ""
    if isinstance(node, str):
        return node.strip()

    lines: List[str] = []
    current: List[str] = []

    def flush():
        line = "".join(current).strip()
        if line:
            lines.append(line)
        current.clear()

    def walk(n: Any):
        if isinstance(n, list):
            for child in n:
                walk(child)
            return
        if not isinstance(n, dict):
            return
        node_type = n.get("type")
        if node_type == "text":
            current.append(n.get("text") or "")
        elif node_type == "hardBreak":
            flush()
        walk(n.get("content") or [])
        if node_type in _BLOCK_NODES:
            flush()

    walk(node)
    flush()
    return "\n".join(lines)


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _display(obj: Any, attr: str) -> Optional[str]:
    return _text(obj.get(attr)) if isinstance(obj, dict) else None


def normalize_issue(issue: Dict[str, Any]) -> Ticket:
    """
    Map one raw Jira issue to a Ticket

    Args:
        issue: Issue object from the search response

    Returns:
        Ticket with placeholders for any missing field

    Raises:
        pydantic.ValidationError: issue key is not of the form PROJ-123
    """
    fields = issue.get("fields")
    if not isinstance(fields, dict):
        fields = {}

    return Ticket(
        key=issue.get("key") or "",
        summary=_text(fields.get("summary")) or "",
        description=adf_to_text(fields.get("description")) or NO_DESCRIPTION,
        priority=_display(fields.get("priority"), "name") or UNKNOWN,
        status=_display(fields.get("status"), "name") or UNKNOWN,
        assignee=_display(fields.get("assignee"), "displayName") or UNASSIGNED,
        created=_text(fields.get("created")),
        updated=_text(fields.get("updated")),
    )


def first_error_message(body: Any) -> Optional[str]:
    """Pull errorMessages[0] out of a Jira error body, if there is one"""
    if isinstance(body, dict):
        messages = body.get("errorMessages")
        if isinstance(messages, list) and messages and isinstance(messages[0], str):
            return messages[0]
    return None


def _response_error_message(response: httpx.Response) -> Optional[str]:
    try:
        return first_error_message(response.json())
    except ValueError:
        return None


class JiraClient:
    """
    Jira search API client

    Holds no credentials; every call receives its own JiraConfig.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self.max_results = settings.jira_max_results
        self.search_path = settings.jira_search_path

    @staticmethod
    def _auth_header(config: JiraConfig) -> str:
        token = base64.b64encode(f"{config.email}:{config.api_key}".encode("utf-8")).decode("ascii")
        return f"Basic {token}"

    async def _search(self, config: JiraConfig) -> Dict[str, Any]:
        """
        Run the search request

        Args:
            config: Jira access parameters

        Returns:
            Response JSON

        Raises:
            SourceFetchError: transport failure, non-2xx status or non-JSON body
        """
        url = f"{config.domain.rstrip('/')}{self.search_path}"
        params = {
            "jql": build_jql(config.project),
            "maxResults": self.max_results,
            "fields": ",".join(SEARCH_FIELDS),
        }
        headers = {
            "Authorization": self._auth_header(config),
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params, headers=headers)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                f"Jira search failed with HTTP {e.response.status_code}: {e.response.text}"
            )
            raise SourceFetchError(_response_error_message(e.response)) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Jira search request failed: {e}")
            raise SourceFetchError() from e
        except ValueError as e:
            logger.error(f"Jira search returned a non-JSON body: {e}")
            raise SourceFetchError() from e

    async def fetch_tickets(self, config: JiraConfig) -> List[Ticket]:
        """
        Fetch up to `max_results` issues matching the optional project filter

        Args:
            config: Jira access parameters

        Returns:
            Tickets in the order Jira returned them

        Raises:
            SourceFetchError: request failed or Jira reported an error
        """
        logger.info(
            f"Fetching Jira tickets (project={config.project or '*'}, max_results={self.max_results})"
        )
        data = await self._search(config)

        issues = data.get("issues") if isinstance(data, dict) else None
        if not isinstance(issues, list):
            logger.error("Jira search response has no issues list")
            raise SourceFetchError(first_error_message(data))

        tickets: List[Ticket] = []
        for issue in issues:
            if not isinstance(issue, dict):
                continue
            try:
                tickets.append(normalize_issue(issue))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed issue {issue.get('key')!r}: {e.errors()[0]['msg']}"
                )

        logger.info(f"Fetched {len(tickets)} tickets")
        return tickets
