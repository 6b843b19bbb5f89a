"""
Ticket processing pipeline

provider check -> fetch (Jira) -> dispatch (model provider) -> match (reply
parsing), strictly in sequence. Every object lives for one request only; a failure at any stage
ends the request with no partial results.
"""
from typing import List, Optional

from jira_assistant.models.schemas import AIConfig, AnnotatedTicket, JiraConfig, Provider
from jira_assistant.services.jira import JiraClient
from jira_assistant.services.model_dispatcher import ModelDispatcher
from jira_assistant.services.response_matcher import match_response
from jira_assistant.utils.logger import get_logger

logger = get_logger(__name__)


async def process_tickets(
    jira_config: JiraConfig,
    ai_config: AIConfig,
    prompt: str,
    jira_client: Optional[JiraClient] = None,
    dispatcher: Optional[ModelDispatcher] = None,
) -> List[AnnotatedTicket]:
    """
    Run one query end to end

    Args:
        jira_config: Jira access parameters
        ai_config: Provider selector and API key
        prompt: Natural-language query
        jira_client: Client override (tests, CLI)
        dispatcher: Dispatcher override (tests, CLI)

    Returns:
        Tickets the model selected, annotated with its explanations

    Raises:
        SourceFetchError: Jira fetch failed
        UnsupportedProviderError: unknown provider selector (before any network call)
        ModelDispatchError: model call failed
    """
    # Unknown providers are rejected before Jira sees the credentials
    Provider.from_selector(ai_config.provider)

    jira_client = jira_client or JiraClient()
    dispatcher = dispatcher or ModelDispatcher()

    tickets = await jira_client.fetch_tickets(jira_config)
    reply = await dispatcher.dispatch(tickets, prompt, ai_config)
    return match_response(reply, tickets)
