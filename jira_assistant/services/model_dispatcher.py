"""
Chat-completion dispatch across the supported model providers

Supported providers:
- Claude (Anthropic Messages API, x-api-key auth)
- Perplexity (OpenAI-style chat completions, bearer auth)
- OpenRouter (OpenAI-style chat completions, bearer auth)

Every provider receives the same system/user prompt pair and is reduced to a
plain-text reply. One round trip per call: no retry, no state kept between
calls.
"""
from typing import Any, Dict, Optional, Sequence, Tuple

import httpx

from jira_assistant.config import get_settings
from jira_assistant.exceptions import ModelDispatchError
from jira_assistant.models.schemas import AIConfig, Provider, Ticket
from jira_assistant.services.prompt_builder import SYSTEM_PROMPT, build_user_prompt
from jira_assistant.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)

# (url, headers, json body)
ProviderRequest = Tuple[str, Dict[str, str], Dict[str, Any]]


def build_claude_request(system: str, user: str, api_key: str) -> ProviderRequest:
    headers = {
        "x-api-key": api_key,
        "anthropic-version": settings.anthropic_version,
        "Content-Type": "application/json",
    }
    body = {
        "model": settings.claude_model,
        "max_tokens": settings.ai_max_tokens,
        "system": system,
        "messages": [{"role": "user", "content": user}],
    }
    return settings.claude_api_url, headers, body


def _build_chat_request(url: str, model: str, system: str, user: str, api_key: str) -> ProviderRequest:
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    body = {
        "model": model,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
    }
    return url, headers, body


def build_perplexity_request(system: str, user: str, api_key: str) -> ProviderRequest:
    return _build_chat_request(
        settings.perplexity_api_url, settings.perplexity_model, system, user, api_key
    )


def build_openrouter_request(system: str, user: str, api_key: str) -> ProviderRequest:
    return _build_chat_request(
        settings.openrouter_api_url, settings.openrouter_model, system, user, api_key
    )


def extract_claude_text(data: Any) -> str:
    """content[0].text of a Messages API reply"""
    text = data["content"][0]["text"]
    if not isinstance(text, str):
        raise TypeError("content[0].text is not a string")
    return text


def extract_chat_text(data: Any) -> str:
    """choices[0].message.content of a chat-completions reply"""
    text = data["choices"][0]["message"]["content"]
    if not isinstance(text, str):
        raise TypeError("choices[0].message.content is not a string")
    return text


PROVIDERS = {
    Provider.CLAUDE: (build_claude_request, extract_claude_text),
    Provider.PERPLEXITY: (build_perplexity_request, extract_chat_text),
    Provider.OPENROUTER: (build_openrouter_request, extract_chat_text),
}


class ModelDispatcher:
    """
    Send the ticket prompt to the configured provider and return its text reply
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds

    async def dispatch(
        self,
        tickets: Sequence[Ticket],
        query: str,
        config: AIConfig
    ) -> str:
        """
        Ask the model which tickets match the query

        Args:
            tickets: Tickets fetched for this request
            query: Natural-language query
            config: Provider selector and API key

        Returns:
            Plain-text model reply

        Raises:
            UnsupportedProviderError: selector not supported (before any network call)
            ModelDispatchError: transport error, non-2xx status or malformed reply
        """
        provider = Provider.from_selector(config.provider)
        build_request, extract_text = PROVIDERS[provider]

        url, headers, body = build_request(
            SYSTEM_PROMPT, build_user_prompt(tickets, query), config.api_key
        )
        logger.info(f"Dispatching {len(tickets)} tickets to {provider.value}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, headers=headers, json=body)
                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                f"{provider.value} returned HTTP {e.response.status_code}: {e.response.text}"
            )
            raise ModelDispatchError() from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{provider.value} request failed: {e}")
            raise ModelDispatchError() from e

        try:
            text = extract_text(data)
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected {provider.value} reply envelope: {e!r}")
            raise ModelDispatchError() from e

        logger.info(f"Received {len(text)} characters from {provider.value}")
        return text


async def dispatch(tickets: Sequence[Ticket], query: str, config: AIConfig) -> str:
    """Convenience wrapper around a default ModelDispatcher"""
    return await ModelDispatcher().dispatch(tickets, query, config)
