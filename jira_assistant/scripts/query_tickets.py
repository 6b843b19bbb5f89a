"""
Run one natural-language query against Jira from the command line

Same pipeline as POST /api/process, without the HTTP server:
1. Fetch tickets from Jira
2. Ask the chosen model provider which tickets match
3. Print the matched tickets with the model's explanations

Usage:
    jira-assistant-query "high priority auth bugs" --project PROJ --provider claude
    python -m jira_assistant.scripts.query_tickets "unassigned tickets"

Credentials come from arguments or from the environment / .env file:
    JIRA_DOMAIN, JIRA_EMAIL, JIRA_API_KEY, JIRA_PROJECT, AI_PROVIDER, AI_API_KEY
"""
import argparse
import asyncio
import os
import sys
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from jira_assistant.exceptions import AssistantError, MissingParametersError
from jira_assistant.models.schemas import AIConfig, AnnotatedTicket, JiraConfig
from jira_assistant.services.pipeline import process_tickets
from jira_assistant.utils.logger import get_logger
from jira_assistant.utils.validators import is_blank

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find Jira tickets matching a natural-language query"
    )
    parser.add_argument("prompt", help="Natural-language query, e.g. 'high priority login bugs'")
    parser.add_argument("--domain", default=os.getenv("JIRA_DOMAIN"), help="Jira base URL")
    parser.add_argument("--email", default=os.getenv("JIRA_EMAIL"), help="Jira account email")
    parser.add_argument("--jira-api-key", default=os.getenv("JIRA_API_KEY"), help="Jira API token")
    parser.add_argument("--project", default=os.getenv("JIRA_PROJECT"), help="Project key filter")
    parser.add_argument(
        "--provider",
        default=os.getenv("AI_PROVIDER", "claude"),
        help="claude | perplexity | openrouter"
    )
    parser.add_argument("--ai-api-key", default=os.getenv("AI_API_KEY"), help="Provider API key")
    return parser


def configs_from_args(args: argparse.Namespace):
    """
    Build the request configs, failing like the HTTP API does when parts are missing

    Raises:
        MissingParametersError: Jira or AI parameters, or the prompt, absent
    """
    if is_blank(args.prompt):
        raise MissingParametersError()
    if not (args.domain and args.email and args.jira_api_key):
        raise MissingParametersError()
    if not (args.provider and args.ai_api_key):
        raise MissingParametersError()

    jira_config = JiraConfig(
        domain=args.domain,
        email=args.email,
        api_key=args.jira_api_key,
        project=args.project or None,
    )
    ai_config = AIConfig(provider=args.provider, api_key=args.ai_api_key)
    return jira_config, ai_config


def format_results(results: Sequence[AnnotatedTicket]) -> str:
    """Human-readable listing of the matched tickets"""
    if not results:
        return "No matching tickets."

    lines: List[str] = [f"{len(results)} matching tickets:", ""]
    for ticket in results:
        lines.append(f"{ticket.key}  {ticket.summary}")
        lines.append(f"    {ticket.priority} | {ticket.status} | {ticket.assignee}")
        if ticket.ai_explanation:
            lines.append(f"    {ticket.ai_explanation}")
        lines.append("")
    return "\n".join(lines).rstrip()


async def run(args: argparse.Namespace) -> List[AnnotatedTicket]:
    jira_config, ai_config = configs_from_args(args)
    return await process_tickets(jira_config, ai_config, args.prompt)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point; returns the process exit code"""
    load_dotenv(override=False)
    args = build_parser().parse_args(argv)

    try:
        results = asyncio.run(run(args))
    except AssistantError as e:
        logger.error(f"Query failed: {e.message}")
        return 1

    print(format_results(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
