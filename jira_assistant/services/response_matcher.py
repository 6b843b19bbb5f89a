"""
Match a model reply back to the fetched tickets

The model answers in free text. Two passes recover a structured result:

1. Collect every issue key mentioned in the reply (`[A-Z]+-[0-9]+`), in order
   of first mention, without duplicates.
2. For each key that names a fetched ticket, take the line right after the
   first line that starts with that key as the model's explanation.

Keys that do not name a fetched ticket are dropped, so the result is always a
subset of the input tickets. Nothing here raises: a reply without usable keys
simply yields an empty list.
"""
import re
from typing import Dict, List, Optional, Sequence

from jira_assistant.models.schemas import AnnotatedTicket, Ticket
from jira_assistant.utils.logger import get_logger

logger = get_logger(__name__)

TICKET_KEY_REGEX = re.compile(r"[A-Z]+-[0-9]+")


def extract_ticket_keys(text: Optional[str]) -> List[str]:
    """
    Issue keys in order of first mention, deduplicated

    Args:
        text: Model reply

    Returns:
        Keys exactly as they appear in the reply
    """
    if not isinstance(text, str) or not text:
        return []
    seen = set()
    keys = []
    for match in TICKET_KEY_REGEX.finditer(text):
        key = match.group(0)
        if key not in seen:
            seen.add(key)
            keys.append(key)
    return keys


def extract_explanation(text: Optional[str], key: str) -> str:
    """
    Explanation for one key: the line after the first line starting with it

    The key is matched case-insensitively and must not run on into more
    digits (PROJ-1 does not claim a PROJ-10 line).

    Args:
        text: Model reply
        key: Issue key

    Returns:
        The following line, stripped; "" when there is none or it is blank
    """
    if not isinstance(text, str) or not text:
        return ""
    line_start = re.compile(rf"^\s*{re.escape(key)}(?![0-9])", re.IGNORECASE)
    lines = text.splitlines()
    for index, line in enumerate(lines):
        if line_start.match(line):
            if index + 1 < len(lines):
                return lines[index + 1].strip()
            return ""
    return ""


def match_response(reply_text: Optional[str], tickets: Sequence[Ticket]) -> List[AnnotatedTicket]:
    """
    Recover the tickets the model selected, with their explanations

    Args:
        reply_text: Plain-text model reply
        tickets: Tickets fetched for this request

    Returns:
        AnnotatedTickets in order of first mention in the reply
    """
    by_key: Dict[str, Ticket] = {}
    for ticket in tickets:
        by_key.setdefault(ticket.key, ticket)

    results: List[AnnotatedTicket] = []
    dropped = 0

    for key in extract_ticket_keys(reply_text):
        ticket = by_key.get(key)
        if ticket is None:
            dropped += 1
            continue
        results.append(AnnotatedTicket.from_ticket(ticket, extract_explanation(reply_text, key)))

    if dropped:
        logger.debug(f"Dropped {dropped} keys not present in the fetched tickets")
    logger.info(f"Matched {len(results)} of {len(tickets)} tickets")
    return results
