"""
Prompt construction for ticket matching

Turns the fetched tickets and the user's query into the two-part prompt
(system instruction + user text) shared by every model provider.
"""
from typing import Sequence

from jira_assistant.models.schemas import Ticket

SYSTEM_PROMPT = """You are an AI assistant that helps process Jira tickets.
Given a list of tickets and a user query, identify the relevant tickets that match the query criteria.
For each matching ticket, explain briefly why it matches the criteria.
Be concise and factual. Return only tickets that match the criteria."""


def format_ticket_line(ticket: Ticket) -> str:
    """One prompt line per ticket"""
    return (
        f"Key: {ticket.key}, Summary: {ticket.summary}, Priority: {ticket.priority}, "
        f"Status: {ticket.status}, Assignee: {ticket.assignee}"
    )


def build_user_prompt(tickets: Sequence[Ticket], query: str) -> str:
    """
    Build the user message for the model

    Args:
        tickets: Tickets in source order (may be empty)
        query: Natural-language query from the user

    Returns:
        Ticket block followed by the query and the answer instruction
    """
    tickets_data = "\n".join(format_ticket_line(t) for t in tickets)
    return (
        f"Here are the tickets:\n{tickets_data}\n\n"
        f"Query: {query}\n\n"
        "Return only the matching tickets with their keys and a brief explanation."
    )
