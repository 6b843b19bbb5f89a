"""
Business Logic Services
"""
from .jira import JiraClient
from .model_dispatcher import ModelDispatcher
from .response_matcher import match_response
from .pipeline import process_tickets

__all__ = [
    "JiraClient",
    "ModelDispatcher",
    "match_response",
    "process_tickets",
]
