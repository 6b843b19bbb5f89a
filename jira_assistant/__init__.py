"""
Jira AI Assistant - match Jira tickets to natural-language queries with an LLM
"""
__version__ = "1.0.0"
