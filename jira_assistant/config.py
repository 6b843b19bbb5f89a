"""
Jira AI Assistant - Configuration Management
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # FastAPI
    fastapi_env: str = "development"
    fastapi_host: str = "0.0.0.0"
    fastapi_port: int = 3001
    cors_origins: List[str] = ["*"]

    # Outbound HTTP
    request_timeout_seconds: float = 60.0

    # Jira
    jira_search_path: str = "/rest/api/3/search"
    jira_max_results: int = 100

    # AI providers (credentials arrive per request, never from env)
    claude_api_url: str = "https://api.anthropic.com/v1/messages"
    claude_model: str = "claude-3-opus-20240229"
    anthropic_version: str = "2023-06-01"
    perplexity_api_url: str = "https://api.perplexity.ai/chat/completions"
    perplexity_model: str = "sonar-medium-online"
    openrouter_api_url: str = "https://openrouter.ai/api/v1/chat/completions"
    openrouter_model: str = "anthropic/claude-3-opus"
    ai_max_tokens: int = 1024

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
