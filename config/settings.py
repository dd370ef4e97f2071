"""Centralized configuration for the kirei CLI."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Config Store
    config_dir: str = "~/.kirei"
    config_file_name: str = "config.json"

    # Greeting / Prompt Configuration
    default_user_name: str = "World"
    name_placeholder: str = "Ada Lovelace"

    # Logging Configuration
    log_level: str = "WARNING"

    # HTTP Configuration
    http_timeout: float = 10.0
    user_agent: str = "kirei-cli"
    list_page_size: int = 20

    # Provider Endpoints
    github_api_url: str = "https://api.github.com"
    linear_graphql_url: str = "https://api.linear.app/graphql"
    trello_api_url: str = "https://api.trello.com/1"

    # Credentials
    token_env_template: str = "KIREI_{provider}_TOKEN"

    model_config = SettingsConfigDict(
        env_prefix="KIREI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
