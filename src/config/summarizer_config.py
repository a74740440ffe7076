"""
Configuration management for the issue summarizer.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field, ValidationError
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_TRIGGER_PHRASE = "@flows_summarize"
DEFAULT_MODEL_NAME = "gpt-4"
DEFAULT_CTX_SIZE = 16384

REQUIRED_ENV = (
    "github_owner",
    "github_repo",
    "github_token",
    "llm_api_endpoint",
    "llm_api_key",
)


class ConfigError(ValueError):
    """Raised when the environment does not describe a usable configuration."""


class SummarizerConfig(BaseModel):
    """Main service configuration, built once at startup."""

    # GitHub settings
    github_owner: str = Field(min_length=1)
    github_repo: str = Field(min_length=1)
    github_token: str = Field(min_length=1)
    github_api_url: str = Field(default="https://api.github.com")
    github_webhook_secret: Optional[str] = Field(default=None)
    github_webhook_url: Optional[str] = Field(default=None)
    auto_register_webhook: bool = Field(default=False)

    # Trigger settings
    trigger_phrase: str = Field(default=DEFAULT_TRIGGER_PHRASE, min_length=1)
    service_name: str = Field(default="flows.network")

    # LLM settings
    llm_api_endpoint: str = Field(min_length=1)
    llm_api_key: str = Field(min_length=1)
    llm_model_name: str = Field(default=DEFAULT_MODEL_NAME)
    llm_ctx_size: int = Field(default=DEFAULT_CTX_SIZE, ge=0, le=2**32 - 1)

    # HTTP client settings
    http_timeout: float = Field(default=30.0, gt=0)

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    @property
    def repository(self) -> str:
        """The ``owner/repo`` slug events are accepted from."""
        return f"{self.github_owner}/{self.github_repo}"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "SummarizerConfig":
        """
        Create configuration from environment variables.

        Raises:
            ConfigError: if a required variable is missing or a value does
                not validate (e.g. a non-numeric ``llm_ctx_size``).
        """
        env = os.environ if environ is None else environ

        missing = [name for name in REQUIRED_ENV if not env.get(name)]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        ctx_size = env.get("llm_ctx_size", str(DEFAULT_CTX_SIZE)).strip()
        if not (ctx_size.isascii() and ctx_size.isdigit()):
            raise ConfigError(f"Invalid llm_ctx_size: {ctx_size!r} is not an unsigned integer")

        try:
            return cls(
                github_owner=env["github_owner"],
                github_repo=env["github_repo"],
                github_token=env["github_token"],
                github_api_url=env.get("github_api_url", "https://api.github.com"),
                github_webhook_secret=env.get("github_webhook_secret") or None,
                github_webhook_url=env.get("github_webhook_url") or None,
                auto_register_webhook=env.get("auto_register_webhook", "false").lower() == "true",
                trigger_phrase=env.get("trigger_phrase", DEFAULT_TRIGGER_PHRASE),
                service_name=env.get("service_name", "flows.network"),
                llm_api_endpoint=env["llm_api_endpoint"],
                llm_api_key=env["llm_api_key"],
                llm_model_name=env.get("llm_model_name", DEFAULT_MODEL_NAME),
                llm_ctx_size=int(ctx_size),
                http_timeout=env.get("http_timeout", "30"),
                host=env.get("host", "0.0.0.0"),
                port=env.get("port", "8000"),
                log_level=env.get("log_level", "INFO"),
                log_file=env.get("log_file") or None,
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
