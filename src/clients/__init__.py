"""
Outbound clients for the GitHub REST API and the chat-completion service.
"""

from .github_client import GitHubClient, GitHubAPIError
from .llm_client import LLMServiceClient, LLMServiceError, ChatOptions, ChatResult

__all__ = [
    "GitHubClient",
    "GitHubAPIError",
    "LLMServiceClient",
    "LLMServiceError",
    "ChatOptions",
    "ChatResult",
]
