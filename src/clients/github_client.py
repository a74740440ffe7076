"""
Async GitHub REST client for the issue and webhook endpoints the summarizer uses.
"""

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from models import Comment


class GitHubAPIError(Exception):
    """Raised when a GitHub API request fails or returns an unexpected body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    """Thin wrapper over the GitHub REST API for a single repository."""

    COMMENTS_PER_PAGE = 100

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    @property
    def repo_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}"

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send one request and return the decoded JSON body."""
        try:
            async with httpx.AsyncClient(
                headers=self.headers, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise GitHubAPIError(
                f"GitHub API {method} {url} failed: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"GitHub API {method} {url} failed: {e}") from e
        except ValueError as e:
            raise GitHubAPIError(f"GitHub API {method} {url} returned invalid JSON") from e

    async def list_issue_comments(self, issue_number: int) -> List[Comment]:
        """
        Fetch the first page (up to 100) of comments for an issue.

        Args:
            issue_number: Issue number within the configured repository

        Returns:
            Comments in the order the API returned them
        """
        logger.debug(f"Fetching comments for issue #{issue_number}")
        data = await self._request(
            "GET",
            f"{self.repo_url}/issues/{issue_number}/comments",
            params={"per_page": self.COMMENTS_PER_PAGE},
        )
        if not isinstance(data, list):
            raise GitHubAPIError("Unexpected comments response: expected a list")
        try:
            return [Comment.model_validate(item) for item in data]
        except ValueError as e:
            raise GitHubAPIError(f"Unexpected comment record: {e}") from e

    async def create_issue_comment(self, issue_number: int, body: str) -> Dict[str, Any]:
        """Post a new comment on an issue and return the created record."""
        return await self._request(
            "POST",
            f"{self.repo_url}/issues/{issue_number}/comments",
            json={"body": body},
        )

    async def list_hooks(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", f"{self.repo_url}/hooks")
        return data if isinstance(data, list) else []

    async def ensure_webhook(
        self,
        url: str,
        events: List[str],
        secret: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Make sure a repository webhook delivering ``events`` to ``url`` exists.

        An existing hook with the same target URL is returned unchanged.
        """
        for hook in await self.list_hooks():
            if hook.get("config", {}).get("url") == url:
                logger.info(f"Webhook already registered for {url} (id={hook.get('id')})")
                return hook

        config: Dict[str, Any] = {"url": url, "content_type": "json"}
        if secret:
            config["secret"] = secret

        hook = await self._request(
            "POST",
            f"{self.repo_url}/hooks",
            json={"name": "web", "active": True, "events": events, "config": config},
        )
        logger.info(f"Registered webhook {hook.get('id')} for {self.owner}/{self.repo}: {events}")
        return hook
