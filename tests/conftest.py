"""
Shared fixtures for the summarizer tests.
"""

from unittest.mock import AsyncMock

import pytest
from loguru import logger

from clients import ChatResult, GitHubClient, LLMServiceClient
from config import SummarizerConfig


@pytest.fixture
def config():
    """Test configuration."""
    return SummarizerConfig(
        github_owner="octo",
        github_repo="widgets",
        github_token="test-token",
        llm_api_endpoint="http://llm.test/v1",
        llm_api_key="test-llm-key",
    )


@pytest.fixture
def github():
    client = AsyncMock(spec=GitHubClient)
    client.list_issue_comments.return_value = []
    client.create_issue_comment.return_value = {"id": 1}
    return client


@pytest.fixture
def llm():
    client = AsyncMock(spec=LLMServiceClient)
    client.chat_completion.return_value = ChatResult(choice="The widget crashes; a null check was agreed on.")
    return client


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


def issue_comment_payload(
    comment_body="please @flows_summarize this",
    action="created",
    title="Bug X",
    issue_body="It breaks.",
    labels=("bug",),
    repository="octo/widgets",
):
    payload = {
        "action": action,
        "issue": {
            "number": 42,
            "title": title,
            "body": issue_body,
            "html_url": "https://github.com/octo/widgets/issues/42",
            "user": {"login": "alice"},
            "labels": [{"name": name} for name in labels],
        },
        "comment": {
            "body": comment_body,
            "user": {"login": "bob"},
        },
    }
    if repository:
        payload["repository"] = {"full_name": repository}
    return payload
