"""
Tests for process startup.
"""

from unittest.mock import AsyncMock, patch

import pytest

import main
from clients import GitHubAPIError
from config import SummarizerConfig


def test_invalid_ctx_size_fails_fast(monkeypatch):
    for name, value in {
        "github_owner": "octo",
        "github_repo": "widgets",
        "github_token": "ghp_test",
        "llm_api_endpoint": "http://llm.test/v1",
        "llm_api_key": "sk-test",
        "llm_ctx_size": "not-a-number",
    }.items():
        monkeypatch.setenv(name, value)

    with patch("main.create_app") as create_app, patch("uvicorn.run") as run:
        with pytest.raises(SystemExit):
            main.main()

    create_app.assert_not_called()
    run.assert_not_called()


@pytest.mark.asyncio
async def test_register_webhook(config):
    config = config.model_copy(update={
        "github_webhook_url": "https://summarizer.example/webhooks/github",
        "github_webhook_secret": "s3cret",
    })

    with patch("main.GitHubClient.ensure_webhook", new_callable=AsyncMock) as ensure:
        await main.register_webhook(config)

    ensure.assert_awaited_once_with(
        "https://summarizer.example/webhooks/github", ["issue_comment"], secret="s3cret"
    )


def test_webhook_registration_failure_exits(config):
    config = config.model_copy(update={
        "auto_register_webhook": True,
        "github_webhook_url": "https://summarizer.example/webhooks/github",
    })
    failing = AsyncMock(side_effect=GitHubAPIError("GitHub API POST failed: 403", status_code=403))

    with patch("main.SummarizerConfig") as config_cls, patch("main.register_webhook", failing), \
            patch("main.setup_logging"), patch("main.create_app") as create_app, patch("uvicorn.run") as run:
        config_cls.from_env.return_value = config
        with pytest.raises(SystemExit) as exc_info:
            main.main()

    assert exc_info.value.code == 1
    failing.assert_awaited_once_with(config)
    create_app.assert_not_called()
    run.assert_not_called()
