"""
Main entry point for the issue summarizer webhook server.
"""

import asyncio
import sys
from pathlib import Path

# Add src to Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from loguru import logger

from clients import GitHubAPIError, GitHubClient
from config import SummarizerConfig, ConfigError
from utils import setup_logging
from webhooks import create_app

SUBSCRIBED_EVENTS = ["issue_comment"]


async def register_webhook(config: SummarizerConfig):
    """Subscribe the configured repository's issue comment events to this server."""
    client = GitHubClient(
        owner=config.github_owner,
        repo=config.github_repo,
        token=config.github_token,
        api_url=config.github_api_url,
        timeout=config.http_timeout,
    )
    await client.ensure_webhook(
        config.github_webhook_url,
        SUBSCRIBED_EVENTS,
        secret=config.github_webhook_secret,
    )


def main():
    """Main entry point."""
    # Load configuration
    try:
        config = SummarizerConfig.from_env()
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    setup_logging(config.log_level, config.log_file)
    logger.info(f"Deploying issue summarizer for {config.repository}")

    if config.auto_register_webhook:
        if not config.github_webhook_url:
            logger.error("auto_register_webhook is set but github_webhook_url is not")
            sys.exit(1)
        try:
            asyncio.run(register_webhook(config))
        except GitHubAPIError as e:
            logger.error(f"Failed to register webhook: {e}")
            sys.exit(1)

    # Create FastAPI app
    app = create_app(config)

    # Run server
    import uvicorn
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
