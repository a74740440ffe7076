"""
Webhook server for receiving GitHub issue comment events.
Handles signature verification, payload parsing and hands created comments
to the summarization pipeline.
"""

import hashlib
import hmac
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request, HTTPException, Header
from loguru import logger

from config import SummarizerConfig
from models import EventParseError, parse_event

from .event_processor import EventProcessor


class WebhookServer:
    """Main webhook server class."""

    def __init__(self, config: SummarizerConfig, processor: Optional[EventProcessor] = None):
        self.config = config
        self.processor = processor or EventProcessor.from_config(config)
        self.app = FastAPI(title="Issue Summarizer Webhook Server", version="1.0.0")
        self._setup_routes()

    def _setup_routes(self):
        """Setup FastAPI routes."""

        @self.app.get("/health")
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now().isoformat()}

        @self.app.post("/webhooks/github")
        async def github_webhook(
            request: Request,
            x_github_event: str = Header(..., alias="X-GitHub-Event"),
            x_github_delivery: str = Header(..., alias="X-GitHub-Delivery"),
            x_hub_signature_256: Optional[str] = Header(None, alias="X-Hub-Signature-256")
        ):
            """Handle GitHub webhooks."""
            try:
                # Read raw body first for signature verification
                raw_body = await request.body()

                if self.config.github_webhook_secret:
                    if not x_hub_signature_256 or not self._verify_github_signature_bytes(
                        raw_body, x_hub_signature_256
                    ):
                        raise HTTPException(status_code=401, detail="Invalid signature")

                logger.info(f"Received GitHub event: {x_github_event}, delivery: {x_github_delivery}")

                try:
                    event = parse_event(x_github_event, raw_body)
                except EventParseError as e:
                    logger.error(f"Error parsing event (delivery {x_github_delivery}): {e}")
                    raise HTTPException(status_code=400, detail="Malformed event payload")

                result = await self.processor.process_event(event)
                return {"status": result.outcome.value, "delivery": x_github_delivery}

            except HTTPException:
                # Let FastAPI handle intended HTTP errors
                raise
            except Exception as e:
                logger.exception(f"Error processing GitHub webhook: {e}")
                raise HTTPException(status_code=500, detail="Internal server error")

    def _verify_github_signature_bytes(self, body: bytes, signature: str) -> bool:
        """Verify GitHub webhook signature from raw body bytes."""
        if not self.config.github_webhook_secret:
            return False
        expected_signature = "sha256=" + hmac.new(
            self.config.github_webhook_secret.encode(),
            body,
            hashlib.sha256
        ).hexdigest()
        return hmac.compare_digest(signature, expected_signature)


def create_app(config: SummarizerConfig, processor: Optional[EventProcessor] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    server = WebhookServer(config, processor)
    return server.app
