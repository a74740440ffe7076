"""
Webhook handling module for the issue summarizer.

This module provides the webhook server that receives GitHub issue comment
events and the pipeline that posts LLM summaries back to the issue.
"""

from .webhook_server import WebhookServer, create_app
from .event_processor import EventProcessor, Outcome, ProcessingResult

__all__ = [
    "WebhookServer",
    "create_app",
    "EventProcessor",
    "Outcome",
    "ProcessingResult",
]
