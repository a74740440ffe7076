"""
Webhook payload models shared by the server, the processor and the clients.
"""

from .github_events import (
    Comment,
    EventParseError,
    GitHubUser,
    IgnoredEvent,
    Issue,
    IssueCommentCreated,
    Label,
    WebhookEvent,
    parse_event,
)

__all__ = [
    "Comment",
    "EventParseError",
    "GitHubUser",
    "IgnoredEvent",
    "Issue",
    "IssueCommentCreated",
    "Label",
    "WebhookEvent",
    "parse_event",
]
