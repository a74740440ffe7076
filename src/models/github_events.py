"""
Typed models for inbound GitHub webhook deliveries.

Only ``issue_comment`` / ``created`` deliveries are modelled in full; every
other delivery is reduced to an :class:`IgnoredEvent` carrying the reason it
was dropped.
"""

import json
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError


class EventParseError(ValueError):
    """Raised when a webhook delivery cannot be deserialized."""


class GitHubUser(BaseModel):
    login: str


class Label(BaseModel):
    name: str


class Issue(BaseModel):
    """Issue record as sent in the ``issue_comment`` payload."""
    number: int
    title: str
    body: Optional[str] = None
    html_url: str
    user: GitHubUser
    labels: list[Label] = Field(default_factory=list)

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]


class Comment(BaseModel):
    """A single issue comment, from a webhook payload or the comments API."""
    body: Optional[str] = None
    user: GitHubUser


class Repository(BaseModel):
    full_name: str


class IssueCommentPayload(BaseModel):
    action: str
    issue: Issue
    comment: Comment
    repository: Optional[Repository] = None


class IssueCommentCreated(BaseModel):
    """A newly created issue comment; the only event that can trigger work."""
    kind: Literal["issue_comment_created"] = "issue_comment_created"
    issue: Issue
    comment: Comment
    repository: Optional[str] = None


class IgnoredEvent(BaseModel):
    """Any delivery the summarizer does not act on."""
    kind: Literal["ignored"] = "ignored"
    event_type: str
    action: Optional[str] = None
    reason: str


WebhookEvent = Union[IssueCommentCreated, IgnoredEvent]


def parse_event(event_type: str, raw_body: bytes) -> WebhookEvent:
    """
    Deserialize a webhook delivery into a :data:`WebhookEvent`.

    Args:
        event_type: Value of the ``X-GitHub-Event`` header
        raw_body: Raw request body

    Returns:
        IssueCommentCreated for created issue comments, IgnoredEvent otherwise

    Raises:
        EventParseError: if the body is not JSON, or is an ``issue_comment``
            delivery missing the fields the summarizer relies on
    """
    try:
        data = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise EventParseError(f"Malformed JSON body: {e}") from e

    if not isinstance(data, dict):
        raise EventParseError("Webhook body is not a JSON object")

    action = data.get("action")
    if event_type != "issue_comment":
        return IgnoredEvent(event_type=event_type, action=action, reason="not an issue comment")

    try:
        payload = IssueCommentPayload.model_validate(data)
    except ValidationError as e:
        raise EventParseError(f"Invalid issue_comment payload: {e}") from e

    if payload.action != "created":
        return IgnoredEvent(event_type=event_type, action=payload.action, reason="comment not created")

    return IssueCommentCreated(
        issue=payload.issue,
        comment=payload.comment,
        repository=payload.repository.full_name if payload.repository else None,
    )
