"""
Tests for webhook payload parsing.
"""

import json

import pytest

from conftest import issue_comment_payload
from models import EventParseError, IgnoredEvent, IssueCommentCreated, parse_event


def encode(payload):
    return json.dumps(payload).encode()


def test_created_issue_comment():
    event = parse_event("issue_comment", encode(issue_comment_payload(labels=("bug", "ui"))))

    assert isinstance(event, IssueCommentCreated)
    assert event.issue.number == 42
    assert event.issue.title == "Bug X"
    assert event.issue.label_names == ["bug", "ui"]
    assert event.comment.user.login == "bob"
    assert event.repository == "octo/widgets"


def test_missing_optional_fields():
    payload = issue_comment_payload(issue_body=None, labels=(), repository=None)
    del payload["issue"]["labels"]

    event = parse_event("issue_comment", encode(payload))

    assert isinstance(event, IssueCommentCreated)
    assert event.issue.body is None
    assert event.issue.label_names == []
    assert event.repository is None


@pytest.mark.parametrize("action", ["edited", "deleted"])
def test_other_actions_ignored(action):
    event = parse_event("issue_comment", encode(issue_comment_payload(action=action)))

    assert isinstance(event, IgnoredEvent)
    assert event.action == action


@pytest.mark.parametrize("event_type", ["issues", "pull_request", "ping", "push"])
def test_other_event_types_ignored(event_type):
    event = parse_event(event_type, encode({"zen": "Keep it logically awesome."}))

    assert isinstance(event, IgnoredEvent)
    assert event.event_type == event_type


@pytest.mark.parametrize("body", [b"", b"{oops", b"\xff\xfe", b"[1, 2]"])
def test_malformed_bodies(body):
    with pytest.raises(EventParseError):
        parse_event("issue_comment", body)


def test_issue_comment_missing_issue():
    payload = issue_comment_payload()
    del payload["issue"]

    with pytest.raises(EventParseError):
        parse_event("issue_comment", encode(payload))
