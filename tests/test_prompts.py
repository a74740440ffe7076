"""
Tests for prompt and reply text builders.
"""

from models import GitHubUser, Issue, Label
from webhooks.prompts import (
    build_issue_header,
    build_system_prompt,
    build_user_prompt,
    compose_reply,
    fit_to_context,
)


def make_issue(**overrides):
    fields = {
        "number": 7,
        "title": "Crash on save",
        "body": "Saving twice crashes the app.",
        "html_url": "https://github.com/octo/widgets/issues/7",
        "user": GitHubUser(login="alice"),
        "labels": [Label(name="bug"), Label(name="p1")],
    }
    fields.update(overrides)
    return Issue(**fields)


def test_issue_header():
    assert build_issue_header(make_issue()) == (
        "User 'alice', opened an issue titled 'Crash on save', labeled 'bug, p1', "
        "with the following post: 'Saving twice crashes the app.'.\n"
    )


def test_issue_header_without_body_or_labels():
    header = build_issue_header(make_issue(body=None, labels=[]))

    assert "labeled ''" in header
    assert header.endswith("with the following post: ''.\n")


def test_system_prompt_names_creator_and_title():
    prompt = build_system_prompt(make_issue())

    assert "user 'alice' opened an issue titled 'Crash on save'" in prompt
    assert "Distill the crux of the issue" in prompt


def test_user_prompt_embeds_text():
    prompt = build_user_prompt("THREAD")

    assert prompt.startswith("Analyze the GitHub issue content: THREAD. ")
    assert "under 128 tokens" in prompt


def test_reply_has_four_lines():
    reply = compose_reply(make_issue(), "Line one.\n\nLine   two.", "bob", "flows.network")

    assert reply.split("\n") == [
        "Crash on save",
        "https://github.com/octo/widgets/issues/7",
        "Line one. Line two.",
        "This result is generated by flows.network. Triggered by @bob",
    ]


def test_fit_to_context_keeps_short_text():
    assert fit_to_context("short", token_limit=100, reserved_tokens=10) == "short"


def test_fit_to_context_truncates_tail():
    text = "a" * 100 + "b" * 100

    fitted = fit_to_context(text, token_limit=35, reserved_tokens=10)

    assert fitted == "a" * 100
