"""
Text builders for the summary prompts and the posted reply.
"""

from typing import Iterable

from models import Comment, Issue

CHARS_PER_TOKEN = 4


def build_issue_header(issue: Issue) -> str:
    labels = ", ".join(issue.label_names)
    return (
        f"User '{issue.user.login}', opened an issue titled '{issue.title}', "
        f"labeled '{labels}', with the following post: '{issue.body or ''}'.\n"
    )


def format_comment_line(comment: Comment) -> str:
    return f"{comment.user.login} commented: {comment.body or ''}\n"


def aggregate_issue_text(issue: Issue, comments: Iterable[Comment]) -> str:
    """Header line followed by one line per comment, in the order given."""
    text = build_issue_header(issue)
    for comment in comments:
        text += format_comment_line(comment)
    return text


def build_system_prompt(issue: Issue) -> str:
    return (
        f"Given the information that user '{issue.user.login}' opened an issue titled "
        f"'{issue.title}', your task is to deeply analyze the content of the issue posts. "
        "Distill the crux of the issue, the potential solutions suggested."
    )


def build_user_prompt(issue_text: str) -> str:
    return (
        f"Analyze the GitHub issue content: {issue_text}. Provide a concise analysis "
        "touching upon: The central problem discussed in the issue. The main solutions "
        "proposed or agreed upon. Aim for a succinct, analytical summary that stays "
        "under 128 tokens."
    )


def context_budget(token_limit: int, reserved_tokens: int) -> int:
    """Characters of issue text that fit beside ``reserved_tokens`` in the window."""
    return max(token_limit - reserved_tokens, 0) * CHARS_PER_TOKEN


def fit_to_context(text: str, token_limit: int, reserved_tokens: int) -> str:
    """
    Truncate ``text`` so it fits in ``token_limit - reserved_tokens`` tokens.

    Token counts are estimated at CHARS_PER_TOKEN characters per token; the
    beginning of the text (issue header, oldest comments) is kept.
    """
    budget = context_budget(token_limit, reserved_tokens)
    if len(text) <= budget:
        return text
    return text[:budget]


def compose_reply(issue: Issue, summary: str, triggered_by: str, service_name: str) -> str:
    """
    Build the four-line reply: title, URL, summary, attribution.

    Whitespace inside the summary is collapsed so it stays on one line.
    """
    summary_line = " ".join(summary.split())
    return "\n".join([
        issue.title,
        issue.html_url,
        summary_line,
        f"This result is generated by {service_name}. Triggered by @{triggered_by}",
    ])
