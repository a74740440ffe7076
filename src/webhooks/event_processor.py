"""
Issue summarization pipeline for created issue comments.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from clients import ChatOptions, GitHubAPIError, GitHubClient, LLMServiceClient, LLMServiceError
from config import SummarizerConfig
from models import IgnoredEvent, IssueCommentCreated, WebhookEvent

from .prompts import (
    CHARS_PER_TOKEN,
    aggregate_issue_text,
    build_issue_header,
    build_system_prompt,
    build_user_prompt,
    compose_reply,
    context_budget,
    fit_to_context,
)

TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 192


class Outcome(str, Enum):
    """How a single webhook delivery ended."""
    PARSE_FAILED = "parse_failed"
    IGNORED = "ignored"
    NO_TRIGGER = "no_trigger"
    FETCH_FAILED = "fetch_failed"
    COMPLETION_FAILED = "completion_failed"
    POST_FAILED = "post_failed"
    POSTED = "posted"


class SummarizerError(Exception):
    """Base class for errors that abort one summarization run."""
    outcome: Outcome


class CommentFetchError(SummarizerError):
    outcome = Outcome.FETCH_FAILED


class CompletionError(SummarizerError):
    outcome = Outcome.COMPLETION_FAILED


class CommentPostError(SummarizerError):
    outcome = Outcome.POST_FAILED


@dataclass
class ProcessingResult:
    """Result of handling one delivery."""
    outcome: Outcome
    issue_number: Optional[int] = None
    aggregated_text: Optional[str] = None
    reply: Optional[str] = None
    detail: Optional[str] = None


def build_chat_options(config: SummarizerConfig, system_prompt: str) -> ChatOptions:
    return ChatOptions(
        model=config.llm_model_name,
        token_limit=config.llm_ctx_size,
        restart=True,
        system_prompt=system_prompt,
        temperature=TEMPERATURE,
        max_tokens=MAX_OUTPUT_TOKENS,
    )


class EventProcessor:
    """Turns qualifying issue comments into posted summaries."""

    def __init__(self, config: SummarizerConfig, github: GitHubClient, llm: LLMServiceClient):
        self.config = config
        self.github = github
        self.llm = llm

    @classmethod
    def from_config(cls, config: SummarizerConfig) -> "EventProcessor":
        github = GitHubClient(
            owner=config.github_owner,
            repo=config.github_repo,
            token=config.github_token,
            api_url=config.github_api_url,
            timeout=config.http_timeout,
        )
        llm = LLMServiceClient(
            api_endpoint=config.llm_api_endpoint,
            api_key=config.llm_api_key,
            timeout=config.http_timeout,
        )
        return cls(config, github, llm)

    async def process_event(self, event: WebhookEvent) -> ProcessingResult:
        """
        Handle one parsed delivery.

        Every failure is logged here and ends the run; nothing is retried and
        nothing is posted after a failed step.

        Args:
            event: The parsed webhook event

        Returns:
            ProcessingResult describing how the run ended
        """
        if isinstance(event, IgnoredEvent):
            logger.debug(f"Ignoring {event.event_type} event (action={event.action}): {event.reason}")
            return ProcessingResult(outcome=Outcome.IGNORED, detail=event.reason)

        if event.repository and event.repository != self.config.repository:
            logger.debug(f"Ignoring comment from foreign repository {event.repository}")
            return ProcessingResult(outcome=Outcome.IGNORED, detail="foreign repository")

        issue_number = event.issue.number
        if self.config.trigger_phrase not in (event.comment.body or ""):
            logger.info("Ignoring comment without trigger phrase")
            return ProcessingResult(outcome=Outcome.NO_TRIGGER, issue_number=issue_number)

        try:
            return await self._summarize(event)
        except SummarizerError as e:
            logger.error(f"Summarizing issue #{issue_number} aborted: {e}")
            return ProcessingResult(outcome=e.outcome, issue_number=issue_number, detail=str(e))

    async def _summarize(self, event: IssueCommentCreated) -> ProcessingResult:
        issue = event.issue

        try:
            comments = await self.github.list_issue_comments(issue.number)
        except GitHubAPIError as e:
            raise CommentFetchError(f"Error getting comments from issue: {e}") from e

        aggregated_text = aggregate_issue_text(issue, comments)

        logger.debug("Preparing LLM prompts")
        system_prompt = build_system_prompt(issue)
        options = build_chat_options(self.config, system_prompt)
        reserved = options.max_tokens + (len(system_prompt) + len(build_user_prompt(""))) // CHARS_PER_TOKEN
        header_length = len(build_issue_header(issue))
        if context_budget(options.token_limit, reserved) < header_length:
            raise CompletionError(
                f"Context window of {options.token_limit} tokens cannot hold issue #{issue.number}"
            )
        prompt_text = fit_to_context(aggregated_text, options.token_limit, reserved)
        if len(prompt_text) < len(aggregated_text):
            logger.warning(
                f"Issue #{issue.number} text truncated from {len(aggregated_text)} "
                f"to {len(prompt_text)} characters to fit the context window"
            )
        user_prompt = build_user_prompt(prompt_text)

        logger.debug("Generating summary with LLM")
        try:
            result = await self.llm.chat_completion(f"issue_{issue.number}", user_prompt, options)
        except LLMServiceError as e:
            raise CompletionError(f"Error generating issue summary #{issue.number}: {e}") from e

        reply = compose_reply(issue, result.choice, event.comment.user.login, self.config.service_name)

        logger.debug("Posting summary comment")
        try:
            await self.github.create_issue_comment(issue.number, reply)
        except GitHubAPIError as e:
            raise CommentPostError(f"Error posting issue summary: {e}") from e

        logger.info(f"Successfully posted issue summary for issue #{issue.number}")
        return ProcessingResult(
            outcome=Outcome.POSTED,
            issue_number=issue.number,
            aggregated_text=aggregated_text,
            reply=reply,
        )
