"""
Chat-completion client for an OpenAI-compatible LLM service.
"""

from typing import Optional

import httpx
from loguru import logger
from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, Field


class LLMServiceError(Exception):
    """Raised when the completion service fails or returns no usable choice."""


class ChatOptions(BaseModel):
    """Per-request chat configuration."""
    model: str = Field(default="gpt-4")
    token_limit: int = Field(default=16384, ge=0)
    restart: bool = Field(default=True)
    system_prompt: Optional[str] = Field(default=None)
    temperature: float = Field(default=0.7)
    max_tokens: int = Field(default=192)


class ChatResult(BaseModel):
    choice: str


class LLMServiceClient:
    """
    Sends single-turn chat completions to ``api_endpoint``.

    The service is treated as stateless: every request carries only the
    system and user prompt, which is what ``restart=True`` asks for. The
    conversation key is forwarded as the ``user`` field so requests for the
    same issue can be correlated on the service side.
    """

    def __init__(
        self,
        api_endpoint: str,
        api_key: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.client = AsyncOpenAI(
            base_url=api_endpoint,
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def chat_completion(self, conversation_key: str, prompt: str, options: ChatOptions) -> ChatResult:
        """
        Request one completion for ``prompt``.

        Raises:
            LLMServiceError: on transport/API errors or an empty response
        """
        if not options.restart:
            raise LLMServiceError("Continuing a prior conversation is not supported")

        messages = []
        if options.system_prompt:
            messages.append({"role": "system", "content": options.system_prompt})
        messages.append({"role": "user", "content": prompt})

        logger.debug(f"Requesting completion from {options.model} for {conversation_key}")
        try:
            response = await self.client.chat.completions.create(
                model=options.model,
                messages=messages,
                temperature=options.temperature,
                max_tokens=options.max_tokens,
                user=conversation_key,
            )
        except OpenAIError as e:
            raise LLMServiceError(f"Chat completion failed: {e}") from e

        if not response.choices:
            raise LLMServiceError("Chat completion returned no choices")

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise LLMServiceError("Chat completion returned an empty message")

        return ChatResult(choice=content.strip())
