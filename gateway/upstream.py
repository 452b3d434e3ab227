# gateway/upstream.py - Chat-completion client for the upstream provider
from typing import Optional, Protocol

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from config import (
    UPSTREAM_MAX_TOKENS,
    UPSTREAM_TEMPERATURE,
    UPSTREAM_TIMEOUT_SECONDS,
    get_openai_model,
)
from gateway.errors import UpstreamError


class CompletionClient(Protocol):
    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        ...


def extract_reply_text(message) -> str:
    """
    Pull the assistant text out of a chat reply.

    Raises:
        UpstreamError: If the reply carries no text content
    """
    content = getattr(message, "content", None)
    if not isinstance(content, str) or not content.strip():
        raise UpstreamError("Upstream reply is missing message content")
    return content


class OpenAICompletionClient:
    """Sends one system + user message pair to OpenAI chat completions."""

    def __init__(self, api_key: str, model: Optional[str] = None,
                 temperature: float = UPSTREAM_TEMPERATURE,
                 max_tokens: int = UPSTREAM_MAX_TOKENS,
                 timeout: float = UPSTREAM_TIMEOUT_SECONDS):
        self.model_name = model or get_openai_model()
        self.model = ChatOpenAI(
            model=self.model_name,
            api_key=api_key,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            max_retries=0,
        )

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        reply = await self.model.ainvoke([
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ])
        return extract_reply_text(reply)
