# client/ai_client.py - HTTP client for the DocChat AI gateway
"""
Thin wrapper over POST /ai-proxy for UI code.

summarize() and ask() never raise on transport problems: network errors,
non-2xx statuses and unreadable bodies all come back as a canned response
carrying an `error` field, so callers can always read `summary`/`questions`
or `answer`.
"""
from typing import Any, Dict, Optional

import requests

from gateway.models import AIResponse, DEFAULT_QUESTIONS
from utils.logger import get_client_logger

logger = get_client_logger()

DEFAULT_TIMEOUT_SECONDS = 60
AI_PROXY_PATH = "/ai-proxy"

SUMMARY_APOLOGY = (
    "I apologize, but I encountered an error while analyzing your content. "
    "Please try again."
)
ANSWER_APOLOGY = (
    "I apologize, but I encountered an error while processing your question. "
    "Please try again."
)


def summary_fallback() -> AIResponse:
    return {
        "error": "Failed to summarize content",
        "summary": SUMMARY_APOLOGY,
        "questions": list(DEFAULT_QUESTIONS),
    }


def answer_fallback() -> AIResponse:
    return {
        "error": "Failed to get answer",
        "answer": ANSWER_APOLOGY,
    }


class AIClient:
    """Calls the gateway's AI endpoint on behalf of the upload and chat panels."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self.session.post(
            f"{self.base_url}{AI_PROXY_PATH}", json=payload, timeout=self.timeout
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Gateway returned a non-object JSON body")
        return data

    def summarize(self, content: str) -> AIResponse:
        try:
            return self._post({"content": content, "type": "summarize"})
        except Exception as e:
            logger.error(f"Error calling AI API: {e}")
            return summary_fallback()

    def ask(self, content: str, question: str) -> AIResponse:
        try:
            return self._post({"content": content, "question": question, "type": "question"})
        except Exception as e:
            logger.error(f"Error calling AI API: {e}")
            return answer_fallback()
