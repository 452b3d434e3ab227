# client/__init__.py
from .ai_client import AIClient, summary_fallback, answer_fallback

__all__ = ["AIClient", "summary_fallback", "answer_fallback"]
