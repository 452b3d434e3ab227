# gateway/models.py - Request/response shapes
from typing import List, Literal, Optional, TypedDict

from pydantic import BaseModel

SUMMARIZE = "summarize"
QUESTION = "question"

DEFAULT_QUESTIONS = [
    "What are the main topics covered?",
    "Summarize the key points",
    "What are the important conclusions?",
    "Explain the main concepts",
]


class AIRequest(BaseModel):
    content: Optional[str] = None
    question: Optional[str] = None
    type: Literal["summarize", "question"]


class AIResponse(TypedDict, total=False):
    """Normalized payload returned to callers."""
    summary: str
    questions: List[str]
    answer: str
    error: str
