# gateway/prompts.py - Prompt construction for summarize and question modes
from typing import Tuple

SUMMARIZE_SYSTEM_PROMPT = """You are a helpful AI assistant that summarizes documents and generates relevant questions.
Provide a concise summary (under 300 words) and generate 3-5 relevant questions that users might ask about this content.
Format your response as JSON with "summary" and "questions" fields. If the content contains meaningless text, return a summary stating that the content is meaningless and an empty array for questions."""

SUMMARIZE_USER_PROMPT = """Please analyze the following content and provide:
1. A concise summary (under 300 words)
2. 3-5 relevant questions that users might ask about this content

Content: {content}

Respond in JSON format:
{{
  "summary": "your summary here",
  "questions": ["question 1", "question 2", "question 3", "question 4", "question 5"]
}}"""

QUESTION_SYSTEM_PROMPT = """You are a helpful AI assistant that answers questions based on the provided context.
Provide clear, accurate answers based on the context given."""

QUESTION_USER_PROMPT = """Based on the following context, please answer this question: "{question}"

Context: {content}

Provide a clear and helpful answer based on the context."""


def build_summarize_prompt(content: str) -> Tuple[str, str]:
    """Return (system, user) prompts asking for a JSON summary and questions."""
    return SUMMARIZE_SYSTEM_PROMPT, SUMMARIZE_USER_PROMPT.format(content=content)


def build_question_prompt(content: str, question: str) -> Tuple[str, str]:
    """Return (system, user) prompts asking for a context-grounded answer."""
    return QUESTION_SYSTEM_PROMPT, QUESTION_USER_PROMPT.format(
        question=question, content=content
    )
