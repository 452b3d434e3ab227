# gateway/parsing.py - Turn upstream summarize replies into a response payload
"""
A summarize reply is either a JSON object (returned to the caller as-is) or
anything else, in which case the raw text becomes the summary and a fixed set
of generic questions is attached. Both outcomes are successes.
"""
import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from gateway.models import AIResponse, DEFAULT_QUESTIONS

# ```json ... ``` wrapper some models put around JSON output
_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)


@dataclass
class ParsedSummary:
    payload: Dict[str, Any]

    def to_response(self) -> Dict[str, Any]:
        return self.payload


@dataclass
class RawTextFallback:
    text: str
    questions: List[str] = field(default_factory=lambda: list(DEFAULT_QUESTIONS))

    def to_response(self) -> AIResponse:
        return {"summary": self.text, "questions": list(self.questions)}


SummaryResult = Union[ParsedSummary, RawTextFallback]


def strip_code_fence(text: str) -> str:
    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    return match.group(1).strip() if match else stripped


def parse_summary_reply(text: str) -> SummaryResult:
    """Classify an upstream summarize reply as parsed JSON or raw-text fallback."""
    try:
        data = json.loads(strip_code_fence(text))
    except ValueError:
        return RawTextFallback(text=text)

    if not isinstance(data, dict):
        return RawTextFallback(text=text)

    return ParsedSummary(payload=data)
