# gateway/__init__.py
from .errors import (
    GatewayError,
    RateLimitExceeded,
    InvalidRequestError,
    ConfigurationError,
    UpstreamError,
)
from .models import AIRequest, AIResponse, DEFAULT_QUESTIONS
from .parsing import ParsedSummary, RawTextFallback, parse_summary_reply
from .service import AIGateway

__all__ = [
    "GatewayError",
    "RateLimitExceeded",
    "InvalidRequestError",
    "ConfigurationError",
    "UpstreamError",
    "AIRequest",
    "AIResponse",
    "DEFAULT_QUESTIONS",
    "ParsedSummary",
    "RawTextFallback",
    "parse_summary_reply",
    "AIGateway",
]
