# gateway/service.py - AI request gateway pipeline
import asyncio
import time
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from config import UPSTREAM_TIMEOUT_SECONDS, get_openai_api_key
from gateway.errors import (
    ConfigurationError,
    InvalidRequestError,
    RateLimitExceeded,
    UpstreamError,
)
from gateway.models import AIRequest, SUMMARIZE
from gateway.parsing import ParsedSummary, parse_summary_reply
from gateway.prompts import build_question_prompt, build_summarize_prompt
from gateway.upstream import CompletionClient, OpenAICompletionClient
from utils.logger import get_gateway_logger
from utils.rate_limiter import RateLimiter
from utils.validators import InputValidationError, validate_content, validate_question

logger = get_gateway_logger()


class AIGateway:
    """
    Runs one inbound AI request through the pipeline:

        rate limit -> parse/size checks -> credential check -> prompt
        -> upstream call -> normalized response

    Each gate raises a GatewayError subclass and nothing after it runs.
    The gateway keeps no per-request state; the limiter is the only shared
    mutable resource and is passed in by the caller.
    """

    def __init__(self, rate_limiter: RateLimiter,
                 completion_client: Optional[CompletionClient] = None,
                 api_key_loader: Callable[[], Optional[str]] = get_openai_api_key,
                 timeout: float = UPSTREAM_TIMEOUT_SECONDS):
        self.rate_limiter = rate_limiter
        self.timeout = timeout
        self._completion_client = completion_client
        self._api_key_loader = api_key_loader
        self._cached_key: Optional[str] = None

    def check_rate_limit(self, client_id: str) -> None:
        if not self.rate_limiter.is_allowed(client_id):
            remaining = self.rate_limiter.remaining(client_id)
            reset_time = self.rate_limiter.reset_time(client_id)
            logger.warning(f"[{client_id}] Rate limit exceeded, resets at {reset_time:.0f}")
            raise RateLimitExceeded(remaining=remaining, reset_time=reset_time)

    def parse_request(self, body: bytes) -> AIRequest:
        try:
            request = AIRequest.model_validate_json(body)
        except ValidationError as e:
            raise InvalidRequestError(
                "Invalid request body. Expected JSON with 'type' of 'summarize' or 'question'."
            ) from e

        try:
            request.content = validate_content(request.content)
            request.question = validate_question(
                request.question, required=request.type != SUMMARIZE
            )
        except InputValidationError as e:
            raise InvalidRequestError(str(e)) from e

        return request

    def get_completion_client(self) -> CompletionClient:
        api_key = self._api_key_loader()
        if not api_key:
            raise ConfigurationError("OpenAI API key not configured")

        if self._completion_client is None or (
            isinstance(self._completion_client, OpenAICompletionClient)
            and api_key != self._cached_key
        ):
            self._completion_client = OpenAICompletionClient(api_key=api_key)
            self._cached_key = api_key
        return self._completion_client

    async def call_upstream(self, client: CompletionClient,
                            system_prompt: str, user_prompt: str) -> str:
        try:
            reply = await asyncio.wait_for(
                client.complete(system_prompt, user_prompt), timeout=self.timeout
            )
        except UpstreamError:
            raise
        except asyncio.TimeoutError as e:
            raise UpstreamError(f"Upstream call timed out after {self.timeout}s") from e
        except Exception as e:
            raise UpstreamError(f"Upstream call failed: {type(e).__name__}") from e

        if not isinstance(reply, str) or not reply.strip():
            raise UpstreamError("Upstream reply is missing message content")
        return reply

    async def handle(self, client_id: str, body: bytes) -> Dict[str, Any]:
        """Process one request body for `client_id` and return the response payload."""
        start_time = time.time()

        self.check_rate_limit(client_id)
        request = self.parse_request(body)
        client = self.get_completion_client()

        if request.type == SUMMARIZE:
            system_prompt, user_prompt = build_summarize_prompt(request.content)
        else:
            system_prompt, user_prompt = build_question_prompt(request.content, request.question)

        logger.info(f"[{client_id}] Calling upstream ({request.type}, {len(request.content)} chars)")
        reply = await self.call_upstream(client, system_prompt, user_prompt)

        if request.type == SUMMARIZE:
            result = parse_summary_reply(reply)
            if not isinstance(result, ParsedSummary):
                logger.warning(f"[{client_id}] Summary reply was not JSON, using raw text fallback")
            payload = result.to_response()
        else:
            payload = {"answer": reply}

        elapsed = time.time() - start_time
        logger.info(f"[{client_id}] {request.type} completed in {elapsed:.2f}s")
        return payload
