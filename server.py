# server.py - FastAPI server for DocChat AI
import asyncio
import os
import tempfile
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import (
    AI_RATE_LIMIT_REQUESTS,
    AI_RATE_LIMIT_WINDOW_SECONDS,
    CORS_ALLOWED_ORIGINS,
    MAX_CONTENT_LENGTH,
    MAX_FILE_SIZE_MB,
    MAX_QUESTION_LENGTH,
    RATE_LIMIT_CLEANUP_INTERVAL_SECONDS,
    SUPPORTED_FILE_EXTENSIONS,
    UPLOAD_RATE_LIMIT_REQUESTS,
    UPLOAD_RATE_LIMIT_WINDOW_SECONDS,
    UPSTREAM_MAX_TOKENS,
    UPSTREAM_TEMPERATURE,
    UPSTREAM_TIMEOUT_SECONDS,
    get_openai_api_key,
    get_openai_model,
)
from gateway.errors import ConfigurationError, GatewayError, InvalidRequestError, RateLimitExceeded
from gateway.service import AIGateway
from gateway.upstream import CompletionClient
from ingestion.loader import ExtractionError, extract_text
from utils.logger import get_ingestion_logger, get_server_logger
from utils.rate_limiter import RateLimitConfig, RateLimiter, RateLimitSweeper, get_client_ip
from utils.validators import InputValidationError, validate_upload

logger = get_server_logger()
ingestion_logger = get_ingestion_logger()

AI_RATE_LIMIT = RateLimitConfig(
    window_seconds=AI_RATE_LIMIT_WINDOW_SECONDS, max_requests=AI_RATE_LIMIT_REQUESTS
)
UPLOAD_RATE_LIMIT = RateLimitConfig(
    window_seconds=UPLOAD_RATE_LIMIT_WINDOW_SECONDS, max_requests=UPLOAD_RATE_LIMIT_REQUESTS
)


def format_reset_time(reset_time: float) -> str:
    """Epoch seconds -> ISO-8601 UTC with millisecond precision, e.g. 2025-01-01T00:00:00.000Z"""
    dt = datetime.fromtimestamp(reset_time, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def rate_limit_headers(remaining: int, reset_time: float) -> dict:
    return {
        "X-RateLimit-Remaining": str(remaining),
        "X-RateLimit-Reset": format_reset_time(reset_time),
    }


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def rate_limited_response(e: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded",
            "remaining": e.remaining,
            "resetTime": format_reset_time(e.reset_time),
        },
        headers=rate_limit_headers(e.remaining, e.reset_time),
    )


def create_app(
    completion_client: Optional[CompletionClient] = None,
    api_key_loader: Callable[[], Optional[str]] = get_openai_api_key,
    ai_limiter: Optional[RateLimiter] = None,
    upload_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """
    Build the application with its own rate limiters and gateway.

    The limiters live on app.state for the lifetime of the app; the lifespan
    handler runs their cleanup sweep and stops it on shutdown.
    """
    if ai_limiter is None:
        ai_limiter = RateLimiter(AI_RATE_LIMIT, name="ai")
    if upload_limiter is None:
        upload_limiter = RateLimiter(UPLOAD_RATE_LIMIT, name="upload")
    sweeper = RateLimitSweeper(
        [ai_limiter, upload_limiter], interval_seconds=RATE_LIMIT_CLEANUP_INTERVAL_SECONDS
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle handler."""
        logger.info("DocChat AI API starting...")
        if not api_key_loader():
            logger.error("OPENAI_API_KEY is not set; AI requests will fail with 500")
        sweeper.start()
        yield
        await sweeper.stop()
        logger.info("DocChat AI API shutting down...")

    app = FastAPI(
        title="DocChat AI API",
        description="Summarize documents and answer questions about them",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-RateLimit-Remaining", "X-RateLimit-Reset"],
    )

    app.state.ai_limiter = ai_limiter
    app.state.upload_limiter = upload_limiter
    app.state.sweeper = sweeper
    app.state.gateway = AIGateway(
        ai_limiter, completion_client=completion_client, api_key_loader=api_key_loader
    )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {
            "status": "running",
            "message": "DocChat AI API is running",
        }

    @app.get("/limits")
    async def get_limits():
        """Get current API limits and configuration."""
        return {
            "input_limits": {
                "max_content_length": MAX_CONTENT_LENGTH,
                "max_question_length": MAX_QUESTION_LENGTH,
            },
            "file_limits": {
                "max_file_size_mb": MAX_FILE_SIZE_MB,
                "supported_extensions": sorted(SUPPORTED_FILE_EXTENSIONS),
            },
            "rate_limits": {
                "ai": {
                    "requests_per_window": ai_limiter.config.max_requests,
                    "window_seconds": ai_limiter.config.window_seconds,
                },
                "upload": {
                    "requests_per_window": upload_limiter.config.max_requests,
                    "window_seconds": upload_limiter.config.window_seconds,
                },
            },
            "upstream": {
                "model": get_openai_model(),
                "temperature": UPSTREAM_TEMPERATURE,
                "max_tokens": UPSTREAM_MAX_TOKENS,
                "timeout_seconds": UPSTREAM_TIMEOUT_SECONDS,
            },
        }

    @app.post("/ai-proxy")
    async def ai_proxy(req: Request):
        """Summarize content or answer a question about it via the upstream model."""
        client_id = get_client_ip(req)
        gateway: AIGateway = req.app.state.gateway

        logger.info(f"[{client_id}] POST /ai-proxy")

        try:
            body = await req.body()
            payload = await gateway.handle(client_id, body)
        except RateLimitExceeded as e:
            return rate_limited_response(e)
        except InvalidRequestError as e:
            logger.warning(f"[{client_id}] Invalid request: {e}")
            return error_response(e.status_code, str(e))
        except ConfigurationError as e:
            logger.error(f"[{client_id}] Configuration error: {e}")
            return error_response(e.status_code, str(e))
        except GatewayError as e:
            logger.exception(f"[{client_id}] Upstream error")
            return error_response(e.status_code, "Failed to process request")
        except Exception:
            logger.exception(f"[{client_id}] Unexpected error in AI proxy")
            return error_response(500, "Failed to process request")

        limiter = gateway.rate_limiter
        return JSONResponse(
            content=payload,
            headers=rate_limit_headers(
                limiter.remaining(client_id), limiter.reset_time(client_id)
            ),
        )

    @app.post("/extract")
    async def extract(req: Request, file: UploadFile = File(...)):
        """Extract plain text from an uploaded TXT, MD, PDF, or DOCX file."""
        client_id = get_client_ip(req)

        if not upload_limiter.is_allowed(client_id):
            logger.warning(f"[{client_id}] Upload rate limit exceeded")
            return rate_limited_response(RateLimitExceeded(
                remaining=upload_limiter.remaining(client_id),
                reset_time=upload_limiter.reset_time(client_id),
            ))

        start_time = time.time()
        logger.info(f"[{client_id}] POST /extract - File: {file.filename}")

        content = await file.read()
        try:
            ext = validate_upload(file.filename, len(content))
        except InputValidationError as e:
            logger.warning(f"[{client_id}] Rejected upload: {e}")
            return error_response(400, str(e))

        with tempfile.NamedTemporaryFile(delete=False, suffix=ext) as tmp:
            tmp.write(content)
            temp_path = tmp.name

        try:
            ingestion_logger.info(f"[{client_id}] Extracting text from {file.filename} ({len(content)} bytes)")
            text = await asyncio.to_thread(extract_text, temp_path)
        except ExtractionError as e:
            ingestion_logger.warning(f"[{client_id}] Extraction failed: {e}")
            return error_response(422, str(e))
        except Exception:
            ingestion_logger.exception(f"[{client_id}] Error during text extraction")
            return error_response(500, "Failed to extract content from the file")
        finally:
            os.unlink(temp_path)

        elapsed = time.time() - start_time
        logger.info(f"[{client_id}] POST /extract completed in {elapsed:.2f}s - {len(text)} characters")

        return {
            "filename": Path(file.filename).name,
            "content": text,
            "characters": len(text),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=3000)
