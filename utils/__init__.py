# utils/__init__.py
from .logger import (
    setup_logger,
    get_server_logger,
    get_gateway_logger,
    get_ingestion_logger,
    get_rate_limit_logger,
    get_client_logger,
)
from .validators import (
    validate_content,
    validate_question,
    validate_upload,
    InputValidationError,
)
from .rate_limiter import (
    RateLimitConfig,
    RateLimiter,
    RateLimitSweeper,
    get_client_ip,
    resolve_client_id,
)

__all__ = [
    "setup_logger",
    "get_server_logger",
    "get_gateway_logger",
    "get_ingestion_logger",
    "get_rate_limit_logger",
    "get_client_logger",
    "validate_content",
    "validate_question",
    "validate_upload",
    "InputValidationError",
    "RateLimitConfig",
    "RateLimiter",
    "RateLimitSweeper",
    "get_client_ip",
    "resolve_client_id",
]
