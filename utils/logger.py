# utils/logger.py - Centralized logging configuration for DocChat AI
import logging
import os
import sys

# Log format with timestamp, level, module, and message
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _default_level() -> int:
    """LOG_LEVEL from the environment (DEBUG, INFO, ...), INFO if unset or unknown."""
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger(name: str, level: int = None) -> logging.Logger:
    """Create a configured logger instance."""
    logger = logging.getLogger(name)
    if level is None:
        level = _default_level()

    # Avoid adding handlers multiple times
    if not logger.handlers:
        logger.setLevel(level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(console_handler)

    return logger


# Pre-configured loggers for different modules
def get_server_logger():
    """Logger for API server operations."""
    return setup_logger("docchat.server")


def get_gateway_logger():
    """Logger for the AI request gateway and upstream calls."""
    return setup_logger("docchat.gateway")


def get_ingestion_logger():
    """Logger for document text extraction."""
    return setup_logger("docchat.ingestion")


def get_rate_limit_logger():
    """Logger for rate limiter decisions and cleanup sweeps."""
    return setup_logger("docchat.ratelimit")


def get_client_logger():
    """Logger for the gateway HTTP client."""
    return setup_logger("docchat.client")
