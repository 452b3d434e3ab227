# config.py - Centralized configuration for DocChat AI
"""
All limits and configuration values in one place.

Secrets (OPENAI_API_KEY) and the model name come from the environment and are
read at call time so a .env file or test overrides take effect.
"""
import os

from dotenv import load_dotenv

load_dotenv()

# === INPUT LIMITS ===
MAX_CONTENT_LENGTH = 50000          # Max characters of document content per request
MAX_QUESTION_LENGTH = 1000          # Max characters for a question

# === FILE LIMITS ===
MAX_FILE_SIZE_MB = 5                # Max file upload size in MB
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
SUPPORTED_FILE_EXTENSIONS = {".txt", ".md", ".pdf", ".docx"}

# === RATE LIMITING ===
AI_RATE_LIMIT_REQUESTS = 10         # 10 AI requests per minute
AI_RATE_LIMIT_WINDOW_SECONDS = 60
UPLOAD_RATE_LIMIT_REQUESTS = 5      # 5 uploads per minute
UPLOAD_RATE_LIMIT_WINDOW_SECONDS = 60
RATE_LIMIT_CLEANUP_INTERVAL_SECONDS = 5 * 60

# === UPSTREAM COMPLETION API ===
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
UPSTREAM_TEMPERATURE = 0.7
UPSTREAM_MAX_TOKENS = 1000
UPSTREAM_TIMEOUT_SECONDS = 30

# === CORS ===
# file:// origins cannot be whitelisted; serve the frontend over http.
CORS_ALLOWED_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://127.0.0.1",
    "http://127.0.0.1:3000",
]


def get_openai_api_key():
    """Upstream credential, or None when not configured."""
    return os.getenv("OPENAI_API_KEY") or None


def get_openai_model() -> str:
    return os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
