# utils/validators.py - Input validation utilities
from pathlib import Path
from typing import Optional

from config import (
    MAX_CONTENT_LENGTH,
    MAX_QUESTION_LENGTH,
    MAX_FILE_SIZE_BYTES,
    SUPPORTED_FILE_EXTENSIONS,
)


class InputValidationError(Exception):
    """Raised when request input breaks a size or format limit."""
    pass


def validate_content(content: Optional[str], max_length: int = MAX_CONTENT_LENGTH) -> str:
    """
    Validate document content size.

    Args:
        content: Document text, may be None
        max_length: Maximum allowed characters

    Returns:
        The content, or an empty string when None

    Raises:
        InputValidationError: If content exceeds max_length
    """
    if content is None:
        return ""

    if len(content) > max_length:
        raise InputValidationError(
            f"Content too large. Maximum size is {max_length} characters."
        )

    return content


def validate_question(question: Optional[str], max_length: int = MAX_QUESTION_LENGTH,
                      required: bool = False) -> str:
    """
    Validate a question's size and, when required, that it is not blank.

    Raises:
        InputValidationError: If the question is too long or missing
    """
    if question is None:
        question = ""

    if len(question) > max_length:
        raise InputValidationError(
            f"Question too large. Maximum size is {max_length} characters."
        )

    if required and not question.strip():
        raise InputValidationError("Question cannot be empty")

    return question


def validate_upload(filename: Optional[str], size: int,
                    max_bytes: int = MAX_FILE_SIZE_BYTES) -> str:
    """
    Validate an uploaded file's name and size.

    Returns:
        The lower-cased file extension

    Raises:
        InputValidationError: If the file is missing, unsupported, empty or too large
    """
    if not filename:
        raise InputValidationError("No file provided")

    ext = Path(filename).suffix.lower()
    if ext not in SUPPORTED_FILE_EXTENSIONS:
        supported = ", ".join(sorted(SUPPORTED_FILE_EXTENSIONS))
        raise InputValidationError(f"Unsupported file type. Supported: {supported}")

    if size == 0:
        raise InputValidationError("File is empty")

    if size > max_bytes:
        raise InputValidationError(
            f"File size exceeds {max_bytes // (1024 * 1024)}MB limit"
        )

    return ext
