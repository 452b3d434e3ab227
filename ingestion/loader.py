# ingestion/loader.py
from pathlib import Path

from langchain_community.document_loaders import TextLoader, PyPDFLoader

from config import SUPPORTED_FILE_EXTENSIONS


class ExtractionError(Exception):
    """Raised when no text can be pulled out of a document."""
    pass


def extract_text(file_path: str) -> str:
    """
    Extract plain text from a file. Supports TXT, MD, PDF, and DOCX.

    Raises:
        ExtractionError: If the type is unsupported, the file cannot be
            parsed (corrupt PDF/DOCX, non-UTF-8 text), or it holds no text
    """
    ext = Path(file_path).suffix.lower()
    if ext not in SUPPORTED_FILE_EXTENSIONS:
        raise ExtractionError(f"Unsupported file type: {ext}. Supported: {SUPPORTED_FILE_EXTENSIONS}")

    try:
        text = _load_text(file_path, ext)
    except Exception as e:
        raise ExtractionError(
            f"Could not read {ext} file. It may be corrupt or not UTF-8 encoded."
        ) from e

    text = text.strip()
    if not text:
        raise ExtractionError("No content could be extracted from the file")
    return text


def _load_text(file_path: str, ext: str) -> str:
    if ext == ".pdf":
        documents = PyPDFLoader(file_path).load()
        return "\n".join(doc.page_content for doc in documents)

    if ext == ".docx":
        return _extract_docx(file_path)

    documents = TextLoader(file_path, encoding="utf-8").load()
    return "\n".join(doc.page_content for doc in documents)


def _extract_docx(file_path: str) -> str:
    """Read paragraph text from a DOCX file using python-docx."""
    from docx import Document as DocxDocument

    doc = DocxDocument(file_path)
    return "\n".join(para.text for para in doc.paragraphs if para.text.strip())
