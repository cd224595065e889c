"""PDF text extraction using pypdf.

Extracts plain text page by page, the way the chat view needs it to ground
answers. Any parse failure surfaces as ``ExtractionError``.
"""

import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from pdfchat.models.errors import ExtractionError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PARSE_FAILED = "Failed to parse PDF file"


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Page texts joined by newlines, trimmed.
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author, etc.).
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str]


def _validate_pdf_bytes(file_content: bytes) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.

    Raises:
        ExtractionError: If validation fails.
    """
    if not file_content:
        raise ExtractionError(PARSE_FAILED, "Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise ExtractionError(
            "File too large",
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise ExtractionError(PARSE_FAILED, "Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str]:
    metadata: dict[str, str] = {}
    try:
        if reader.metadata:
            for key, name in (("/Title", "title"), ("/Author", "author"), ("/Subject", "subject")):
                value = reader.metadata.get(key)
                if value:
                    metadata[name] = str(value)
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")
    return metadata


def extract_document(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text, page count and metadata.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with extracted text, page count, and metadata.

    Raises:
        ExtractionError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        page_texts = [page.extract_text() or "" for page in reader.pages]
    except PdfReadError as e:
        logger.warning(f"Corrupt PDF: {e}")
        raise ExtractionError(PARSE_FAILED, f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        logger.warning(f"Error parsing PDF: {e}")
        raise ExtractionError(PARSE_FAILED, str(e)) from e

    text = "".join(f"{page_text}\n" for page_text in page_texts).strip()
    if not text:
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(
        text=text,
        pages=len(page_texts),
        metadata=_extract_metadata(reader),
    )


def extract_text(file_content: bytes) -> str:
    """Extract plain text from a PDF, pages separated by newlines.

    Raises:
        ExtractionError: On any parse failure.
    """
    return extract_document(file_content).text
