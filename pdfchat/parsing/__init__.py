"""PDF text extraction for document-grounded chat.

Responsibilities:
    - Size and header validation (10MB cap)
    - Page-by-page text extraction with pypdf
    - Metadata extraction (title, author, subject)

The extracted text is handed to the conversation as opaque text; the relay
never sees the PDF itself.
"""

from pdfchat.parsing.pdf_parser import (
    MAX_FILE_SIZE,
    PDFContent,
    extract_document,
    extract_text,
)

__all__ = ["MAX_FILE_SIZE", "PDFContent", "extract_document", "extract_text"]
