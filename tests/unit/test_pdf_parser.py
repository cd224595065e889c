"""Unit tests for PDF text extraction."""

import pickle
from collections.abc import Callable, Sequence

import pytest
import pytest_check as check

from pdfchat.models.errors import ExtractionError
from pdfchat.parsing.pdf_parser import MAX_FILE_SIZE, extract_document, extract_text

PdfFactory = Callable[[Sequence[str]], bytes]


class TestExtractValid:
    """Tests for successful extraction."""

    def test_extracts_single_page_text(self, make_pdf: PdfFactory) -> None:
        text = extract_text(make_pdf(["Hello World"]))

        check.is_in("Hello World", text)
        check.equal(text, text.strip())

    def test_pages_joined_in_order_with_newlines(self, make_pdf: PdfFactory) -> None:
        text = extract_text(make_pdf(["Page one", "Page two", "Page three"]))

        check.less(text.index("Page one"), text.index("Page two"))
        check.less(text.index("Page two"), text.index("Page three"))
        check.is_in("\n", text[text.index("Page one") : text.index("Page two")])

    def test_document_reports_page_count(self, make_pdf: PdfFactory) -> None:
        result = extract_document(make_pdf(["a", "b"]))

        check.equal(result.pages, 2)
        check.is_instance(result.metadata, dict)

    def test_blank_page_gives_empty_text(self, make_pdf: PdfFactory) -> None:
        result = extract_document(make_pdf([""]))

        check.equal(result.pages, 1)
        check.equal(result.text, "")


class TestExtractRejection:
    """Tests for validation and parse failures."""

    def test_rejects_empty_bytes(self) -> None:
        with pytest.raises(ExtractionError, match="Failed to parse PDF file") as exc_info:
            extract_text(b"")

        assert exc_info.value.details == "Empty file provided"

    def test_rejects_non_pdf_file(self) -> None:
        with pytest.raises(ExtractionError) as exc_info:
            extract_text(b"This is not a real PDF file, just text with .pdf extension")

        assert "Invalid PDF" in exc_info.value.details

    def test_rejects_oversized_file(self) -> None:
        oversized = b"%PDF-1.4" + b"\x00" * (MAX_FILE_SIZE + 1)

        with pytest.raises(ExtractionError) as exc_info:
            extract_text(oversized)

        assert "exceeds maximum" in exc_info.value.details

    def test_rejects_truncated_pdf(self) -> None:
        with pytest.raises(ExtractionError, match="Failed to parse PDF file"):
            extract_text(b"%PDF-1.4\n1 0 obj\n<<")

    def test_rejection_survives_worker_process_boundary(self) -> None:
        """The UI extracts in a process pool; errors come back pickled."""
        with pytest.raises(ExtractionError) as exc_info:
            extract_text(b"")

        restored = pickle.loads(pickle.dumps(exc_info.value))

        assert isinstance(restored, ExtractionError)
        assert restored.message == "Failed to parse PDF file"
        assert restored.details == "Empty file provided"
