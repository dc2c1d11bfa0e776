"""Text extraction for uploaded FAQ documents.

Supports:
- PDF: text of every page, extracted with pypdf
- TXT: UTF-8 text, undecodable bytes replaced
"""

import io
import logging

from pypdf import PdfReader

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
TEXT_CONTENT_TYPE = "text/plain"


class UnsupportedDocumentError(ValueError):
    """Raised for uploads that are neither PDF nor plain text."""


class DocumentExtractionError(RuntimeError):
    """Raised when a document of a supported type cannot be read."""


class DocumentExtractor:
    """Extracts plain text from uploaded documents."""

    SUPPORTED_TYPES = (PDF_CONTENT_TYPE, TEXT_CONTENT_TYPE)

    @staticmethod
    def normalize_content_type(content_type: str) -> str:
        """Drop MIME parameters such as charset and lower-case the type."""
        return (content_type or "").split(";")[0].strip().lower()

    def extract(self, data: bytes, content_type: str) -> str:
        """Extract the text of a document.

        Args:
            data: Raw document bytes
            content_type: Declared MIME type of the document

        Returns:
            The document text

        Raises:
            UnsupportedDocumentError: If the content type is not supported
            DocumentExtractionError: If a PDF cannot be parsed
        """
        kind = self.normalize_content_type(content_type)
        if kind not in self.SUPPORTED_TYPES:
            raise UnsupportedDocumentError("Only PDF and text files are allowed")
        if kind == PDF_CONTENT_TYPE:
            return self._extract_pdf(data)
        return data.decode("utf-8", errors="replace")

    def _extract_pdf(self, data: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            # pypdf raises many exception types on malformed files
            logger.error(f"Failed to read PDF: {str(e)}")
            raise DocumentExtractionError(f"Failed to read PDF: {str(e)}") from e

        text = "\n".join(pages)
        logger.info(f"Extracted {len(text)} chars from {len(pages)} PDF pages")
        return text
