"""Adapter for reading tournament results PDFs."""

import os

import fitz  # PyMuPDF

from matnews.core.errors import DocumentReadError
from .base import BaseAdapter


MAX_DOCUMENT_BYTES = 10 * 1024 * 1024


class PdfAdapter(BaseAdapter):
    """Extract the plain text of every page of a results PDF."""

    def __init__(self, max_bytes: int = MAX_DOCUMENT_BYTES):
        self.max_bytes = max_bytes

    def read_text(self, data_path: str) -> str:
        """Open the PDF and return its page texts joined in page order."""
        self._check_document(data_path)

        try:
            doc = fitz.open(data_path)
        except Exception as e:
            raise DocumentReadError(
                f"Failed to parse PDF file: {e}", path=data_path) from e

        try:
            pages = [page.get_text("text") for page in doc]
        except Exception as e:
            raise DocumentReadError(
                f"Failed to read text from PDF file: {e}", path=data_path) from e
        finally:
            doc.close()

        return '\n'.join(pages)

    def _check_document(self, data_path: str) -> None:
        if not data_path.lower().endswith('.pdf'):
            raise DocumentReadError(
                f"Only PDF files are allowed: {data_path}", path=data_path)
        try:
            size = os.path.getsize(data_path)
        except OSError as e:
            raise DocumentReadError(
                f"Cannot read PDF file: {e}", path=data_path) from e
        if size > self.max_bytes:
            raise DocumentReadError(
                f"PDF file is {size} bytes, limit is {self.max_bytes}",
                path=data_path)


def cleanup_file(file_path: str) -> None:
    """Remove an uploaded document once it has been processed."""
    try:
        if os.path.exists(file_path):
            os.remove(file_path)
    except OSError as e:
        print(f"Warning: Could not clean up {file_path}: {e}")
