"""Abstract base adapter for reading competition results documents."""

from abc import ABC, abstractmethod

from matnews.core.models import ExtractionResult
from matnews.core.result_extractor import extract


class BaseAdapter(ABC):
    @abstractmethod
    def read_text(self, data_path: str) -> str:
        """Return the text content of a results document.

        Raises DocumentReadError when the document is missing, corrupt or
        cannot be converted to text.
        """
        pass

    def parse(self, data_path: str) -> ExtractionResult:
        """Read a document and run the result extractor over its text."""
        return extract(self.read_text(data_path))
