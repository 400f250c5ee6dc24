"""Adapter for results that were already converted to plain text."""

from matnews.core.errors import DocumentReadError
from .base import BaseAdapter


class TextAdapter(BaseAdapter):
    """Read a UTF-8 text export of a results sheet.

    Args:
        encoding: Text encoding of the file. Undecodable bytes are replaced,
                  since noisy text only lowers extraction recall.
    """

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def read_text(self, data_path: str) -> str:
        try:
            with open(data_path, 'r', encoding=self.encoding, errors='replace') as f:
                return f.read()
        except (OSError, LookupError) as e:
            raise DocumentReadError(
                f"Failed to read text file: {e}", path=data_path) from e
