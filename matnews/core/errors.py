"""Exception hierarchy for matnews."""


class MatnewsError(Exception):
    """Base exception for all matnews errors."""


class DocumentReadError(MatnewsError):
    """A results document could not be read or converted to text.

    This is the only fatal condition of the extraction workflow; poor
    extraction quality is never reported as an error.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
