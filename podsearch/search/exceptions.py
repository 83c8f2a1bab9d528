"""Search pipeline exceptions."""


class SearchError(Exception):
    """Base class for request-level search failures."""


class PhraseGenerationError(SearchError):
    """Raised when expansion yields no usable search phrase."""

    def __init__(self, message: str = "Failed to generate search phrases"):
        super().__init__(message)
