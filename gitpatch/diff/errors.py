class PatchError(Exception):
    """Base class for errors raised while rendering a patch."""


class EmptyComparisonError(PatchError):
    """Both sides of a comparison are absent."""

    def __init__(self, message: str = "no objects to compare, both are empty"):
        super().__init__(message)


class StreamReadError(PatchError):
    """A content stream could not be read or decoded during a diff."""
