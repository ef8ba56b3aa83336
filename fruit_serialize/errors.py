"""
Decode errors for fruitchain encodings.

Every decoder either returns a fully populated value or raises one of
these; nothing is ever default-filled from a short or malformed stream.
"""

class MalformedEncodingError(ValueError):
    """
    Raised when a byte stream is not a valid canonical encoding.

    Attributes:
        offset (int): Stream position at which the problem was detected
    """

    def __init__(self, message: str, offset: int = 0):
        super().__init__(f"{message} (at offset {offset})")
        self.offset = offset

class TruncatedStreamError(MalformedEncodingError):
    """The stream ended before a field was complete."""

class InvalidLengthPrefixError(MalformedEncodingError):
    """A compact-size prefix was non-canonical or exceeded MAX_SIZE."""

class TrailingDataError(MalformedEncodingError):
    """Bytes were left over after a complete value was decoded."""
