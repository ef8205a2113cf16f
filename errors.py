"""
errors.py

Exception hierarchy for VarChar column decoding.
"""


class ColumnError(Exception):
    """Base class for all column view errors."""
    pass


class DecodeError(ColumnError, ValueError):
    """Raised when column bytes cannot be decoded."""
    pass


class OutOfBoundsError(DecodeError):
    """Raised when an offset or declared length points outside the buffer."""

    def __init__(self, offset, length, limit):
        self.offset = offset
        self.length = length
        self.limit = limit
        super().__init__(
            f"{length} bytes at offset {offset} exceed buffer of {limit} bytes"
        )


class InvalidUtf8Error(DecodeError):
    """Raised when an inline string payload is not valid UTF-8."""

    def __init__(self, offset, reason):
        self.offset = offset
        self.reason = reason
        super().__init__(f"Invalid UTF-8 in string at offset {offset}: {reason}")
