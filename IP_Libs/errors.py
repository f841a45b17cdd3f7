"""
Error types for the image processor.

Every user-facing failure (bad parameters, unknown names, out-of-range
access, size mismatches, unreadable files) is reported as an
InvalidOperationError carrying a human-readable message.
"""


class InvalidOperationError(ValueError):
    """Raised when an image operation cannot be carried out."""
