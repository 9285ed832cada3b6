"""
Error types raised by the n-gram matching core.
"""


class InvalidParameterError(ValueError):
    """Raised when an n-gram length, threshold or other setting is out of range."""
