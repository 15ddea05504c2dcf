"""
Exceptions raised by the markup renderer.
"""


class ConfigurationError(ValueError):
    """Raised when a render configuration cannot be honoured."""


class VerseParseError(ValueError):
    """Raised when a verse tag's number attribute cannot be read."""
