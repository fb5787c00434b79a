"""
Custom exceptions for the Memex export tool.
"""


class MemexExportError(Exception):
    """Base exception for Memex export operations."""
    pass


class ConfigurationError(MemexExportError):
    """Raised when configuration is invalid or missing."""
    pass


class MemexAPIError(MemexExportError):
    """Raised when a Memex API call fails or returns an error body."""

    def __init__(self, message, status_code=None, error_code=None, url=None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.url = url


class NoProgressError(MemexExportError):
    """Raised when pagination would not advance and so would loop forever."""

    def __init__(self, collection, cursor, previous_item=None, last_item=None):
        super().__init__(
            f"The {collection} page before {cursor} did not advance the cursor. "
            "This is likely a pagination bug in the Memex API; "
            "cannot continue, because we would loop forever."
        )
        self.collection = collection
        self.cursor = cursor
        self.previous_item = previous_item
        self.last_item = last_item


class CacheError(MemexExportError):
    """Raised when cache operations fail."""
    pass
