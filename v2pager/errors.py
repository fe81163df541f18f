# v2pager/errors.py

from typing import Optional


class V2PagerError(Exception):
    """Base class for all v2pager errors."""
    pass

class NetworkError(V2PagerError):
    """Error related to network operations."""
    pass

class AuthenticationError(NetworkError):
    """Error related to authentication."""
    pass

class ParseError(V2PagerError):
    """Error related to parsing listing responses."""
    pass

class ConfigError(V2PagerError):
    """Error related to configuration."""
    pass

class MalformedInput(V2PagerError, ValueError):
    """Raised when a cloaked email payload is not valid hex."""
    pass

class FetchError(V2PagerError):
    """
    Failure of a single page fetch.

    Returned (not raised) by PageSequencer.load so the caller can decide
    whether to retry. The original exception is kept on ``cause``.
    """

    def __init__(self, key: int, cause: Optional[BaseException] = None):
        self.key = key
        self.cause = cause
        message = f"Failed to load page {key}"
        if cause is not None:
            message += f": {type(cause).__name__} - {cause}"
        super().__init__(message)
        self.__cause__ = cause
