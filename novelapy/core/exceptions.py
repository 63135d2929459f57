"""
Custom exceptions for NovelAI client operations.

This module defines exception classes raised by the downloader,
key derivation and login workflow.
"""
from contextlib import contextmanager
from typing import Dict, Iterator, Optional


class NovelAIException(Exception):
    """Base exception for all NovelAI-related errors."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status_code: HTTP status code (if available)
        """
        self.status_code = status_code
        super().__init__(message)


class UnsupportedTypeError(NovelAIException):
    """Exception raised when a content type is not permitted."""

    def __init__(self, message: str, content_type: Optional[str] = None) -> None:
        self.content_type = content_type
        super().__init__(message)


class TooLargeError(NovelAIException):
    """Exception raised when a declared content size exceeds the ceiling."""

    def __init__(self, message: str, size: Optional[int] = None, limit: Optional[int] = None) -> None:
        self.size = size
        self.limit = limit
        super().__init__(message)


class InvalidDataURIError(NovelAIException, ValueError):
    """Exception raised when a data URI cannot be parsed or decoded."""
    pass


class TransportError(NovelAIException):
    """Exception raised by the HTTP transport (status is None on network failures)."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        self.url = url
        super().__init__(message, status_code)


class CryptoInitError(NovelAIException):
    """Exception raised when the crypto primitives fail to initialize."""
    pass


class KeyDerivationError(NovelAIException):
    """Exception raised when password hashing fails."""
    pass


class AuthError(NovelAIException):
    """
    Authentication failure.

    The message is a localized message key (e.g. ``.invalid-token``)
    and ``status_code`` carries the upstream HTTP status.
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message, status_code)

    @property
    def code(self) -> int:
        return self.status_code

    @staticmethod
    @contextmanager
    def catch(mapping: Dict[int, str]) -> Iterator[None]:
        """
        Translate transport errors into AuthError.

        A TransportError whose status is in ``mapping`` is re-raised as
        ``AuthError(mapping[status], status)``. Anything else propagates
        unchanged.

        Example:
            >>> with AuthError.catch({401: '.invalid-token'}):
            ...     await transport.get_json(url)
        """
        try:
            yield
        except TransportError as e:
            if e.status_code is not None and e.status_code in mapping:
                raise AuthError(mapping[e.status_code], e.status_code) from e
            raise
