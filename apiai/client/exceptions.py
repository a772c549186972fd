"""
Exceptions raised by the query service client.

Every failure of AIDataService.request and AIDataService.voice_request is an
AIServiceException, so callers can catch a single type. The subclasses tell
apart bad input, transport problems, and unreadable service answers.
"""

from typing import Optional


class AIServiceException(Exception):
    """Base failure carrying a readable message and the underlying cause."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidArgument(AIServiceException, ValueError):
    """Raised when a required input is missing."""


class ServiceError(AIServiceException):
    """Raised when the service cannot be reached or returns an empty body."""


class DecodeError(AIServiceException):
    """Raised when the service answer is not JSON of the expected shape."""
