"""
Exception hierarchy raised by the PayWay client.
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "APIError",
    "ConfigurationError",
    "EncryptionError",
    "PayWayError",
    "UnexpectedContentTypeError",
    "UnsupportedOperationError",
]


class PayWayError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(PayWayError):
    """Raised when the client configuration cannot serve the requested call."""


class EncryptionError(PayWayError):
    """Raised when the merchant auth blob cannot be encrypted."""


class UnsupportedOperationError(PayWayError):
    """Raised when a payload would return a checkout page instead of data."""


class UnexpectedContentTypeError(PayWayError):
    """Raised when the gateway answers with HTML where JSON was expected."""

    def __init__(
        self,
        message: str,
        *,
        content_type: Optional[str] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.content_type = content_type
        self.body = body


class APIError(PayWayError):
    """
    Raised for non-2xx gateway responses.

    ``body`` holds the decoded JSON document when the gateway declared a JSON
    content type, otherwise the raw response text.
    """

    def __init__(self, status_code: int, status_text: str, body: Any = None) -> None:
        super().__init__(f"PayWay API Error: {status_code} {status_text}".rstrip())
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
