"""
Exception hierarchy for the SellerCenter client.

Validation errors fail fast before serialization, malformed records are
reported one by one, and error documents returned by the service are raised
with their provider code, type and message untouched.
"""

from enum import Enum
from typing import Any, Optional


class ErrorType(str, Enum):
    """Who the service blames for a rejected call."""
    SENDER = "Sender"
    PLATFORM = "Platform"


# =============================================================================
# Custom Exceptions
# =============================================================================

class SellerCenterError(Exception):
    """Base exception for every error raised by this package."""
    pass


class InvalidArgumentError(SellerCenterError, ValueError):
    """The caller asked for something meaningless before any request was built."""
    pass


class MalformedDocumentError(SellerCenterError):
    """A response body is not XML or does not have a known root element."""
    pass


class MalformedEntryError(SellerCenterError):
    """A single product record in a listing could not be parsed."""

    def __init__(self, position: int, reason: str, seller_sku: Optional[str] = None):
        self.position = position
        self.reason = reason
        self.seller_sku = seller_sku
        label = f"'{seller_sku}'" if seller_sku else f"#{position}"
        super().__init__(f"Malformed product entry {label}: {reason}")


class ErrorResponseError(SellerCenterError):
    """
    The service answered with an ErrorResponse document.

    The message is kept exactly as sent since callers match on it. ``code``
    is 0 when ErrorCode is missing or not numeric; ``raw_code`` keeps the text.
    """

    def __init__(
        self,
        code: int,
        error_type: str,
        message: str,
        action: Optional[str] = None,
        details: Optional[list[dict[str, Any]]] = None,
        raw_code: Optional[str] = None,
    ):
        self.code = code
        self.raw_code = raw_code
        self.error_type = error_type
        self.message = message
        self.action = action
        self.details = details or []
        super().__init__(message)

    @property
    def is_sender_error(self) -> bool:
        """Whether the rejection was caused by the submitted data."""
        return self.error_type == ErrorType.SENDER.value


class FeedError(ErrorResponseError):
    """A product feed (create, update, remove or image) was rejected."""
    pass


__all__ = [
    "ErrorType",
    "SellerCenterError",
    "InvalidArgumentError",
    "MalformedDocumentError",
    "MalformedEntryError",
    "ErrorResponseError",
    "FeedError",
]
