"""Utils module for the SellerCenter client."""

from sellercenter.utils.logger import LogContext, get_logger, setup_logging
from sellercenter.utils.errors import (
    ErrorResponseError,
    ErrorType,
    FeedError,
    InvalidArgumentError,
    MalformedDocumentError,
    MalformedEntryError,
    SellerCenterError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "LogContext",
    "ErrorType",
    "SellerCenterError",
    "InvalidArgumentError",
    "MalformedDocumentError",
    "MalformedEntryError",
    "ErrorResponseError",
    "FeedError",
]
