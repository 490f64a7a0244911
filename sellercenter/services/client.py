"""
HTTP transport for the SellerCenter API.

Every call carries the common parameters (Action, Format, Timestamp, UserID,
Version) plus an HMAC-SHA256 Signature over them. The service reports errors as
XML with a 4xx status, so those bodies are returned to the caller for parsing.
Bodies are returned as bytes and decoded by the XML parser, which follows
the encoding in the XML declaration. 5xx statuses and network failures
propagate as httpx exceptions.
One HTTP exchange per call: there is no retry here.
"""

import hashlib
import hmac
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Optional, Union
from urllib.parse import quote, urlencode

import httpx

from sellercenter.config.settings import Settings, get_settings
from sellercenter.utils.logger import get_logger

logger = get_logger(__name__)


def sign_parameters(parameters: Mapping[str, str], api_key: str) -> str:
    """
    Compute the request signature.

    Parameters are sorted by name and RFC 3986 encoded before hashing, so the
    signature does not depend on the order they were added in.
    """
    query = urlencode(sorted(parameters.items()), quote_via=quote)
    return hmac.new(api_key.encode("utf-8"), query.encode("utf-8"), hashlib.sha256).hexdigest()


class SellerCenterClient:
    """
    Synchronous SellerCenter API client.

    Example:
        >>> with SellerCenterClient() as client:
        ...     body = client.get("GetProducts", {"Filter": "live"})
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Client settings; loaded from the environment if omitted.
            http_client: Preconfigured httpx client. The caller keeps
                ownership of a client passed in here.
        """
        self.settings = settings or get_settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=httpx.Timeout(self.settings.request_timeout_seconds),
            headers={"Accept": "application/xml"},
        )

    def __enter__(self) -> "SellerCenterClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this object created it."""
        if self._owns_client:
            self._client.close()

    def build_parameters(
        self,
        action: str,
        parameters: Optional[Mapping[str, str]] = None,
        now: Optional[datetime] = None,
    ) -> dict[str, str]:
        """Common parameters, call parameters and the signature."""
        timestamp = (now or datetime.now(timezone.utc)).isoformat(timespec="seconds")
        signed = {
            "Action": action,
            "Format": "XML",
            "Timestamp": timestamp,
            "UserID": self.settings.username,
            "Version": self.settings.version,
            **(parameters or {}),
        }
        signed["Signature"] = sign_parameters(signed, self.settings.api_key.get_secret_value())
        return signed

    def get(self, action: str, parameters: Optional[Mapping[str, str]] = None) -> bytes:
        """Send a read call and return the raw response body."""
        return self._send("GET", action, parameters)

    def post(
        self,
        action: str,
        body: Union[str, bytes],
        parameters: Optional[Mapping[str, str]] = None,
    ) -> bytes:
        """Send a feed call with an XML body and return the raw response body."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        return self._send("POST", action, parameters, body)

    def _send(
        self,
        method: str,
        action: str,
        parameters: Optional[Mapping[str, str]],
        content: Optional[bytes] = None,
    ) -> bytes:
        headers = {"Content-Type": "application/xml; charset=utf-8"} if content is not None else None
        response = self._client.request(
            method,
            self.settings.endpoint,
            params=self.build_parameters(action, parameters),
            content=content,
            headers=headers,
        )

        if response.status_code >= 500:
            logger.error(
                "SellerCenter request failed",
                action=action,
                status_code=response.status_code,
            )
            response.raise_for_status()

        logger.debug(
            "SellerCenter request completed",
            action=action,
            method=method,
            status_code=response.status_code,
        )
        return response.content
