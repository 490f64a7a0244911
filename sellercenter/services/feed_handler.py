"""
Feed response handler.

A submitted feed is either acknowledged (SuccessResponse with a RequestId that
tracks the feed) or rejected (ErrorResponse). Rejections are always raised as
FeedError; processing results after acknowledgement are not handled here.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Optional, Union

from sellercenter.models.schemas import FeedResponse
from sellercenter.utils.errors import FeedError, MalformedDocumentError
from sellercenter.utils.logger import get_logger
from sellercenter.utils.xml_utils import child_text, parse_document, raise_for_error_response

logger = get_logger(__name__)


class FeedResponseHandler:
    """Turns feed acknowledgement documents into FeedResponse values."""

    TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

    def handle(
        self,
        document: Union[str, bytes],
        seller_skus: Iterable[str] = (),
    ) -> FeedResponse:
        """
        Read a feed acknowledgement.

        Args:
            document: Response body returned for the feed request.
            seller_skus: SKUs (or image keys) that were submitted; echoed
                into the FeedResponse.

        Returns:
            FeedResponse for an acknowledged feed.

        Raises:
            FeedError: the service rejected the feed. Code, type and message
                are taken verbatim from the error document.
            MalformedDocumentError: neither an acknowledgement nor an error.
        """
        root = parse_document(document)
        raise_for_error_response(root, FeedError)

        if root.tag != "SuccessResponse":
            raise MalformedDocumentError(f"Unexpected root element <{root.tag}> in feed response")

        head = root.find("Head")
        request_id = child_text(head, "RequestId")
        if request_id is None:
            raise MalformedDocumentError("Feed acknowledgement has no RequestId")

        return FeedResponse(
            request_id=request_id,
            request_action=child_text(head, "RequestAction"),
            response_type=child_text(head, "ResponseType"),
            timestamp=self._parse_timestamp(child_text(head, "Timestamp")),
            seller_skus=tuple(seller_skus),
        )

    @classmethod
    def _parse_timestamp(cls, text: Optional[str]) -> Optional[datetime]:
        if text is None:
            return None
        try:
            return datetime.strptime(text, cls.TIMESTAMP_FORMAT)
        except ValueError:
            logger.debug("Unparsable feed timestamp", timestamp=text)
            return None
