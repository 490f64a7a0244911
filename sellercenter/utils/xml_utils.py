"""XML helpers shared by the listing parser and the feed response handler."""

from typing import Optional, Type, Union

from lxml import etree

from sellercenter.utils.errors import ErrorResponseError, MalformedDocumentError
from sellercenter.utils.logger import get_logger

logger = get_logger(__name__)

# Responses come from a remote service: no entity expansion, no network access.
_PARSER = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_blank_text=True,
)


def parse_document(document: Union[str, bytes]) -> etree._Element:
    """
    Parse a response body into its root element.

    Pass raw bytes where possible; lxml then honours the encoding declared
    by the document. Text is encoded as UTF-8 first.
    """
    if isinstance(document, str):
        document = document.encode("utf-8")
    if not document or not document.strip():
        raise MalformedDocumentError("Response body is empty")
    try:
        return etree.fromstring(document, parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(f"Response is not valid XML: {e}") from e


def child_text(element: Optional[etree._Element], path: str) -> Optional[str]:
    """Stripped text of the first matching child, None when absent or empty."""
    if element is None:
        return None
    child = element.find(path)
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text or None


def raise_for_error_response(
    root: etree._Element,
    error_cls: Type[ErrorResponseError] = ErrorResponseError,
) -> None:
    """Raise ``error_cls`` when ``root`` is an ErrorResponse document."""
    if root.tag != "ErrorResponse":
        return

    head = root.find("Head")
    code_text = child_text(head, "ErrorCode")
    try:
        code = int(code_text) if code_text is not None else 0
    except ValueError:
        logger.debug("Non-numeric error code", error_code=code_text)
        code = 0

    # ErrorMessage is passed on exactly as sent
    message_element = head.find("ErrorMessage") if head is not None else None
    message = (message_element.text or "") if message_element is not None else ""

    details = [
        {
            "field": child_text(detail, "Field"),
            "message": child_text(detail, "Message"),
            "value": child_text(detail, "Value"),
            "seller_sku": child_text(detail, "SellerSku"),
        }
        for detail in root.iterfind("Body/ErrorDetail")
    ]

    raise error_cls(
        code=code,
        error_type=child_text(head, "ErrorType") or "",
        message=message,
        action=child_text(head, "RequestAction"),
        details=details,
        raw_code=code_text,
    )
