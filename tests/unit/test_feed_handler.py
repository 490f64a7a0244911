import pytest
from datetime import datetime, timedelta, timezone

from sellercenter.models.schemas import FeedResponse
from sellercenter.services.feed_handler import FeedResponseHandler
from sellercenter.utils.errors import (
    ErrorResponseError,
    ErrorType,
    FeedError,
    MalformedDocumentError,
    SellerCenterError,
)


@pytest.fixture
def handler():
    return FeedResponseHandler()


def test_acknowledgement(handler, read_fixture):
    document = read_fixture("ProductActionFeedResponse.xml", action="ProductCreate")

    response = handler.handle(document, ["sku-1", "sku-2"])

    assert isinstance(response, FeedResponse)
    assert response.request_id == "cb106552-87f3-450b-aa8b-412246a24b34"
    assert response.request_action == "ProductCreate"
    assert response.response_type is None
    assert response.seller_skus == ("sku-1", "sku-2")
    assert response.timestamp == datetime(2016, 6, 22, 4, 40, 14, tzinfo=timezone(timedelta(hours=2)))


def test_unparsable_timestamp_is_dropped(handler):
    document = (
        "<SuccessResponse><Head><RequestId>feed-1</RequestId>"
        "<Timestamp>yesterday</Timestamp></Head><Body/></SuccessResponse>"
    )
    assert handler.handle(document).timestamp is None


@pytest.mark.parametrize("action", ["ProductCreate", "ProductUpdate", "ProductRemove", "Image"])
def test_error_document_raises_feed_error(handler, read_fixture, action):
    document = read_fixture(
        "ProductActionFeedResponseError.xml",
        action=action,
        error_type="Sender",
        code=125,
        message="E0125: Test Error",
    )

    with pytest.raises(FeedError) as exc:
        handler.handle(document, ["2145819109aaeu7"])

    error = exc.value
    assert str(error) == "E0125: Test Error"
    assert error.message == "E0125: Test Error"
    assert error.code == 125
    assert error.raw_code == "125"
    assert error.error_type == ErrorType.SENDER.value
    assert error.is_sender_error
    assert error.action == action
    assert error.details == [
        {
            "field": "Price",
            "message": "Field must contain a valid number",
            "value": "abc",
            "seller_sku": "2145819109aaeu7",
        }
    ]
    assert isinstance(error, ErrorResponseError)
    assert isinstance(error, SellerCenterError)


def test_platform_error(handler, read_fixture):
    document = read_fixture(
        "ProductActionFeedResponseError.xml",
        action="ProductUpdate",
        error_type="Platform",
        code=1000,
        message="E1000: Internal Application Error",
    )

    with pytest.raises(FeedError) as exc:
        handler.handle(document)

    assert exc.value.code == 1000
    assert not exc.value.is_sender_error


def test_error_message_is_verbatim(handler):
    document = (
        "<ErrorResponse><Head><ErrorType>Sender</ErrorType><ErrorCode>x</ErrorCode>"
        "<ErrorMessage>  E0125: Test Error  </ErrorMessage></Head></ErrorResponse>"
    )

    with pytest.raises(FeedError) as exc:
        handler.handle(document)

    assert exc.value.message == "  E0125: Test Error  "
    assert exc.value.code == 0
    assert exc.value.raw_code == "x"
    assert exc.value.details == []


def test_missing_request_id(handler):
    with pytest.raises(MalformedDocumentError, match="RequestId"):
        handler.handle("<SuccessResponse><Head><RequestId/></Head><Body/></SuccessResponse>")


def test_unexpected_root(handler):
    with pytest.raises(MalformedDocumentError):
        handler.handle("<Request><Product/></Request>")
