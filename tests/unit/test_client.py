import hashlib
import hmac
import httpx
import pytest
from datetime import datetime, timezone
from urllib.parse import quote, urlencode

from sellercenter.services.client import SellerCenterClient, sign_parameters
from sellercenter.services.response_parser import ProductsParser

API_KEY = "b1bdb357ced10fe4e9a69840cdd4f0e9c03d77fe"


def make_client(settings, handler):
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return SellerCenterClient(settings=settings, http_client=http_client)


class TestSignParameters:
    """Tests for request signing."""

    def test_signature_is_order_independent(self):
        first = sign_parameters({"Action": "GetProducts", "Format": "XML", "UserID": "a@b.c"}, API_KEY)
        second = sign_parameters({"UserID": "a@b.c", "Format": "XML", "Action": "GetProducts"}, API_KEY)
        assert first == second

    def test_signature_is_hmac_sha256(self):
        parameters = {"Version": "1.0", "Action": "GetProducts", "Search": "a b/c"}
        expected = hmac.new(
            API_KEY.encode("utf-8"),
            "Action=GetProducts&Search=a%20b%2Fc&Version=1.0".encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

        assert sign_parameters(parameters, API_KEY) == expected

    def test_signature_depends_on_key(self):
        parameters = {"Action": "GetProducts"}
        assert sign_parameters(parameters, API_KEY) != sign_parameters(parameters, "other-key")


class TestBuildParameters:
    """Tests for the common request parameters."""

    def test_common_parameters(self, settings):
        client = SellerCenterClient(settings=settings, http_client=httpx.Client())
        now = datetime(2019, 1, 23, 7, 5, 9, tzinfo=timezone.utc)

        parameters = client.build_parameters("GetProducts", {"Filter": "live"}, now=now)

        assert parameters["Action"] == "GetProducts"
        assert parameters["Format"] == "XML"
        assert parameters["Timestamp"] == "2019-01-23T07:05:09+00:00"
        assert parameters["UserID"] == "seller@example.com"
        assert parameters["Version"] == "1.0"
        assert parameters["Filter"] == "live"

        unsigned = {k: v for k, v in parameters.items() if k != "Signature"}
        assert parameters["Signature"] == sign_parameters(unsigned, API_KEY)

    def test_timestamp_defaults_to_now(self, settings):
        client = SellerCenterClient(settings=settings, http_client=httpx.Client())
        timestamp = datetime.fromisoformat(client.build_parameters("GetProducts")["Timestamp"])
        assert abs((datetime.now(timezone.utc) - timestamp).total_seconds()) < 60


class TestTransport:
    """Tests for the HTTP exchange."""

    def test_get_returns_body(self, settings):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="<SuccessResponse/>")

        with make_client(settings, handler) as client:
            body = client.get("GetProducts", {"Search": "pil"})

        assert body == b"<SuccessResponse/>"
        request = seen[0]
        assert request.method == "GET"
        assert request.url.host == "sellercenter-api.example.com"
        assert request.url.scheme == "https"
        assert request.url.params["Action"] == "GetProducts"
        assert request.url.params["Search"] == "pil"

    def test_signature_verifies_on_the_wire(self, settings):
        seen = []

        def handler(request):
            seen.append(dict(request.url.params))
            return httpx.Response(200, text="<SuccessResponse/>")

        with make_client(settings, handler) as client:
            client.get("GetProducts", {"SkuSellerList": '["a","b"]'})

        params = seen[0]
        signature = params.pop("Signature")
        query = urlencode(sorted(params.items()), quote_via=quote)
        expected = hmac.new(API_KEY.encode("utf-8"), query.encode("utf-8"), hashlib.sha256).hexdigest()
        assert signature == expected

    def test_client_error_body_is_returned(self, settings):
        def handler(request):
            return httpx.Response(400, text="<ErrorResponse/>")

        with make_client(settings, handler) as client:
            assert client.get("GetProducts") == b"<ErrorResponse/>"

    def test_body_keeps_declared_encoding(self, settings):
        document = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            "<SuccessResponse><Body><Products><Product>"
            "<SellerSku>cafe-1</SellerSku><Name>Caf\u00e9</Name>"
            "</Product></Products></Body></SuccessResponse>"
        ).encode("iso-8859-1")

        def handler(request):
            return httpx.Response(200, content=document)

        with make_client(settings, handler) as client:
            products = ProductsParser().parse(client.get("GetProducts"))

        assert products.get("cafe-1").name == "Caf\u00e9"

    def test_server_error_raises(self, settings):
        def handler(request):
            return httpx.Response(503, text="unavailable")

        with make_client(settings, handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                client.get("GetProducts")

    def test_network_error_propagates(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(settings, handler) as client:
            with pytest.raises(httpx.ConnectError):
                client.get("GetProducts")

    def test_post_sends_xml_body(self, settings):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="<SuccessResponse/>")

        with make_client(settings, handler) as client:
            client.post("ProductCreate", "<Request><Product/></Request>")

        request = seen[0]
        assert request.method == "POST"
        assert request.url.params["Action"] == "ProductCreate"
        assert request.headers["Content-Type"].startswith("application/xml")
        assert request.content == b"<Request><Product/></Request>"

    def test_passed_in_client_is_not_closed(self, settings):
        http_client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

        with SellerCenterClient(settings=settings, http_client=http_client):
            pass

        assert not http_client.is_closed
        http_client.close()

    def test_own_client_is_closed(self, settings):
        client = SellerCenterClient(settings=settings)
        client.close()
        assert client._client.is_closed
