"""
Product manager: the programmatic surface of the catalog client.

Listing calls build parameters with QueryBuilder, send GetProducts and parse
the result into Products. Mutations serialize a feed with FeedRequestBuilder,
post it, and read the acknowledgement with FeedResponseHandler. A rejected
feed is logged and re-raised, never swallowed.

Example:
    >>> with create_product_manager() as products:
    ...     live = products.filter_products(ProductStatusFilter.LIVE)
    ...     feed = products.product_update(live)
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Optional, Union

from sellercenter.config.settings import Settings
from sellercenter.models.schemas import (
    FeedAction,
    FeedResponse,
    ProductQuery,
    Products,
    ProductStatusFilter,
)
from sellercenter.services.client import SellerCenterClient
from sellercenter.services.feed_builder import FeedRequestBuilder, ImageMapping
from sellercenter.services.feed_handler import FeedResponseHandler
from sellercenter.services.query_builder import QueryBuilder
from sellercenter.services.response_parser import ProductsParser
from sellercenter.utils.errors import FeedError, InvalidArgumentError
from sellercenter.utils.logger import LogContext, get_logger

logger = get_logger(__name__)


class ProductManager:
    """Queries and mutates the seller's product catalog."""

    GET_PRODUCTS = "GetProducts"

    def __init__(
        self,
        client: SellerCenterClient,
        query_builder: Optional[QueryBuilder] = None,
        parser: Optional[ProductsParser] = None,
        feed_builder: Optional[FeedRequestBuilder] = None,
        feed_handler: Optional[FeedResponseHandler] = None,
    ):
        self.client = client
        self.query_builder = query_builder or QueryBuilder()
        self.parser = parser or ProductsParser()
        self.feed_builder = feed_builder or FeedRequestBuilder()
        self.feed_handler = feed_handler or FeedResponseHandler()

    def __enter__(self) -> "ProductManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.client.close()

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    def get_products_from_parameters(
        self,
        query: Optional[ProductQuery] = None,
        **criteria: Any,
    ) -> Products:
        """
        List products matching any combination of criteria.

        Args:
            query: Prepared criteria. Mutually exclusive with ``criteria``.
            **criteria: ProductQuery fields given by name (created_before,
                created_after, updated_before, updated_after, search, filter,
                limit, offset, seller_skus).

        Returns:
            Products in the order the marketplace listed them. When
            ``seller_skus`` is set only those SKUs are returned.

        Raises:
            InvalidArgumentError: invalid criteria or an empty SKU list; no
                request is sent.
            ErrorResponseError: the marketplace rejected the call.
        """
        if query is not None and criteria:
            raise InvalidArgumentError("Pass either a ProductQuery or keyword criteria, not both")
        if query is None:
            query = self.query_builder.make_query(**criteria)

        parameters = self.query_builder.build(query)
        document = self.client.get(self.GET_PRODUCTS, parameters)
        products = self.parser.parse(document)

        if query.seller_skus:
            requested = set(query.seller_skus)
            products = products.filter(lambda product: product.seller_sku in requested)

        logger.info(
            "Products listed",
            criteria=sorted(parameters),
            count=len(products),
        )
        return products

    def get_all_products(self) -> Products:
        return self.get_products_from_parameters()

    def get_products_created_before(self, created_before: datetime) -> Products:
        return self.get_products_from_parameters(created_before=created_before)

    def get_products_created_after(self, created_after: datetime) -> Products:
        return self.get_products_from_parameters(created_after=created_after)

    def get_products_updated_before(self, updated_before: datetime) -> Products:
        return self.get_products_from_parameters(updated_before=updated_before)

    def get_products_updated_after(self, updated_after: datetime) -> Products:
        return self.get_products_from_parameters(updated_after=updated_after)

    def search_products(self, search: str) -> Products:
        """Free text search over the catalog."""
        return self.get_products_from_parameters(search=search)

    def filter_products(self, status: Union[ProductStatusFilter, str]) -> Products:
        """
        List products by status.

        Any string is accepted and sent as is; the marketplace decides
        whether it is a valid filter.
        """
        return self.get_products_from_parameters(filter=status)

    def get_products_by_seller_sku(self, seller_skus: Sequence[str]) -> Products:
        """
        Look products up by seller SKU.

        Raises:
            InvalidArgumentError: ``seller_skus`` is empty.
        """
        if isinstance(seller_skus, str):
            raise InvalidArgumentError("Seller SKUs must be given as a list")
        if not seller_skus:
            raise InvalidArgumentError("Seller SKU list must not be empty")
        return self.get_products_from_parameters(seller_skus=list(seller_skus))

    # -------------------------------------------------------------------------
    # Feeds
    # -------------------------------------------------------------------------

    def submit_feed(
        self,
        action: Union[FeedAction, str],
        payload: Union[Products, ImageMapping],
    ) -> FeedResponse:
        """
        Serialize, send and acknowledge one feed.

        Raises:
            InvalidArgumentError: the payload does not fit the action or is
                empty; nothing is sent.
            FeedError: the marketplace rejected the feed.
        """
        body = self.feed_builder.build(action, payload)
        action = FeedAction(action)
        if isinstance(payload, Products):
            seller_skus = payload.seller_skus()
        else:
            seller_skus = [str(key) for key in payload]

        with LogContext(feed_action=action.value):
            document = self.client.post(action.value, body)
            try:
                response = self.feed_handler.handle(document, seller_skus)
            except FeedError as e:
                logger.error(
                    "Feed rejected",
                    error_code=e.code,
                    error_type=e.error_type,
                    error_message=e.message,
                    details=len(e.details),
                )
                raise

            logger.info(
                "Feed accepted",
                feed_id=response.request_id,
                skus=len(seller_skus),
            )
        return response

    def product_create(self, products: Products) -> FeedResponse:
        return self.submit_feed(FeedAction.PRODUCT_CREATE, products)

    def product_update(self, products: Products) -> FeedResponse:
        return self.submit_feed(FeedAction.PRODUCT_UPDATE, products)

    def product_remove(self, products: Products) -> FeedResponse:
        return self.submit_feed(FeedAction.PRODUCT_REMOVE, products)

    def add_image(self, images: ImageMapping) -> FeedResponse:
        """Attach image URLs to products, keyed by seller SKU."""
        return self.submit_feed(FeedAction.IMAGE, images)


def create_product_manager(settings: Optional[Settings] = None) -> ProductManager:
    """Create a ProductManager with its own HTTP client."""
    return ProductManager(SellerCenterClient(settings=settings))
