"""
Services package for the SellerCenter client.

Services:
    - QueryBuilder: listing criteria to GetProducts parameters
    - ProductsParser: listing documents to Products
    - FeedRequestBuilder: Products or image mappings to feed payloads
    - FeedResponseHandler: feed acknowledgements to FeedResponse
    - SellerCenterClient: signed HTTP transport
    - ProductManager: listing and feed operations
"""

from sellercenter.services.client import SellerCenterClient, sign_parameters
from sellercenter.services.feed_builder import FeedRequestBuilder
from sellercenter.services.feed_handler import FeedResponseHandler
from sellercenter.services.product_manager import ProductManager, create_product_manager
from sellercenter.services.query_builder import QueryBuilder
from sellercenter.services.response_parser import ProductsParser, parse_products

__all__ = [
    "QueryBuilder",
    "ProductsParser",
    "parse_products",
    "FeedRequestBuilder",
    "FeedResponseHandler",
    "SellerCenterClient",
    "sign_parameters",
    "ProductManager",
    "create_product_manager",
]
