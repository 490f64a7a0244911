"""
Query builder for the GetProducts call.

Turns a ProductQuery into the flat mapping of wire parameters. Status filters
are not checked against ProductStatusFilter: the marketplace decides whether a
filter is valid.
"""

import json
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from sellercenter.models.schemas import ProductQuery
from sellercenter.utils.errors import InvalidArgumentError
from sellercenter.utils.logger import get_logger

logger = get_logger(__name__)


class QueryBuilder:
    """Builds GetProducts parameters from listing criteria."""

    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

    # ProductQuery field -> wire parameter
    DATE_PARAMETERS = {
        "created_before": "CreatedBefore",
        "created_after": "CreatedAfter",
        "updated_before": "UpdatedBefore",
        "updated_after": "UpdatedAfter",
    }

    @staticmethod
    def make_query(**criteria: Any) -> ProductQuery:
        """
        Validate keyword criteria into a ProductQuery.

        Raises:
            InvalidArgumentError: unknown criterion or a value of the wrong
                shape (negative pagination, non-datetime dates, ...).
        """
        unknown = set(criteria) - set(ProductQuery.model_fields)
        if unknown:
            raise InvalidArgumentError(f"Unknown product query criteria: {', '.join(sorted(unknown))}")
        try:
            return ProductQuery(**criteria)
        except PydanticValidationError as e:
            logger.warning("Product query validation failed", error=str(e))
            raise InvalidArgumentError(f"Invalid product query: {e}") from e

    @classmethod
    def format_timestamp(cls, value: datetime) -> str:
        return value.strftime(cls.TIMESTAMP_FORMAT)

    @staticmethod
    def encode_seller_skus(seller_skus: list[str]) -> str:
        """SkuSellerList is a JSON encoded array."""
        return json.dumps(list(seller_skus), separators=(",", ":"), ensure_ascii=False)

    def build(self, query: ProductQuery) -> dict[str, str]:
        """
        Build the wire parameters for ``query``.

        Args:
            query: Listing criteria; unset fields are left out.

        Returns:
            Mapping of parameter name to string value.

        Raises:
            InvalidArgumentError: ``seller_skus`` was given but is empty. An
                empty list would otherwise match every product.
        """
        parameters: dict[str, str] = {}

        for field_name, wire_name in self.DATE_PARAMETERS.items():
            value = getattr(query, field_name)
            if value is not None:
                parameters[wire_name] = self.format_timestamp(value)

        if query.search is not None:
            parameters["Search"] = query.search
        if query.filter is not None:
            parameters["Filter"] = query.filter
        if query.limit is not None:
            parameters["Limit"] = str(query.limit)
        if query.offset is not None:
            parameters["Offset"] = str(query.offset)

        if query.seller_skus is not None:
            if not query.seller_skus:
                raise InvalidArgumentError("Seller SKU list must not be empty")
            parameters["SkuSellerList"] = self.encode_seller_skus(query.seller_skus)

        return parameters
