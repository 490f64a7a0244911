"""
Listing parser: GetProducts documents to a Products collection.

Parsing is best-effort per record. A product node missing its SKU or name, or
carrying a negative or non-numeric amount, is reported as a
MalformedEntryError and skipped; the remaining nodes are still parsed.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from lxml import etree
from pydantic import ValidationError as PydanticValidationError

from sellercenter.models.schemas import (
    Brand,
    Image,
    Product,
    ProductData,
    Products,
    category_from_wire,
)
from sellercenter.utils.errors import MalformedDocumentError, MalformedEntryError
from sellercenter.utils.logger import get_logger
from sellercenter.utils.xml_utils import child_text, parse_document, raise_for_error_response

logger = get_logger(__name__)


class ProductsParser:
    """Parses product listings (and product feed payloads) into Products."""

    # root tag -> path of the product nodes below it
    PRODUCT_PATHS = {
        "SuccessResponse": "Body/Products/Product",
        "Request": "Product",
    }

    def parse(self, document: Union[str, bytes]) -> Products:
        """
        Parse a listing document, skipping malformed entries.

        Raises:
            ErrorResponseError: the document is an ErrorResponse.
            MalformedDocumentError: the document is not a product listing.
        """
        products, _ = self.parse_with_errors(document)
        return products

    def parse_with_errors(
        self,
        document: Union[str, bytes],
    ) -> tuple[Products, list[MalformedEntryError]]:
        """Parse a listing document and also return the skipped entries."""
        root = parse_document(document)
        raise_for_error_response(root)

        path = self.PRODUCT_PATHS.get(root.tag)
        if path is None:
            raise MalformedDocumentError(f"Unexpected root element <{root.tag}> in product listing")

        products = Products()
        errors: list[MalformedEntryError] = []

        for position, node in enumerate(root.iterfind(path)):
            try:
                products.add(self.parse_product(node, position))
            except MalformedEntryError as e:
                logger.warning(
                    "Skipping malformed product entry",
                    position=e.position,
                    seller_sku=e.seller_sku,
                    reason=e.reason,
                )
                errors.append(e)

        logger.debug("Product listing parsed", products=len(products), skipped=len(errors))
        return products, errors

    def parse_product(self, node: etree._Element, position: int = 0) -> Product:
        """Build a Product from a single <Product> node."""
        seller_sku = child_text(node, "SellerSku")
        if seller_sku is None:
            raise MalformedEntryError(position, "missing SellerSku")

        name = child_text(node, "Name")
        if name is None:
            raise MalformedEntryError(position, "missing Name", seller_sku)

        def amount(tag: str) -> Optional[Decimal]:
            return self._parse_amount(child_text(node, tag), tag, position, seller_sku)

        def counter(parent: Optional[etree._Element], tag: str) -> Optional[int]:
            return self._parse_counter(child_text(parent, tag), tag, position, seller_sku)

        primary_category = child_text(node, "PrimaryCategory")
        categories_text = child_text(node, "Categories") or ""
        brand = child_text(node, "Brand")

        data_node = node.find("ProductData")
        product_data = ProductData(
            condition_type=child_text(data_node, "ConditionType"),
            package_height=counter(data_node, "PackageHeight") or 0,
            package_width=counter(data_node, "PackageWidth") or 0,
            package_length=counter(data_node, "PackageLength") or 0,
            package_weight=counter(data_node, "PackageWeight") or 0,
        )

        try:
            return Product(
                seller_sku=seller_sku,
                product_id=child_text(node, "ProductId"),
                name=name,
                variation=child_text(node, "Variation"),
                description=child_text(node, "Description"),
                tax_class=child_text(node, "TaxClass"),
                price=amount("Price"),
                brand=Brand(name=brand) if brand else None,
                primary_category=category_from_wire(primary_category) if primary_category else None,
                categories=[
                    category_from_wire(value)
                    for value in categories_text.split(",")
                    if value.strip()
                ],
                images=[
                    Image(url=image.text.strip())
                    for image in node.iterfind("Images/Image")
                    if image.text and image.text.strip()
                ],
                product_data=product_data,
                shop_sku=child_text(node, "ShopSku"),
                parent_sku=child_text(node, "ParentSku"),
                status=child_text(node, "Status"),
                quantity=counter(node, "Quantity"),
                available=counter(node, "Available"),
                sale_price=amount("SalePrice"),
                main_image=child_text(node, "MainImage"),
                url=child_text(node, "Url"),
            )
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise MalformedEntryError(position, f"{location}: {first['msg']}", seller_sku) from e
        except ValueError as e:
            raise MalformedEntryError(position, str(e), seller_sku) from e

    @staticmethod
    def _parse_amount(
        text: Optional[str],
        tag: str,
        position: int,
        seller_sku: str,
    ) -> Optional[Decimal]:
        if text is None:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise MalformedEntryError(position, f"{tag} is not a number: {text!r}", seller_sku)
        if not value.is_finite() or value < 0:
            raise MalformedEntryError(position, f"{tag} must be a non-negative number: {text!r}", seller_sku)
        return value

    @classmethod
    def _parse_counter(
        cls,
        text: Optional[str],
        tag: str,
        position: int,
        seller_sku: str,
    ) -> Optional[int]:
        value = cls._parse_amount(text, tag, position, seller_sku)
        if value is None:
            return None
        if value != value.to_integral_value():
            raise MalformedEntryError(position, f"{tag} must be a whole number: {text!r}", seller_sku)
        return int(value)


def parse_products(document: Union[str, bytes]) -> Products:
    """Parse a listing document with a default parser."""
    return ProductsParser().parse(document)
