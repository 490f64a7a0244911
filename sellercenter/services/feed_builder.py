"""
Feed request builder.

Serializes a Products collection (create, update, remove) or an image mapping
(add image) into the XML payload of exactly one feed action. Product order in
the payload follows the collection order; the marketplace reports feed errors
by position.
"""

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Optional, Union

from lxml import etree

from sellercenter.models.schemas import FeedAction, Product, Products
from sellercenter.utils.errors import InvalidArgumentError
from sellercenter.utils.logger import get_logger

logger = get_logger(__name__)

ImageMapping = Mapping[Any, Sequence[str]]


class FeedRequestBuilder:
    """Builds <Request> payloads for product feeds."""

    PRODUCT_ACTIONS = (
        FeedAction.PRODUCT_CREATE,
        FeedAction.PRODUCT_UPDATE,
        FeedAction.PRODUCT_REMOVE,
    )

    def build(self, action: Union[FeedAction, str], payload: Union[Products, ImageMapping]) -> str:
        """
        Serialize ``payload`` for ``action``.

        The action always comes from the caller; it is never guessed from the
        payload.

        Raises:
            InvalidArgumentError: unknown action, payload of the wrong kind
                for the action, or an empty payload.
        """
        try:
            action = FeedAction(action)
        except ValueError:
            raise InvalidArgumentError(f"Unknown feed action: {action!r}")

        if action is FeedAction.IMAGE:
            if isinstance(payload, Products) or not isinstance(payload, Mapping):
                raise InvalidArgumentError("Image feeds take a mapping of seller SKU to image URLs")
            return self.build_image_request(payload)

        if not isinstance(payload, Products):
            raise InvalidArgumentError(f"{action.value} feeds take a Products collection")
        return self.build_product_request(action, payload)

    def build_product_request(self, action: FeedAction, products: Products) -> str:
        """Payload for ProductCreate, ProductUpdate or ProductRemove."""
        action = FeedAction(action)
        if action not in self.PRODUCT_ACTIONS:
            raise InvalidArgumentError(f"{action} is not a product feed action")
        if not len(products):
            raise InvalidArgumentError("Cannot submit a feed without products")

        root = etree.Element("Request")
        for product in products:
            try:
                if action is FeedAction.PRODUCT_REMOVE:
                    node = etree.SubElement(root, "Product")
                    self._append(node, "SellerSku", product.seller_sku)
                else:
                    root.append(self.product_element(product))
            except InvalidArgumentError as e:
                raise InvalidArgumentError(f"Product {product.seller_sku!r}: {e}") from e

        logger.debug("Product feed built", action=action.value, products=len(products))
        return self._serialize(root)

    def build_image_request(self, images: ImageMapping) -> str:
        """
        Payload for the Image feed.

        Keys identify the product each list belongs to and are sent as given.
        An empty list produces an empty <Images/> element for its key.
        """
        if not images:
            raise InvalidArgumentError("Cannot submit an image feed without entries")

        root = etree.Element("Request")
        for seller_sku, urls in images.items():
            if isinstance(urls, str):
                raise InvalidArgumentError(f"Images for {seller_sku!r} must be a list of URLs")
            node = etree.SubElement(root, "ProductImage")
            try:
                self._append(node, "SellerSku", str(seller_sku))
                images_node = etree.SubElement(node, "Images")
                for url in urls:
                    self._append(images_node, "Image", url)
            except InvalidArgumentError as e:
                raise InvalidArgumentError(f"Images for {seller_sku!r}: {e}") from e

        logger.debug("Image feed built", entries=len(images))
        return self._serialize(root)

    def product_element(self, product: Product) -> etree._Element:
        """<Product> element carrying every field that is set."""
        node = etree.Element("Product")
        append = self._append

        append(node, "SellerSku", product.seller_sku)
        append(node, "ParentSku", product.parent_sku)
        append(node, "Status", product.status)
        append(node, "Name", product.name)
        append(node, "Variation", product.variation)
        if product.primary_category is not None:
            append(node, "PrimaryCategory", product.primary_category.wire_value)
        if len(product.categories):
            append(node, "Categories", ",".join(c.wire_value for c in product.categories))
        append(node, "Description", product.description)
        if product.brand is not None:
            append(node, "Brand", product.brand.name)
        append(node, "Price", self._format_amount(product.price))
        append(node, "SalePrice", self._format_amount(product.sale_price))
        append(node, "ProductId", product.product_id)
        append(node, "TaxClass", product.tax_class)
        append(node, "ShopSku", product.shop_sku)
        append(node, "Quantity", product.quantity)
        append(node, "Available", product.available)
        append(node, "MainImage", product.main_image)
        append(node, "Url", product.url)

        if product.images:
            images_node = etree.SubElement(node, "Images")
            for image in product.images:
                append(images_node, "Image", image.url)

        data = product.product_data
        data_node = etree.SubElement(node, "ProductData")
        append(data_node, "ConditionType", data.condition_type)
        append(data_node, "PackageHeight", data.package_height)
        append(data_node, "PackageWidth", data.package_width)
        append(data_node, "PackageLength", data.package_length)
        append(data_node, "PackageWeight", data.package_weight)

        return node

    @staticmethod
    def _append(parent: etree._Element, tag: str, value: Optional[Any]) -> None:
        if value is None:
            return
        text = str(value)
        try:
            etree.SubElement(parent, tag).text = text
        except ValueError as e:
            # lxml refuses NULL bytes and most control characters
            raise InvalidArgumentError(f"{tag} is not XML compatible: {text!r}") from e

    @staticmethod
    def _format_amount(value: Optional[Decimal]) -> Optional[str]:
        # fixed-point, never exponent notation
        return format(value, "f") if value is not None else None

    @staticmethod
    def _serialize(root: etree._Element) -> str:
        return etree.tostring(
            root,
            xml_declaration=True,
            encoding="UTF-8",
            pretty_print=True,
        ).decode("utf-8")
