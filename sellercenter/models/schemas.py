"""
Pydantic models and collections for the SellerCenter catalog client.

Value objects (Brand, Category, Image, ProductData) are frozen and can be
shared freely. A Product keeps its identity fields fixed after construction
while its categories and images stay editable. Products is the SKU-keyed
aggregate handed to the feed builder and returned by the listing parser.

Models:
    - Brand, CategoryByName, CategoryById, Image, ProductData: value objects
    - Categories: ordered set of categories keyed by identity
    - Product: a single catalog item
    - Products: ordered, SKU-deduplicated collection
    - ProductQuery: named listing criteria
    - FeedResponse: acknowledgement of an accepted feed
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Callable, Iterable, Iterator, Literal, Optional, Union

from pydantic import (
    BaseModel as PydanticBaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# Base Configuration
# =============================================================================

class BaseModel(PydanticBaseModel):
    """Base model with common configuration for all schemas."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=False,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self, **kwargs) -> dict[str, Any]:
        """Serialize model to dictionary."""
        return self.model_dump(**kwargs)


# =============================================================================
# Enums
# =============================================================================

class ProductStatusFilter(str, Enum):
    """Status filters understood by the GetProducts call."""
    ALL = "all"
    LIVE = "live"
    INACTIVE = "inactive"
    DELETED = "deleted"
    IMAGE_MISSING = "image-missing"
    PENDING = "pending"
    REJECTED = "rejected"
    SOLD_OUT = "sold-out"


class FeedAction(str, Enum):
    """Mutation feeds; the value is the remote Action name."""
    PRODUCT_CREATE = "ProductCreate"
    PRODUCT_UPDATE = "ProductUpdate"
    PRODUCT_REMOVE = "ProductRemove"
    IMAGE = "Image"


class ProductStatus(str, Enum):
    """Lifecycle status of a listed product."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


# =============================================================================
# Value Objects
# =============================================================================

class Brand(BaseModel):
    """Product brand, compared by name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Brand name as known by the marketplace")


class Image(BaseModel):
    """Reference to a product image."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1, description="Publicly reachable image URL")


def is_category_id(value: str) -> bool:
    return value.isascii() and value.isdigit()


class CategoryByName(BaseModel):
    """Category referenced by its human readable name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["name"] = "name"
    name: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names must not read back as an ID or as several categories."""
        if "," in v:
            raise ValueError("Category name must not contain a comma")
        if is_category_id(v):
            raise ValueError("Category name must not be all digits; use CategoryById")
        return v

    @property
    def key(self) -> tuple[str, str]:
        return (self.kind, self.name)

    @property
    def wire_value(self) -> str:
        return self.name


class CategoryById(BaseModel):
    """Category referenced by its numeric marketplace identifier."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["id"] = "id"
    id: int = Field(..., ge=0)

    @property
    def key(self) -> tuple[str, str]:
        return (self.kind, str(self.id))

    @property
    def wire_value(self) -> str:
        return str(self.id)


Category = Annotated[Union[CategoryByName, CategoryById], Field(discriminator="kind")]


def category_from_wire(value: str) -> Union[CategoryByName, CategoryById]:
    """ASCII digits are category IDs, anything else is a category name."""
    value = value.strip()
    if is_category_id(value):
        return CategoryById(id=int(value))
    return CategoryByName(name=value)


class ProductData(BaseModel):
    """Condition label and package measurements of a product."""

    model_config = ConfigDict(frozen=True)

    condition_type: Optional[str] = Field(
        default=None,
        description="Condition label, e.g. 'Nuevo'",
        examples=["Nuevo", "Usado"],
    )
    package_height: int = Field(default=0, ge=0)
    package_width: int = Field(default=0, ge=0)
    package_length: int = Field(default=0, ge=0)
    package_weight: int = Field(default=0, ge=0)


# =============================================================================
# Collections
# =============================================================================

class Categories:
    """
    Set of categories keyed by identity.

    Iteration follows insertion order; adding a category that is already
    present is a no-op.
    """

    def __init__(self, categories: Iterable[Union[CategoryByName, CategoryById]] = ()):
        self._categories: dict[tuple[str, str], Union[CategoryByName, CategoryById]] = {}
        self.add_many(categories)

    def add(self, category: Union[CategoryByName, CategoryById]) -> None:
        self._categories.setdefault(category.key, category)

    def add_many(self, categories: Iterable[Union[CategoryByName, CategoryById]]) -> None:
        for category in categories:
            self.add(category)

    def all(self) -> list[Union[CategoryByName, CategoryById]]:
        return list(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Union[CategoryByName, CategoryById]]:
        return iter(list(self._categories.values()))

    def __contains__(self, category: object) -> bool:
        key = getattr(category, "key", None)
        return key in self._categories

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Categories):
            return NotImplemented
        return set(self._categories) == set(other._categories)

    def __repr__(self) -> str:
        return f"Categories({self.all()!r})"


# =============================================================================
# Product Entity
# =============================================================================

class Product(BaseModel):
    """
    A single catalog item.

    Identity (seller SKU, product ID) and name are frozen; assigning them
    raises a ValidationError. Categories and images can be replaced or
    extended at any time.

    Example:
        >>> product = Product(
        ...     seller_sku="2145819109aaeu7",
        ...     name="Magic Product",
        ...     brand=Brand(name="Samsung"),
        ...     primary_category=CategoryByName(name="Jeans"),
        ...     price=Decimal("5999.00"),
        ... )
        >>> product.add_images([Image(url="http://static.somecdn.com/front.jpeg")])
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Identity
    seller_sku: str = Field(..., min_length=1, frozen=True, description="Seller SKU, case-sensitive")
    product_id: Optional[str] = Field(default=None, frozen=True, description="Marketplace product ID")
    name: str = Field(..., min_length=1, frozen=True)

    # Descriptive attributes
    variation: Optional[str] = None
    description: Optional[str] = None
    tax_class: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    brand: Optional[Brand] = None
    primary_category: Optional[Category] = None
    categories: Categories = Field(default_factory=Categories)
    images: list[Image] = Field(default_factory=list)
    product_data: ProductData = Field(default_factory=ProductData)

    # Listing attributes reported by the marketplace
    shop_sku: Optional[str] = None
    parent_sku: Optional[str] = None
    status: Optional[str] = Field(default=None, examples=["active", "inactive", "deleted"])
    quantity: Optional[int] = Field(default=None, ge=0)
    available: Optional[int] = Field(default=None, ge=0)
    sale_price: Optional[Decimal] = Field(default=None, ge=0)
    main_image: Optional[str] = None
    url: Optional[str] = None

    @field_validator("categories", mode="before")
    @classmethod
    def coerce_categories(cls, v: Any) -> Categories:
        """Accept any iterable of categories."""
        if v is None:
            return Categories()
        if isinstance(v, Categories):
            return v
        return Categories(v)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            return v.value
        return v

    def set_categories(self, categories: Iterable[Union[CategoryByName, CategoryById]]) -> None:
        """Replace the additional categories."""
        self.categories = categories if isinstance(categories, Categories) else Categories(categories)

    def set_images(self, images: Iterable[Image]) -> None:
        """Replace the image list, keeping the given order."""
        self.images = list(images)

    def add_images(self, images: Iterable[Image]) -> None:
        """Append images; duplicates are kept."""
        self.images.extend(images)


class Products:
    """
    Ordered collection of products keyed by seller SKU.

    Adding a product whose SKU is already present replaces the stored entry
    in place, so the collection never holds two products with the same SKU.
    Not thread-safe.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._products: dict[str, Product] = {}
        self.add_many(products)

    def add(self, product: Product) -> None:
        self._products[product.seller_sku] = product

    def add_many(self, products: Iterable[Product]) -> None:
        for product in products:
            self.add(product)

    def get(self, seller_sku: str) -> Optional[Product]:
        return self._products.get(seller_sku)

    def remove(self, seller_sku: str) -> Optional[Product]:
        return self._products.pop(seller_sku, None)

    def all(self) -> list[Product]:
        """Current products in insertion order."""
        return list(self._products.values())

    def seller_skus(self) -> list[str]:
        return list(self._products)

    def filter(self, predicate: Callable[[Product], bool]) -> "Products":
        """New collection with the products matching ``predicate``."""
        return Products(p for p in self._products.values() if predicate(p))

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._products.values()))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Product):
            return item.seller_sku in self._products
        return item in self._products

    def __repr__(self) -> str:
        return f"Products({self.seller_skus()!r})"


# =============================================================================
# Query Models
# =============================================================================

class ProductQuery(BaseModel):
    """
    Criteria for a GetProducts call.

    Every field is optional and independent; unset fields are not sent.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=False)

    created_before: Optional[datetime] = Field(
        default=None,
        description="Only products created before this moment",
    )
    created_after: Optional[datetime] = Field(
        default=None,
        description="Only products created after this moment",
    )
    updated_before: Optional[datetime] = Field(
        default=None,
        description="Only products last updated before this moment",
    )
    updated_after: Optional[datetime] = Field(
        default=None,
        description="Only products last updated after this moment",
    )
    search: Optional[str] = Field(
        default=None,
        description="Free text matched by the marketplace against name and SKU",
    )
    filter: Optional[str] = Field(
        default=None,
        description="Status filter; unknown values are sent as given",
        examples=[f.value for f in ProductStatusFilter],
    )
    limit: Optional[int] = Field(default=None, ge=0, description="Maximum number of products")
    offset: Optional[int] = Field(default=None, ge=0, description="Number of products to skip")
    seller_skus: Optional[list[str]] = Field(
        default=None,
        description="Look these seller SKUs up directly; must not be empty when given",
    )

    @field_validator("filter", mode="before")
    @classmethod
    def coerce_filter(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            return v.value
        return v


# =============================================================================
# Feed Models
# =============================================================================

class FeedResponse(BaseModel):
    """Acknowledgement of a feed accepted for asynchronous processing."""

    model_config = ConfigDict(frozen=True)

    request_id: str = Field(..., min_length=1, description="Feed tracking identifier")
    request_action: Optional[str] = None
    response_type: Optional[str] = None
    timestamp: Optional[datetime] = None
    seller_skus: tuple[str, ...] = Field(
        default=(),
        description="SKUs (or image keys) submitted in the feed",
    )
