"""Data models module for the SellerCenter client."""

from sellercenter.models.schemas import (
    # Base Models
    BaseModel,

    # Enums
    ProductStatusFilter,
    FeedAction,
    ProductStatus,

    # Value Objects
    Brand,
    Image,
    Category,
    CategoryByName,
    CategoryById,
    ProductData,
    category_from_wire,

    # Entities and Collections
    Categories,
    Product,
    Products,

    # Query and Feed Models
    ProductQuery,
    FeedResponse,
)

__all__ = [
    # Base Models
    "BaseModel",

    # Enums
    "ProductStatusFilter",
    "FeedAction",
    "ProductStatus",

    # Value Objects
    "Brand",
    "Image",
    "Category",
    "CategoryByName",
    "CategoryById",
    "ProductData",
    "category_from_wire",

    # Entities and Collections
    "Categories",
    "Product",
    "Products",

    # Query and Feed Models
    "ProductQuery",
    "FeedResponse",
]
