"""
SellerCenter catalog client.

Query, filter and mutate marketplace product listings through the
SellerCenter XML API.
"""

__version__ = "1.0.0"


def get_product_manager():
    """Get the ProductManager class (lazy import)."""
    from sellercenter.services.product_manager import ProductManager
    return ProductManager


__all__ = ["get_product_manager", "__version__"]
