import pytest
import structlog
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

from sellercenter.config.settings import Settings
from sellercenter.models.schemas import (
    Brand,
    CategoryById,
    CategoryByName,
    Image,
    Product,
    ProductData,
    Products,
)
from sellercenter.services.client import SellerCenterClient
from sellercenter.services.product_manager import ProductManager


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop logging configuration bound to streams of a finished test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


IMAGE_URLS = [
    "http://static.somecdn.com/moneyshot.jpeg",
    "http://static.somecdn.com/front.jpeg",
    "http://static.somecdn.com/rear.jpeg",
]


@pytest.fixture
def settings():
    """Real settings built from explicit values."""
    return Settings(
        SELLER_CENTER_ENDPOINT="https://sellercenter-api.example.com/",
        SELLER_CENTER_USERNAME="seller@example.com",
        SELLER_CENTER_API_KEY="b1bdb357ced10fe4e9a69840cdd4f0e9c03d77fe",
        SELLER_CENTER_VERSION="1.0",
    )


@pytest.fixture
def fixtures_dir():
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def read_fixture(fixtures_dir):
    """Read an XML fixture, filling in ``{placeholders}`` when given."""
    def _read(name: str, **values) -> str:
        content = (fixtures_dir / name).read_text(encoding="utf-8")
        return content.format(**values) if values else content
    return _read


@pytest.fixture
def image_urls():
    return list(IMAGE_URLS)


@pytest.fixture
def primary_product():
    product = Product(
        seller_sku="2145819109aaeu7",
        name="Magic Product",
        variation="0",
        primary_category=CategoryByName(name="Jeans"),
        description="This is a bold product.",
        brand=Brand(name="Samsung"),
        price=Decimal("5999.00"),
        product_id="123326998",
        tax_class="IVA exento 0%",
        product_data=ProductData(
            condition_type="Nuevo",
            package_height=0,
            package_width=4,
            package_length=5,
            package_weight=4,
        ),
    )
    product.add_images([Image(url=url) for url in IMAGE_URLS])
    product.set_categories([CategoryById(id=1523), CategoryById(id=1604)])
    return product


@pytest.fixture
def second_product():
    product = Product(
        seller_sku="2145887609aaeu7",
        name="Rare Product",
        variation="Large",
        primary_category=CategoryByName(name="Camisas"),
        description="This is a bold product.",
        brand=Brand(name="Motorola"),
        price=Decimal("9999.00"),
        product_id="123326998",
        tax_class="IVA exento 0%",
        product_data=ProductData(
            condition_type="Nuevo",
            package_height=3,
            package_width=0,
            package_length=5,
            package_weight=4,
        ),
    )
    product.add_images([Image(url=url) for url in IMAGE_URLS])
    return product


@pytest.fixture
def products(primary_product, second_product):
    return Products([primary_product, second_product])


@pytest.fixture
def mock_client(settings):
    """SellerCenterClient double; tests set get/post return values."""
    client = MagicMock(spec=SellerCenterClient)
    client.settings = settings
    return client


@pytest.fixture
def manager(mock_client):
    return ProductManager(mock_client)
