import json
import pytest
from datetime import datetime

from sellercenter.models.schemas import ProductQuery, ProductStatusFilter
from sellercenter.services.query_builder import QueryBuilder
from sellercenter.utils.errors import InvalidArgumentError

FILTERS = [
    "all",
    "live",
    "inactive",
    "deleted",
    "image-missing",
    "pending",
    "rejected",
    "sold-out",
    "",
    "invalid-filter",
]


@pytest.fixture
def builder():
    return QueryBuilder()


def test_empty_query_has_no_parameters(builder):
    assert builder.build(ProductQuery()) == {}


def test_dates_use_fixed_format(builder):
    moment = datetime(2019, 1, 23, 7, 5, 9)
    query = ProductQuery(
        created_before=moment,
        created_after=datetime(2018, 9, 1),
        updated_before=moment,
        updated_after=moment,
    )

    assert builder.build(query) == {
        "CreatedBefore": "2019-01-23 07:05:09",
        "CreatedAfter": "2018-09-01 00:00:00",
        "UpdatedBefore": "2019-01-23 07:05:09",
        "UpdatedAfter": "2019-01-23 07:05:09",
    }


@pytest.mark.parametrize("status", FILTERS)
def test_status_filter_is_passed_through(builder, status):
    assert builder.build(ProductQuery(filter=status)) == {"Filter": status}


def test_status_filter_enum_values(builder):
    for status in ProductStatusFilter:
        assert builder.build(ProductQuery(filter=status))["Filter"] == status.value


def test_all_criteria_combined(builder):
    moment = datetime(2019, 1, 23)
    query = ProductQuery(
        created_before=moment,
        created_after=moment,
        updated_before=moment,
        updated_after=moment,
        search="pil",
        filter="invalidFilter",
        limit=1,
        offset=0,
        seller_skus=["jasku-10001", "jasku-10002"],
    )

    parameters = builder.build(query)

    assert parameters["Search"] == "pil"
    assert parameters["Filter"] == "invalidFilter"
    assert parameters["Limit"] == "1"
    assert parameters["Offset"] == "0"
    assert json.loads(parameters["SkuSellerList"]) == ["jasku-10001", "jasku-10002"]
    assert all(isinstance(value, str) for value in parameters.values())
    assert len(parameters) == 9


def test_seller_sku_list_encoding(builder):
    parameters = builder.build(ProductQuery(seller_skus=["a", "B/1"]))
    assert parameters == {"SkuSellerList": '["a","B/1"]'}


def test_empty_seller_sku_list_is_rejected(builder):
    with pytest.raises(InvalidArgumentError):
        builder.build(ProductQuery(seller_skus=[]))


def test_make_query_validates_criteria():
    query = QueryBuilder.make_query(search="pil", limit=5)
    assert query.search == "pil"
    assert query.limit == 5

    with pytest.raises(InvalidArgumentError):
        QueryBuilder.make_query(limit=-1)
    with pytest.raises(InvalidArgumentError):
        QueryBuilder.make_query(created_after="yesterday")
    with pytest.raises(InvalidArgumentError, match="unknown_field"):
        QueryBuilder.make_query(unknown_field=1)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        QueryBuilder.make_query(offset=-1)
