from __future__ import annotations

import logging

import pytest
from sqlalchemy.dialects import sqlite

from catalog_api.business.catalog.filters import (
    InvalidFilterError,
    ProductListFilters,
    build_product_conditions,
    build_product_filters,
)


def _compile(condition) -> str:  # type: ignore[no-untyped-def]
    return str(condition.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))


def test_empty_params_yield_no_filters() -> None:
    filters = build_product_filters({})
    assert filters == ProductListFilters()
    assert filters.is_paginated is False
    assert filters.offset is None


def test_blank_values_are_treated_as_absent() -> None:
    filters = build_product_filters({"page": "", "limit": "  ", "brand": "", "gender": ""})
    assert filters == ProductListFilters()


def test_pagination_offset_requires_page_and_limit() -> None:
    paginated = build_product_filters({"page": "3", "limit": "10"})
    assert paginated.is_paginated is True
    assert paginated.offset == 20
    assert paginated.limit == 10

    page_only = build_product_filters({"page": "2"})
    assert page_only.is_paginated is False
    assert page_only.offset is None


@pytest.mark.parametrize(
    ("params", "parameter"),
    [
        ({"page": "0"}, "page"),
        ({"page": "-1"}, "page"),
        ({"page": "abc"}, "page"),
        ({"page": "1.5"}, "page"),
        ({"limit": "0"}, "limit"),
        ({"page": "1", "limit": "ten"}, "limit"),
        ({"page": "99999999999999999999"}, "page"),
        ({"page": "1", "limit": "2147483648"}, "limit"),
    ],
)
def test_invalid_pagination_raises(params: dict[str, str], parameter: str) -> None:
    with pytest.raises(InvalidFilterError) as exc_info:
        build_product_filters(params)
    assert exc_info.value.parameter == parameter
    assert str(exc_info.value) == f"{parameter} must be a positive integer no greater than 2147483647"


def test_enum_filters_are_upper_cased() -> None:
    filters = build_product_filters({"gender": "female", "type": "Footwear"})
    assert filters.gender == "FEMALE"
    assert filters.type == "FOOTWEAR"


def test_unknown_enum_values_are_dropped_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="catalog_api.catalog")

    filters = build_product_filters({"gender": "robot", "type": "FURNITURE"})

    assert filters.gender is None
    assert filters.type is None
    ignored = [record for record in caplog.records if record.getMessage() == "catalog.filter_ignored"]
    assert {getattr(record, "filter_name", None) for record in ignored} == {"gender", "type"}
    assert any(getattr(record, "filter_value", None) == "robot" for record in ignored)


def test_prompt_delivery_parsing() -> None:
    assert build_product_filters({"promptDelivery": "TRUE"}).prompt_delivery is True
    assert build_product_filters({"promptDelivery": "false"}).prompt_delivery is False
    assert build_product_filters({"promptDelivery": "maybe"}).prompt_delivery is None


def test_conditions_always_exclude_deleted_products() -> None:
    conditions = build_product_conditions(ProductListFilters())
    assert len(conditions) == 1
    assert "deleted_at IS NULL" in _compile(conditions[0])


def test_conditions_include_every_supplied_filter() -> None:
    filters = ProductListFilters(
        brand="Acme",
        category="Shirts",
        gender="MALE",
        prompt_delivery=True,
        type="CLOTHING",
    )
    compiled = [_compile(condition) for condition in build_product_conditions(filters)]

    assert len(compiled) == 6
    assert any("catalog_brand.name = 'Acme'" in item for item in compiled)
    assert any("catalog_category.name = 'Shirts'" in item for item in compiled)
    assert any("catalog_product.gender = 'MALE'" in item for item in compiled)
    assert any("catalog_product.type = 'CLOTHING'" in item for item in compiled)
    assert any("catalog_product.prompt_delivery IS" in item for item in compiled)


def test_largest_storable_page_values_are_accepted() -> None:
    filters = build_product_filters({"page": "2147483647", "limit": "2147483647"})
    assert filters.page == 2147483647
    assert filters.limit == 2147483647
