"""Translation of raw product query parameters into storage predicates.

Pagination values are strict: an invalid ``page`` or ``limit`` rejects the request
before the database is touched. Enum and boolean filters are lenient: an
unrecognized value is logged and dropped, and the query runs without it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement

from catalog_api.business.catalog.models import Brand, Category, Product
from catalog_api.business.catalog.schemas import PRODUCT_GENDERS, PRODUCT_TYPES
from catalog_api.metrics import observe_filter_ignored
from catalog_api.utils.validation import (
    INTEGER_COLUMN_MAX,
    fits_integer_column,
    is_non_empty_string,
    is_positive_integer,
    parse_boolean,
    parse_int,
)


logger = logging.getLogger("catalog_api.catalog")


class InvalidFilterError(ValueError):
    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f"{parameter} must be a positive integer no greater than {INTEGER_COLUMN_MAX}")


@dataclass(slots=True, frozen=True)
class ProductListFilters:
    page: int | None = None
    limit: int | None = None
    brand: str | None = None
    category: str | None = None
    gender: str | None = None
    prompt_delivery: bool | None = None
    type: str | None = None

    @property
    def offset(self) -> int | None:
        if self.page is None or self.limit is None:
            return None
        return (self.page - 1) * self.limit

    @property
    def is_paginated(self) -> bool:
        return self.page is not None and self.limit is not None


def _blank_to_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if is_non_empty_string(text) else None


def _parse_page_value(parameter: str, raw: str | None) -> int | None:
    if raw is None:
        return None
    value = parse_int(raw)
    if value is None or not is_positive_integer(value) or not fits_integer_column(value):
        raise InvalidFilterError(parameter)
    return value


def _match_enum(parameter: str, raw: str | None, allowed: tuple[str, ...]) -> str | None:
    if raw is None:
        return None
    candidate = raw.upper()
    if candidate in allowed:
        return candidate
    logger.warning("catalog.filter_ignored", extra={"filter_name": parameter, "filter_value": raw})
    observe_filter_ignored(parameter)
    return None


def _match_boolean(parameter: str, raw: str | None) -> bool | None:
    if raw is None:
        return None
    parsed = parse_boolean(raw)
    if parsed is None:
        logger.warning("catalog.filter_ignored", extra={"filter_name": parameter, "filter_value": raw})
        observe_filter_ignored(parameter)
    return parsed


def build_product_filters(params: Mapping[str, Any]) -> ProductListFilters:
    """Validate raw query values. Raises :class:`InvalidFilterError` for bad pagination."""
    page = _parse_page_value("page", _blank_to_none(params.get("page")))
    limit = _parse_page_value("limit", _blank_to_none(params.get("limit")))

    return ProductListFilters(
        page=page,
        limit=limit,
        brand=_blank_to_none(params.get("brand")),
        category=_blank_to_none(params.get("category")),
        gender=_match_enum("gender", _blank_to_none(params.get("gender")), PRODUCT_GENDERS),
        prompt_delivery=_match_boolean("promptDelivery", _blank_to_none(params.get("promptDelivery"))),
        type=_match_enum("type", _blank_to_none(params.get("type")), PRODUCT_TYPES),
    )


def build_product_conditions(filters: ProductListFilters) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = [Product.deleted_at.is_(None)]
    if filters.brand is not None:
        conditions.append(Product.brand.has(Brand.name == filters.brand))
    if filters.category is not None:
        conditions.append(Product.category.has(Category.name == filters.category))
    if filters.gender is not None:
        conditions.append(Product.gender == filters.gender)
    if filters.type is not None:
        conditions.append(Product.type == filters.type)
    if filters.prompt_delivery is not None:
        conditions.append(Product.prompt_delivery.is_(filters.prompt_delivery))
    return conditions
