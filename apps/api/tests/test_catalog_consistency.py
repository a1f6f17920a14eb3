from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from itertools import count
from typing import Any

from catalog_api.business.catalog.consistency import (
    consistent_variants,
    filter_variants_by_price_table,
    is_consistent_variant,
)
from catalog_api.business.catalog.schemas import ProductRead, VariantRead


_ids = count(1)


def _sku(*price_table_ids: int) -> dict[str, Any]:
    sku_id = next(_ids)
    return {
        "id": sku_id,
        "variant_id": 1,
        "size": "M",
        "stock": 3,
        "price": Decimal("10.00"),
        "code": f"SKU-{sku_id}",
        "min_quantity": None,
        "multiple_quantity": 1,
        "erp_id": None,
        "cest": None,
        "ncm": None,
        "height": None,
        "length": None,
        "weight": None,
        "width": None,
        "price_tables_skus": [
            {"id": next(_ids), "sku_id": sku_id, "price_table_id": table_id, "price": Decimal("10.00")}
            for table_id in price_table_ids
        ],
    }


def _variant(*skus: dict[str, Any]) -> dict[str, Any]:
    return {"id": next(_ids), "product_id": 1, "name": "Blue", "hex_code": "#0000ff", "skus": list(skus)}


def _product(*variants: dict[str, Any]) -> ProductRead:
    now = datetime.now(timezone.utc)
    return ProductRead.model_validate(
        {
            "id": 1,
            "name": "Tee",
            "reference": "REF-1",
            "type": "CLOTHING",
            "gender": "UNISEX",
            "prompt_delivery": False,
            "description": None,
            "company_id": 1,
            "erp_id": None,
            "brand_id": 1,
            "deadline_id": None,
            "category_id": 1,
            "subcategory_id": None,
            "category_order": None,
            "composition_data": None,
            "technical_information": None,
            "open_grid": False,
            "ipi": None,
            "is_discontinued": False,
            "is_launch": False,
            "is_visible": True,
            "colection": None,
            "st": None,
            "created_at": now,
            "updated_at": now,
            "deleted_at": None,
            "variants": list(variants),
        }
    )


def test_variant_with_skus_on_one_price_table_is_consistent() -> None:
    variant = VariantRead.model_validate(_variant(_sku(1), _sku(1), _sku(1)))
    assert is_consistent_variant(variant) is True


def test_variant_without_skus_is_inconsistent() -> None:
    assert is_consistent_variant(VariantRead.model_validate(_variant())) is False


def test_variant_with_unpriced_first_sku_is_inconsistent() -> None:
    variant = VariantRead.model_validate(_variant(_sku(), _sku(1)))
    assert is_consistent_variant(variant) is False


def test_variant_with_an_unpriced_later_sku_is_inconsistent() -> None:
    variant = VariantRead.model_validate(_variant(_sku(1), _sku()))
    assert is_consistent_variant(variant) is False


def test_variant_with_mixed_price_tables_is_inconsistent() -> None:
    variant = VariantRead.model_validate(_variant(_sku(1), _sku(2)))
    assert is_consistent_variant(variant) is False


def test_only_the_first_association_of_each_sku_is_compared() -> None:
    # second SKU also belongs to table 1, but its first association is table 2
    mismatched = VariantRead.model_validate(_variant(_sku(1), _sku(2, 1)))
    assert is_consistent_variant(mismatched) is False

    # extra associations after a matching first one are ignored
    matched = VariantRead.model_validate(_variant(_sku(1, 2), _sku(1, 3)))
    assert is_consistent_variant(matched) is True


def test_consistent_variants_preserves_order() -> None:
    product = _product(_variant(_sku(1)), _variant(_sku(1), _sku(2)), _variant(_sku(3)))
    kept = consistent_variants(product)
    assert [variant.id for variant in kept] == [product.variants[0].id, product.variants[2].id]


def test_filter_returns_none_when_no_variant_survives() -> None:
    assert filter_variants_by_price_table(_product()) is None
    assert filter_variants_by_price_table(_product(_variant(_sku(1), _sku(2)))) is None


def test_filter_returns_copy_without_touching_input() -> None:
    product = _product(_variant(_sku(1)), _variant(_sku()))

    filtered = filter_variants_by_price_table(product)

    assert filtered is not None
    assert len(filtered.variants) == 1
    assert len(product.variants) == 2
    assert filtered.id == product.id
