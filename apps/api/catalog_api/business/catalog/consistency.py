from __future__ import annotations

from catalog_api.business.catalog.schemas import ProductRead, SkuRead, VariantRead


def _sku_price_table_id(sku: SkuRead) -> int | None:
    # Only the first association counts. A SKU listed in several price tables is
    # judged by whichever association storage returns first (lowest id).
    if not sku.price_tables_skus:
        return None
    return sku.price_tables_skus[0].price_table_id


def is_consistent_variant(variant: VariantRead) -> bool:
    """A variant is exposable when it has SKUs and they all share one price table."""
    if not variant.skus:
        return False

    reference_id = _sku_price_table_id(variant.skus[0])
    if reference_id is None:
        return False

    return all(_sku_price_table_id(sku) == reference_id for sku in variant.skus)


def consistent_variants(product: ProductRead) -> list[VariantRead]:
    return [variant for variant in product.variants if is_consistent_variant(variant)]


def filter_variants_by_price_table(product: ProductRead) -> ProductRead | None:
    """Return ``product`` restricted to its consistent variants, or ``None`` if none remain."""
    variants = consistent_variants(product)
    if not variants:
        return None
    return product.model_copy(update={"variants": variants})
