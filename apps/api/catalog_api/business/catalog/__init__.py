from catalog_api.business.catalog.api import router
from catalog_api.business.catalog.models import Brand, Category, PriceTable, PriceTableSku, Product, Sku, Subcategory, Variant
from catalog_api.business.catalog.schemas import (
    ProductCreate,
    ProductDeleteRead,
    ProductFiltersRead,
    ProductRead,
    ProductUpdate,
)
from catalog_api.business.catalog.seed import CatalogSeedHelper, catalog_seed_helper
from catalog_api.business.catalog.service import ProductService

__all__ = [
    "router",
    "Brand",
    "Category",
    "Subcategory",
    "PriceTable",
    "Product",
    "Variant",
    "Sku",
    "PriceTableSku",
    "ProductCreate",
    "ProductUpdate",
    "ProductRead",
    "ProductDeleteRead",
    "ProductFiltersRead",
    "ProductService",
    "CatalogSeedHelper",
    "catalog_seed_helper",
]
