from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException, status
from opentelemetry import trace
from sqlalchemy import and_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_api.business.catalog.consistency import consistent_variants, filter_variants_by_price_table
from catalog_api.business.catalog.filters import ProductListFilters, build_product_conditions
from catalog_api.business.catalog.models import (
    Brand,
    Category,
    PriceTable,
    PriceTableSku,
    Product,
    Sku,
    Subcategory,
    Variant,
    utcnow,
)
from catalog_api.business.catalog.repository import ProductAggregateRepository, ProductRepository
from catalog_api.business.catalog.schemas import (
    CategoryCount,
    GroupCount,
    LookupCount,
    ProductCreate,
    ProductDeleteRead,
    ProductFiltersRead,
    ProductRead,
    ProductUpdate,
    PromptDeliveryCount,
)
from catalog_api.context import get_correlation_id
from catalog_api.metrics import observe_products_hidden


logger = logging.getLogger("catalog_api.catalog")
tracer = trace.get_tracer("catalog_api.catalog.service")

# Columns that reject NULL; an explicit null in an update payload leaves them untouched.
_NON_NULLABLE_UPDATE_FIELDS = {
    "name",
    "reference",
    "type",
    "gender",
    "prompt_delivery",
    "company_id",
    "brand_id",
    "category_id",
    "open_grid",
    "is_discontinued",
    "is_launch",
    "is_visible",
}


@dataclass(slots=True)
class ProductService:
    product_repository: ProductRepository = ProductRepository()
    aggregate_repository: ProductAggregateRepository = ProductAggregateRepository()

    def list_products(self, session: Session, filters: ProductListFilters) -> list[ProductRead]:
        rows = self.product_repository.list_active(
            session,
            build_product_conditions(filters),
            offset=filters.offset,
            limit=filters.limit if filters.is_paginated else None,
        )

        products: list[ProductRead] = []
        for row in rows:
            filtered = filter_variants_by_price_table(ProductRead.model_validate(row))
            if filtered is not None:
                products.append(filtered)

        hidden = len(rows) - len(products)
        if hidden:
            observe_products_hidden("list", hidden)
            logger.info("catalog.products_hidden", extra={"operation": "list", "hidden_count": hidden})
        return products

    def get_product(self, session: Session, product_id: int) -> ProductRead:
        product = self.product_repository.get_active(session, product_id)
        if product is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="product not found")

        filtered = filter_variants_by_price_table(ProductRead.model_validate(product))
        if filtered is None:
            observe_products_hidden("get")
            logger.info(
                "catalog.products_hidden",
                extra={"operation": "get", "hidden_count": 1, "product_id": product_id},
            )
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="product not found")
        return filtered

    def create_product(self, session: Session, dto: ProductCreate) -> ProductRead:
        self._validate_references(
            session,
            brand_id=dto.brand_id,
            category_id=dto.category_id,
            subcategory_id=dto.subcategory_id,
        )
        self._validate_price_tables(session, dto)

        with tracer.start_as_current_span("catalog.product.create") as span:
            span.set_attribute("variant_count", len(dto.variants))
            span.set_attribute("correlation_id", get_correlation_id() or "")

            product = Product(**dto.model_dump(mode="python", exclude={"variants"}))
            session.add(product)
            try:
                session.flush()
                product_id = product.id
                for variant_dto in dto.variants:
                    variant = Variant(product_id=product_id, name=variant_dto.name, hex_code=variant_dto.hex_code)
                    session.add(variant)
                    session.flush()
                    for sku_dto in variant_dto.skus:
                        sku = Sku(variant_id=variant.id, **sku_dto.model_dump(mode="python", exclude={"price_tables_skus"}))
                        session.add(sku)
                        session.flush()
                        for entry in sku_dto.price_tables_skus:
                            session.add(
                                PriceTableSku(sku_id=sku.id, price_table_id=entry.price_table_id, price=entry.price)
                            )
                session.commit()
            except IntegrityError:
                session.rollback()
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="product already exists")

            span.set_attribute("product_id", product_id)

        logger.info(
            "catalog.product_created",
            extra={"product_id": product_id, "variant_count": len(dto.variants)},
        )
        return self._to_write_result(session, product_id, operation="create")

    def update_product(self, session: Session, product_id: int, dto: ProductUpdate) -> ProductRead:
        product = self.product_repository.get_active(session, product_id)
        if product is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="product not found")

        changes: dict[str, Any] = {}
        for field_name, value in dto.model_dump(mode="python", exclude_unset=True).items():
            if value is None and field_name in _NON_NULLABLE_UPDATE_FIELDS:
                continue
            changes[field_name] = value

        if not changes:
            return self._to_write_result(session, product_id, operation="update")

        self._validate_references(
            session,
            brand_id=changes.get("brand_id"),
            category_id=changes.get("category_id", product.category_id),
            subcategory_id=changes.get("subcategory_id", product.subcategory_id),
        )

        for field_name, value in changes.items():
            setattr(product, field_name, value)
        product.updated_at = utcnow()

        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="product conflicts with an existing product")

        logger.info("catalog.product_updated", extra={"product_id": product_id})
        return self._to_write_result(session, product_id, operation="update")

    def delete_product(self, session: Session, product_id: int) -> ProductDeleteRead:
        result = session.execute(
            update(Product)
            .where(and_(Product.id == product_id, Product.deleted_at.is_(None)))
            .values(deleted_at=utcnow())
        )
        if result.rowcount == 0:
            session.rollback()
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="product not found or already deleted")
        session.commit()

        deleted = self.product_repository.reload(session, product_id)
        if deleted is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="product not found")

        logger.info("catalog.product_deleted", extra={"product_id": product_id})
        return ProductDeleteRead(message="product deleted", product=ProductRead.model_validate(deleted))

    def list_deleted_products(self, session: Session) -> list[ProductRead]:
        return [ProductRead.model_validate(row) for row in self.product_repository.list_deleted(session)]

    def get_deleted_product(self, session: Session, product_id: int) -> ProductRead:
        product = self.product_repository.get_deleted(session, product_id)
        if product is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="deleted product not found")
        return ProductRead.model_validate(product)

    def count_products(self, session: Session, filters: ProductListFilters) -> int:
        # Counts stored rows; products hidden by the price table check are still included.
        return self.product_repository.count(session, build_product_conditions(filters))

    def get_product_filters(self, session: Session) -> ProductFiltersRead:
        aggregates = self.aggregate_repository

        subcategories_by_category: dict[int, list[LookupCount]] = defaultdict(list)
        for subcategory_id, category_id, name, quantity in aggregates.subcategory_counts(session):
            subcategories_by_category[category_id].append(LookupCount(id=subcategory_id, name=name, quantity=quantity))

        prompt_counts = dict(aggregates.grouped_counts(session, Product.prompt_delivery))

        return ProductFiltersRead(
            brands=[
                LookupCount(id=brand_id, name=name, quantity=quantity)
                for brand_id, name, quantity in aggregates.brand_counts(session)
            ],
            categories=[
                CategoryCount(
                    id=category_id,
                    name=name,
                    quantity=quantity,
                    subcategories=subcategories_by_category.get(category_id, []),
                )
                for category_id, name, quantity in aggregates.category_counts(session)
            ],
            genders=[
                GroupCount(name=value, quantity=quantity)
                for value, quantity in aggregates.grouped_counts(session, Product.gender)
            ],
            types=[
                GroupCount(name=value, quantity=quantity)
                for value, quantity in aggregates.grouped_counts(session, Product.type)
            ],
            prompt_delivery=PromptDeliveryCount(
                true_count=prompt_counts.get(True, 0),
                false_count=prompt_counts.get(False, 0),
            ),
        )

    def _to_write_result(self, session: Session, product_id: int, *, operation: str) -> ProductRead:
        product = self.product_repository.reload(session, product_id)
        if product is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="product not found")

        read = ProductRead.model_validate(product)
        variants = consistent_variants(read)
        hidden = len(read.variants) - len(variants)
        if hidden:
            logger.info(
                "catalog.products_hidden",
                extra={"operation": operation, "product_id": product_id, "hidden_count": hidden},
            )
        return read.model_copy(update={"variants": variants})

    @staticmethod
    def _validate_references(
        session: Session,
        *,
        brand_id: int | None,
        category_id: int | None,
        subcategory_id: int | None,
    ) -> None:
        if brand_id is not None and session.get(Brand, brand_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="brand not found")
        if category_id is not None and session.get(Category, category_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="category not found")
        if subcategory_id is not None:
            subcategory = session.get(Subcategory, subcategory_id)
            if subcategory is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="subcategory not found")
            if category_id is not None and subcategory.category_id != category_id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="subcategory does not belong to category",
                )

    @staticmethod
    def _validate_price_tables(session: Session, dto: ProductCreate) -> None:
        requested = {
            entry.price_table_id
            for variant in dto.variants
            for sku in variant.skus
            for entry in sku.price_tables_skus
        }
        if not requested:
            return
        found = set(session.scalars(select(PriceTable.id).where(PriceTable.id.in_(requested))).all())
        missing = sorted(requested - found)
        if missing:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"price table not found: {', '.join(str(item) for item in missing)}",
            )
