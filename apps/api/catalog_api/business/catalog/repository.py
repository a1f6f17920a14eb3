from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, func, select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from catalog_api.business.catalog.models import Brand, Category, Product, Sku, Subcategory, Variant


def product_load_options() -> list[LoaderOption]:
    return [
        selectinload(Product.variants).selectinload(Variant.skus).selectinload(Sku.price_tables_skus),
        selectinload(Product.brand),
        selectinload(Product.category),
        selectinload(Product.subcategory),
    ]


class ProductRepository:
    def list_active(
        self,
        session: Session,
        conditions: Sequence[ColumnElement[bool]],
        *,
        offset: int | None = None,
        limit: int | None = None,
    ) -> Sequence[Product]:
        stmt: Select[tuple[Product]] = (
            select(Product).where(and_(*conditions)).options(*product_load_options()).order_by(Product.id.asc())
        )
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return session.scalars(stmt).all()

    def count(self, session: Session, conditions: Sequence[ColumnElement[bool]]) -> int:
        return session.scalar(select(func.count(Product.id)).where(and_(*conditions))) or 0

    def get_active(self, session: Session, product_id: int) -> Product | None:
        return session.scalar(
            select(Product)
            .where(and_(Product.id == product_id, Product.deleted_at.is_(None)))
            .options(*product_load_options())
        )

    def get_deleted(self, session: Session, product_id: int) -> Product | None:
        return session.scalar(
            select(Product)
            .where(and_(Product.id == product_id, Product.deleted_at.is_not(None)))
            .options(*product_load_options())
        )

    def list_deleted(self, session: Session) -> Sequence[Product]:
        return session.scalars(
            select(Product)
            .where(Product.deleted_at.is_not(None))
            .options(*product_load_options())
            .order_by(Product.id.asc())
        ).all()

    def reload(self, session: Session, product_id: int) -> Product | None:
        # populate_existing refreshes collections already held in the identity map
        return session.scalar(
            select(Product)
            .where(Product.id == product_id)
            .options(*product_load_options())
            .execution_options(populate_existing=True)
        )


class ProductAggregateRepository:
    """Grouped counts over non-deleted products."""

    def brand_counts(self, session: Session) -> list[tuple[int, str, int]]:
        stmt = (
            select(Brand.id, Brand.name, func.count(Product.id))
            .outerjoin(Product, and_(Product.brand_id == Brand.id, Product.deleted_at.is_(None)))
            .group_by(Brand.id, Brand.name)
            .order_by(Brand.name.asc())
        )
        return [(row[0], row[1], int(row[2])) for row in session.execute(stmt).all()]

    def category_counts(self, session: Session) -> list[tuple[int, str, int]]:
        stmt = (
            select(Category.id, Category.name, func.count(Product.id))
            .outerjoin(Product, and_(Product.category_id == Category.id, Product.deleted_at.is_(None)))
            .group_by(Category.id, Category.name)
            .order_by(Category.name.asc())
        )
        return [(row[0], row[1], int(row[2])) for row in session.execute(stmt).all()]

    def subcategory_counts(self, session: Session) -> list[tuple[int, int, str, int]]:
        stmt = (
            select(Subcategory.id, Subcategory.category_id, Subcategory.name, func.count(Product.id))
            .outerjoin(Product, and_(Product.subcategory_id == Subcategory.id, Product.deleted_at.is_(None)))
            .group_by(Subcategory.id, Subcategory.category_id, Subcategory.name)
            .order_by(Subcategory.name.asc())
        )
        return [(row[0], row[1], row[2], int(row[3])) for row in session.execute(stmt).all()]

    def grouped_counts(self, session: Session, column: Any) -> list[tuple[Any, int]]:
        stmt = (
            select(column, func.count(Product.id))
            .where(Product.deleted_at.is_(None))
            .group_by(column)
            .order_by(column.asc())
        )
        return [(row[0], int(row[1])) for row in session.execute(stmt).all()]
