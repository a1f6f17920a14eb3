from __future__ import annotations

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from catalog_api.business.catalog.models import Brand, Category, PriceTable, Subcategory


class CatalogSeedHelper:
    """Get-or-create for the lookup rows products point at.

    The HTTP surface has no endpoints for brands, categories or price tables, so
    environments are bootstrapped through this helper.
    """

    def ensure_brand(self, session: Session, name: str) -> Brand:
        existing = session.scalar(select(Brand).where(Brand.name == name))
        if existing is not None:
            return existing
        brand = Brand(name=name)
        session.add(brand)
        session.commit()
        return brand

    def ensure_category(self, session: Session, name: str) -> Category:
        existing = session.scalar(select(Category).where(Category.name == name))
        if existing is not None:
            return existing
        category = Category(name=name)
        session.add(category)
        session.commit()
        return category

    def ensure_subcategory(self, session: Session, category: Category, name: str) -> Subcategory:
        existing = session.scalar(
            select(Subcategory).where(and_(Subcategory.category_id == category.id, Subcategory.name == name))
        )
        if existing is not None:
            return existing
        subcategory = Subcategory(category_id=category.id, name=name)
        session.add(subcategory)
        session.commit()
        return subcategory

    def ensure_price_table(self, session: Session, name: str) -> PriceTable:
        existing = session.scalar(select(PriceTable).where(PriceTable.name == name))
        if existing is not None:
            return existing
        price_table = PriceTable(name=name)
        session.add(price_table)
        session.commit()
        return price_table


catalog_seed_helper = CatalogSeedHelper()
