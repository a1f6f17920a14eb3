from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Brand(Base):
    __tablename__ = "catalog_brand"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    products: Mapped[list[Product]] = relationship("Product", back_populates="brand")


class Category(Base):
    __tablename__ = "catalog_category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    subcategories: Mapped[list[Subcategory]] = relationship(
        "Subcategory",
        back_populates="category",
        order_by="Subcategory.name",
    )
    products: Mapped[list[Product]] = relationship("Product", back_populates="category")


class Subcategory(Base):
    __tablename__ = "catalog_subcategory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("catalog_category.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    category: Mapped[Category] = relationship("Category", back_populates="subcategories")
    products: Mapped[list[Product]] = relationship("Product", back_populates="subcategory")

    __table_args__ = (UniqueConstraint("category_id", "name", name="uq_catalog_subcategory_name"),)


class PriceTable(Base):
    __tablename__ = "catalog_price_table"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class Product(Base):
    __tablename__ = "catalog_product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    reference: Mapped[str] = mapped_column(String(128), nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    gender: Mapped[str] = mapped_column(String(32), nullable=False)
    prompt_delivery: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    company_id: Mapped[int] = mapped_column(Integer, nullable=False)
    erp_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    brand_id: Mapped[int] = mapped_column(Integer, ForeignKey("catalog_brand.id"), nullable=False)
    deadline_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("catalog_category.id"), nullable=False)
    subcategory_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("catalog_subcategory.id"), nullable=True)
    category_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    composition_data: Mapped[str | None] = mapped_column(Text, nullable=True)
    technical_information: Mapped[str | None] = mapped_column(Text, nullable=True)
    open_grid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    ipi: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    is_discontinued: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    is_launch: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    colection: Mapped[str | None] = mapped_column(String(128), nullable=True)
    st: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    brand: Mapped[Brand] = relationship("Brand", back_populates="products")
    category: Mapped[Category] = relationship("Category", back_populates="products")
    subcategory: Mapped[Subcategory | None] = relationship("Subcategory", back_populates="products")
    variants: Mapped[list[Variant]] = relationship(
        "Variant",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Variant.id",
    )

    __table_args__ = (
        UniqueConstraint("company_id", "reference", name="uq_catalog_product_reference"),
        Index("ix_catalog_product_active", "deleted_at", "brand_id", "category_id"),
    )


class Variant(Base):
    __tablename__ = "catalog_variant"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("catalog_product.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    hex_code: Mapped[str | None] = mapped_column(String(16), nullable=True)

    product: Mapped[Product] = relationship("Product", back_populates="variants")
    skus: Mapped[list[Sku]] = relationship(
        "Sku",
        back_populates="variant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Sku.id",
    )

    __table_args__ = (Index("ix_catalog_variant_product", "product_id"),)


class Sku(Base):
    __tablename__ = "catalog_sku"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    variant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("catalog_variant.id", ondelete="CASCADE"),
        nullable=False,
    )
    size: Mapped[str] = mapped_column(String(32), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    min_quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    multiple_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    erp_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    cest: Mapped[str | None] = mapped_column(String(16), nullable=True)
    ncm: Mapped[str | None] = mapped_column(String(16), nullable=True)
    height: Mapped[Decimal | None] = mapped_column(Numeric(10, 3), nullable=True)
    length: Mapped[Decimal | None] = mapped_column(Numeric(10, 3), nullable=True)
    weight: Mapped[Decimal | None] = mapped_column(Numeric(10, 3), nullable=True)
    width: Mapped[Decimal | None] = mapped_column(Numeric(10, 3), nullable=True)

    variant: Mapped[Variant] = relationship("Variant", back_populates="skus")
    price_tables_skus: Mapped[list[PriceTableSku]] = relationship(
        "PriceTableSku",
        back_populates="sku",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PriceTableSku.id",
    )

    __table_args__ = (Index("ix_catalog_sku_variant", "variant_id"),)


class PriceTableSku(Base):
    __tablename__ = "catalog_price_table_sku"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sku_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("catalog_sku.id", ondelete="CASCADE"),
        nullable=False,
    )
    price_table_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("catalog_price_table.id"),
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    sku: Mapped[Sku] = relationship("Sku", back_populates="price_tables_skus")
    price_table: Mapped[PriceTable] = relationship("PriceTable")

    __table_args__ = (Index("ix_catalog_price_table_sku_sku", "sku_id", "price_table_id"),)
