"""create catalog tables

Revision ID: 202610190001
Revises:
Create Date: 2026-10-19 00:00:00
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa


revision: str = "202610190001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "catalog_brand",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "catalog_category",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "catalog_subcategory",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(["category_id"], ["catalog_category.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("category_id", "name", name="uq_catalog_subcategory_name"),
    )
    op.create_table(
        "catalog_price_table",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "catalog_product",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("reference", sa.String(length=128), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("gender", sa.String(length=32), nullable=False),
        sa.Column("prompt_delivery", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.Column("erp_id", sa.String(length=64), nullable=True),
        sa.Column("brand_id", sa.Integer(), nullable=False),
        sa.Column("deadline_id", sa.Integer(), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("subcategory_id", sa.Integer(), nullable=True),
        sa.Column("category_order", sa.Integer(), nullable=True),
        sa.Column("composition_data", sa.Text(), nullable=True),
        sa.Column("technical_information", sa.Text(), nullable=True),
        sa.Column("open_grid", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("ipi", sa.Numeric(12, 2), nullable=True),
        sa.Column("is_discontinued", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("is_launch", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("is_visible", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("colection", sa.String(length=128), nullable=True),
        sa.Column("st", sa.Numeric(12, 2), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["brand_id"], ["catalog_brand.id"]),
        sa.ForeignKeyConstraint(["category_id"], ["catalog_category.id"]),
        sa.ForeignKeyConstraint(["subcategory_id"], ["catalog_subcategory.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "reference", name="uq_catalog_product_reference"),
    )
    op.create_index(
        "ix_catalog_product_active",
        "catalog_product",
        ["deleted_at", "brand_id", "category_id"],
        unique=False,
    )
    op.create_table(
        "catalog_variant",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("hex_code", sa.String(length=16), nullable=True),
        sa.ForeignKeyConstraint(["product_id"], ["catalog_product.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_catalog_variant_product", "catalog_variant", ["product_id"], unique=False)
    op.create_table(
        "catalog_sku",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("variant_id", sa.Integer(), nullable=False),
        sa.Column("size", sa.String(length=32), nullable=False),
        sa.Column("stock", sa.Integer(), server_default="0", nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("min_quantity", sa.Integer(), nullable=True),
        sa.Column("multiple_quantity", sa.Integer(), server_default="1", nullable=False),
        sa.Column("erp_id", sa.String(length=64), nullable=True),
        sa.Column("cest", sa.String(length=16), nullable=True),
        sa.Column("ncm", sa.String(length=16), nullable=True),
        sa.Column("height", sa.Numeric(10, 3), nullable=True),
        sa.Column("length", sa.Numeric(10, 3), nullable=True),
        sa.Column("weight", sa.Numeric(10, 3), nullable=True),
        sa.Column("width", sa.Numeric(10, 3), nullable=True),
        sa.ForeignKeyConstraint(["variant_id"], ["catalog_variant.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_index("ix_catalog_sku_variant", "catalog_sku", ["variant_id"], unique=False)
    op.create_table(
        "catalog_price_table_sku",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sku_id", sa.Integer(), nullable=False),
        sa.Column("price_table_id", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=False),
        sa.ForeignKeyConstraint(["sku_id"], ["catalog_sku.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["price_table_id"], ["catalog_price_table.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_catalog_price_table_sku_sku",
        "catalog_price_table_sku",
        ["sku_id", "price_table_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_catalog_price_table_sku_sku", table_name="catalog_price_table_sku")
    op.drop_table("catalog_price_table_sku")
    op.drop_index("ix_catalog_sku_variant", table_name="catalog_sku")
    op.drop_table("catalog_sku")
    op.drop_index("ix_catalog_variant_product", table_name="catalog_variant")
    op.drop_table("catalog_variant")
    op.drop_index("ix_catalog_product_active", table_name="catalog_product")
    op.drop_table("catalog_product")
    op.drop_table("catalog_price_table")
    op.drop_table("catalog_subcategory")
    op.drop_table("catalog_category")
    op.drop_table("catalog_brand")
