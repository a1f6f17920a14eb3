from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

from catalog_api.utils.validation import INTEGER_COLUMN_MAX


ProductGender = Literal["MALE", "FEMALE", "UNISEX", "KIDS"]
ProductType = Literal["CLOTHING", "FOOTWEAR", "ACCESSORY"]

PRODUCT_GENDERS: tuple[str, ...] = get_args(ProductGender)
PRODUCT_TYPES: tuple[str, ...] = get_args(ProductType)

# Numeric(12, 2) and Numeric(10, 3) integer-part limits
MONEY_MAX = Decimal("9999999999.99")
MEASURE_MAX = Decimal("9999999.999")


class PriceTableSkuCreate(BaseModel):
    price: Decimal = Field(ge=Decimal("0"), le=MONEY_MAX)
    price_table_id: int = Field(gt=0, le=INTEGER_COLUMN_MAX)


class SkuCreate(BaseModel):
    size: str = Field(min_length=1, max_length=32)
    stock: int = Field(default=0, ge=0, le=INTEGER_COLUMN_MAX)
    price: Decimal = Field(ge=Decimal("0"), le=MONEY_MAX)
    code: str = Field(min_length=1, max_length=64)
    min_quantity: int | None = Field(default=None, ge=0, le=INTEGER_COLUMN_MAX)
    multiple_quantity: int = Field(default=1, ge=1, le=INTEGER_COLUMN_MAX)
    erp_id: str | None = Field(default=None, max_length=64)
    cest: str | None = Field(default=None, max_length=16)
    ncm: str | None = Field(default=None, max_length=16)
    height: Decimal | None = Field(default=None, le=MEASURE_MAX)
    length: Decimal | None = Field(default=None, le=MEASURE_MAX)
    weight: Decimal | None = Field(default=None, le=MEASURE_MAX)
    width: Decimal | None = Field(default=None, le=MEASURE_MAX)
    price_tables_skus: list[PriceTableSkuCreate] = Field(default_factory=list)


class VariantCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    hex_code: str | None = Field(default=None, max_length=16)
    skus: list[SkuCreate] = Field(default_factory=list)


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    reference: str = Field(min_length=1, max_length=128)
    type: ProductType
    gender: ProductGender
    prompt_delivery: bool = False
    description: str | None = None
    company_id: int = Field(gt=0, le=INTEGER_COLUMN_MAX)
    erp_id: str | None = Field(default=None, max_length=64)
    brand_id: int = Field(gt=0, le=INTEGER_COLUMN_MAX)
    deadline_id: int | None = Field(default=None, le=INTEGER_COLUMN_MAX)
    category_id: int = Field(gt=0, le=INTEGER_COLUMN_MAX)
    subcategory_id: int | None = Field(default=None, gt=0, le=INTEGER_COLUMN_MAX)
    category_order: int | None = Field(default=None, le=INTEGER_COLUMN_MAX)
    composition_data: str | None = None
    technical_information: str | None = None
    open_grid: bool = False
    ipi: Decimal | None = Field(default=None, le=MONEY_MAX)
    is_discontinued: bool = False
    is_launch: bool = False
    is_visible: bool = True
    colection: str | None = Field(default=None, max_length=128)
    st: Decimal | None = Field(default=None, le=MONEY_MAX)
    variants: list[VariantCreate] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    """Top-level scalar fields only; nested variants are not reconciled on update."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    reference: str | None = Field(default=None, min_length=1, max_length=128)
    type: ProductType | None = None
    gender: ProductGender | None = None
    prompt_delivery: bool | None = None
    description: str | None = None
    company_id: int | None = Field(default=None, gt=0, le=INTEGER_COLUMN_MAX)
    erp_id: str | None = Field(default=None, max_length=64)
    brand_id: int | None = Field(default=None, gt=0, le=INTEGER_COLUMN_MAX)
    deadline_id: int | None = Field(default=None, le=INTEGER_COLUMN_MAX)
    category_id: int | None = Field(default=None, gt=0, le=INTEGER_COLUMN_MAX)
    subcategory_id: int | None = Field(default=None, gt=0, le=INTEGER_COLUMN_MAX)
    category_order: int | None = Field(default=None, le=INTEGER_COLUMN_MAX)
    composition_data: str | None = None
    technical_information: str | None = None
    open_grid: bool | None = None
    ipi: Decimal | None = Field(default=None, le=MONEY_MAX)
    is_discontinued: bool | None = None
    is_launch: bool | None = None
    is_visible: bool | None = None
    colection: str | None = Field(default=None, max_length=128)
    st: Decimal | None = Field(default=None, le=MONEY_MAX)


class BrandRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class SubcategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int
    name: str


class PriceTableSkuRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sku_id: int
    price_table_id: int
    price: Decimal


class SkuRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    variant_id: int
    size: str
    stock: int
    price: Decimal
    code: str
    min_quantity: int | None
    multiple_quantity: int
    erp_id: str | None
    cest: str | None
    ncm: str | None
    height: Decimal | None
    length: Decimal | None
    weight: Decimal | None
    width: Decimal | None
    price_tables_skus: list[PriceTableSkuRead]


class VariantRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    name: str
    hex_code: str | None
    skus: list[SkuRead]


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    reference: str
    type: str
    gender: str
    prompt_delivery: bool
    description: str | None
    company_id: int
    erp_id: str | None
    brand_id: int
    deadline_id: int | None
    category_id: int
    subcategory_id: int | None
    category_order: int | None
    composition_data: str | None
    technical_information: str | None
    open_grid: bool
    ipi: Decimal | None
    is_discontinued: bool
    is_launch: bool
    is_visible: bool
    colection: str | None
    st: Decimal | None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None
    brand: BrandRead | None = None
    category: CategoryRead | None = None
    subcategory: SubcategoryRead | None = None
    variants: list[VariantRead]


class ProductDeleteRead(BaseModel):
    status: Literal["success"] = "success"
    message: str
    product: ProductRead


class LookupCount(BaseModel):
    id: int
    name: str
    quantity: int


class CategoryCount(LookupCount):
    subcategories: list[LookupCount]


class GroupCount(BaseModel):
    name: str
    quantity: int


class PromptDeliveryCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    true_count: int = Field(default=0, alias="true")
    false_count: int = Field(default=0, alias="false")


class ProductFiltersRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    brands: list[LookupCount]
    categories: list[CategoryCount]
    genders: list[GroupCount]
    types: list[GroupCount]
    prompt_delivery: PromptDeliveryCount = Field(alias="promptDelivery")
