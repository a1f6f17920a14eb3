from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from catalog_api.business.catalog.filters import InvalidFilterError, ProductListFilters, build_product_filters
from catalog_api.business.catalog.schemas import (
    ProductCreate,
    ProductDeleteRead,
    ProductFiltersRead,
    ProductRead,
    ProductUpdate,
)
from catalog_api.business.catalog.service import ProductService
from catalog_api.core.database import get_db
from catalog_api.utils.validation import fits_integer_column, is_positive_integer, parse_int


router = APIRouter(prefix="/api/products", tags=["catalog.products"])


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def get_product_filters(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    brand: str | None = Query(default=None),
    category: str | None = Query(default=None),
    gender: str | None = Query(default=None),
    prompt_delivery: str | None = Query(default=None, alias="promptDelivery"),
    product_type: str | None = Query(default=None, alias="type"),
) -> ProductListFilters:
    try:
        return build_product_filters(
            {
                "page": page,
                "limit": limit,
                "brand": brand,
                "category": category,
                "gender": gender,
                "promptDelivery": prompt_delivery,
                "type": product_type,
            }
        )
    except InvalidFilterError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _parse_product_id(raw: str) -> int:
    product_id = parse_int(raw)
    if product_id is None or not is_positive_integer(product_id) or not fits_integer_column(product_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid product id")
    return product_id


@router.get("/filters", response_model=ProductFiltersRead, response_model_by_alias=True)
def get_filters(
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
) -> ProductFiltersRead:
    return service.get_product_filters(db)


@router.get("/count", response_model=int)
def count_products(
    filters: ProductListFilters = Depends(get_product_filters),
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
) -> int:
    return service.count_products(db, filters)


@router.get("/deleted", response_model=list[ProductRead])
def list_deleted_products(
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
) -> list[ProductRead]:
    return service.list_deleted_products(db)


@router.get("/deleted/{product_id}", response_model=ProductRead)
def get_deleted_product(
    product_id: str,
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    return service.get_deleted_product(db, _parse_product_id(product_id))


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: str,
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    return service.get_product(db, _parse_product_id(product_id))


@router.get("", response_model=list[ProductRead])
def list_products(
    filters: ProductListFilters = Depends(get_product_filters),
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
) -> list[ProductRead]:
    return service.list_products(db, filters)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    return service.create_product(db, payload)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    return service.update_product(db, _parse_product_id(product_id), payload)


@router.delete("/{product_id}", response_model=ProductDeleteRead)
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
) -> ProductDeleteRead:
    return service.delete_product(db, _parse_product_id(product_id))
